"""Module entrypoint for ``python -m attrtree``.

All argument parsing and command replay happen in ``attrtree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

"""Command-line front door for attrtree.

Loads a JSON tree file, replays scripted commands against a ``TreeStore``,
and prints the resulting visible rows (or records with ``--json``).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import config
from .store import CommandResult, SelectionMode, TreeStore
from .tree_model import TreeStructureError, build_visible_rows, format_tree_row, tree_to_records


class _AppendCommand(argparse.Action):
    """Collect scripted commands in command-line order across flags."""

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        commands = list(getattr(namespace, self.dest, None) or [])
        commands.append((self.const, values))
        setattr(namespace, self.dest, commands)


def _move_spec(value: str) -> tuple[str, str, int]:
    """argparse type for ``LEAF:FOLDER:INDEX`` move specs."""
    parts = value.split(":")
    if len(parts) != 3 or not parts[0] or not parts[1]:
        raise argparse.ArgumentTypeError(f"expected LEAF:FOLDER:INDEX, got {value!r}")
    try:
        index = int(parts[2])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid index in move spec: {value!r}") from exc
    return parts[0], parts[1], index


def _load_records(path: Path) -> list[object]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Cannot read tree file {path}: {exc}") from exc
    if not isinstance(data, list):
        raise SystemExit(f"Tree file must hold a JSON list of folders: {path}")
    return data


def _run_move(store: TreeStore, leaf_id: str, folder_id: str, index: int) -> CommandResult:
    """Drive one full drag gesture: begin, hover, drop."""
    started = store.begin_drag(leaf_id)
    if not started.ok:
        return started
    store.update_drag_target(folder_id, index)
    return store.commit_drag()


def apply_commands(store: TreeStore, commands: list[tuple[str, object]]) -> None:
    """Replay scripted commands in order, exiting on the first rejection."""
    for name, value in commands:
        if name == "expand":
            result = store.toggle_expand(value)
        elif name == "select":
            result = store.toggle_select(value)
        else:
            assert isinstance(value, tuple)
            result = _run_move(store, *value)
        if not result.ok:
            assert result.error is not None
            raise SystemExit(f"{name} {value!r} rejected ({result.error.value}): {result.message}")


def render_store(store: TreeStore) -> str:
    """Render visible rows of the store's current snapshot as text."""
    snapshot = store.snapshot()
    dragging_id = snapshot.drag.leaf_id if snapshot.drag is not None else None
    rows = build_visible_rows(snapshot.tree, snapshot.expanded)
    lines = [format_tree_row(row, snapshot.expanded, snapshot.selected, dragging_id) for row in rows]
    return "".join(f"{line}\n" for line in lines)


def render_json(store: TreeStore) -> str:
    snapshot = store.snapshot()
    payload = {
        "tree": tree_to_records(snapshot.tree),
        "expanded": sorted(snapshot.expanded),
        "selected": sorted(snapshot.selected),
        "selection_mode": snapshot.selection_mode.value,
    }
    return json.dumps(payload, indent=2) + "\n"


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, replay commands, and print the resulting tree."""
    parser = argparse.ArgumentParser(
        description="Replay expand/select/move commands on an attribute tree and print the result."
    )
    parser.add_argument("path", help="JSON file holding a list of folder records.")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in SelectionMode],
        default=None,
        help="Selection mode (default: configured mode, else multi).",
    )
    parser.add_argument("--save-mode", action="store_true", help="Persist --mode as the default selection mode.")
    parser.add_argument(
        "--expand",
        dest="commands",
        action=_AppendCommand,
        const="expand",
        metavar="FOLDER",
        help="Toggle expansion of FOLDER.",
    )
    parser.add_argument(
        "--select",
        dest="commands",
        action=_AppendCommand,
        const="select",
        metavar="LEAF",
        help="Toggle selection of LEAF.",
    )
    parser.add_argument(
        "--move",
        dest="commands",
        action=_AppendCommand,
        const="move",
        type=_move_spec,
        metavar="LEAF:FOLDER:INDEX",
        help="Drag LEAF and drop it into FOLDER at INDEX.",
    )
    parser.add_argument("--expand-all", action="store_true", help="Expand every folder before printing.")
    parser.add_argument("--json", action="store_true", help="Print records and state as JSON instead of rows.")
    parser.add_argument("--log-level", choices=config.LOG_LEVELS, default=None, help="Logging level for stderr.")
    parser.add_argument(
        "--save-log-level",
        action="store_true",
        help="Persist --log-level as the default logging level.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level or config.load_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    mode = SelectionMode(args.mode) if args.mode is not None else config.load_selection_mode()
    if args.save_mode and args.mode is not None:
        config.save_selection_mode(mode)
    if args.save_log_level and args.log_level is not None:
        config.save_log_level(args.log_level)

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    try:
        store = TreeStore.from_records(_load_records(path), selection_mode=mode)
    except TreeStructureError as exc:
        raise SystemExit(f"Invalid tree in {path}: {exc}") from exc

    apply_commands(store, args.commands or [])
    if args.expand_all:
        for folder_id in sorted(store.index.folder_ids()):
            if not store.is_expanded(folder_id):
                store.toggle_expand(folder_id)

    sys.stdout.write(render_json(store) if args.json else render_store(store))


if __name__ == "__main__":
    main()

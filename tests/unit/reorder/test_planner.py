"""Move-planning tests: validation order, placement among locked items, sharing."""

from __future__ import annotations

import unittest

from attrtree.errors import ErrorKind
from attrtree.reorder import (
    DragSource,
    DropTarget,
    PlanAccepted,
    PlanRejected,
    insertion_index_after_movable,
    movable_count_before,
    pinned_order,
    plan,
)
from attrtree.tree_model import AttributeLeaf, Folder, Tree, build_index, folder_at_path, iter_nodes


def _leaf(leaf_id: str, locked: bool = False) -> AttributeLeaf:
    return AttributeLeaf(leaf_id, leaf_id.upper(), leaf_id, locked=locked)


def _tree() -> Tree:
    return Tree(
        (
            Folder("F1", "One", (_leaf("lockedA", True), _leaf("leafX"), _leaf("leafY"), _leaf("lockedB", True))),
            Folder("F2", "Two", (_leaf("leafP"), _leaf("lockedC", True), _leaf("leafQ"))),
            Folder("F3", "Empty"),
            Folder("F4", "Four", (Folder("S", "Sub", (_leaf("leafS1"),)), _leaf("leafZ"))),
        )
    )


def _ids(tree: Tree, folder_id: str) -> list[str]:
    folder = build_index(tree).folder(folder_id)
    assert folder is not None
    return [child.id for child in folder.children]


def _accepted(result: object) -> PlanAccepted:
    assert isinstance(result, PlanAccepted), result
    return result


class PlanPlacementTests(unittest.TestCase):
    def test_drop_at_front_lands_before_leading_locked_item(self) -> None:
        tree = _tree()

        result = _accepted(plan(tree, DragSource("leafY", "F1", 2), DropTarget("F1", 0)))

        self.assertEqual(_ids(result.tree, "F1"), ["leafY", "lockedA", "leafX", "lockedB"])
        self.assertEqual((result.to_parent_id, result.to_index), ("F1", 0))
        self.assertFalse(result.noop)

    def test_drop_between_locked_and_first_unlocked_resolves_to_front(self) -> None:
        result = _accepted(plan(_tree(), DragSource("leafY", "F1", 2), DropTarget("F1", 1)))

        self.assertEqual(_ids(result.tree, "F1"), ["leafY", "lockedA", "leafX", "lockedB"])

    def test_move_down_within_folder_stays_next_to_unlocked_neighbor(self) -> None:
        result = _accepted(plan(_tree(), DragSource("leafX", "F1", 1), DropTarget("F1", 4)))

        self.assertEqual(_ids(result.tree, "F1"), ["lockedA", "leafY", "leafX", "lockedB"])
        self.assertEqual(result.to_index, 2)

    def test_cross_folder_drop_after_locked_item_sticks_to_unlocked_neighbor(self) -> None:
        tree = _tree()

        result = _accepted(plan(tree, DragSource("leafX", "F1", 1), DropTarget("F2", 2)))

        self.assertEqual(_ids(result.tree, "F2"), ["leafP", "leafX", "lockedC", "leafQ"])
        self.assertEqual(_ids(result.tree, "F1"), ["lockedA", "leafY", "lockedB"])
        self.assertEqual((result.from_parent_id, result.from_index), ("F1", 1))
        self.assertEqual((result.to_parent_id, result.to_index), ("F2", 1))

    def test_cross_folder_append_at_end(self) -> None:
        result = _accepted(plan(_tree(), DragSource("leafX", "F1", 1), DropTarget("F2", 3)))

        self.assertEqual(_ids(result.tree, "F2"), ["leafP", "lockedC", "leafQ", "leafX"])
        self.assertEqual(result.to_index, 3)

    def test_empty_folder_accepts_drop_at_index_zero(self) -> None:
        result = _accepted(plan(_tree(), DragSource("leafX", "F1", 1), DropTarget("F3", 0)))

        self.assertEqual(_ids(result.tree, "F3"), ["leafX"])

    def test_nested_folder_is_pinned_like_locked_items(self) -> None:
        result = _accepted(plan(_tree(), DragSource("leafX", "F1", 1), DropTarget("F4", 1)))

        self.assertEqual(_ids(result.tree, "F4"), ["leafX", "S", "leafZ"])

    def test_drop_into_nested_folder_rebuilds_only_its_branch(self) -> None:
        tree = _tree()

        result = _accepted(plan(tree, DragSource("leafX", "F1", 1), DropTarget("S", 1)))

        self.assertEqual(_ids(result.tree, "S"), ["leafS1", "leafX"])
        self.assertIs(result.tree.folders[1], tree.folders[1])
        self.assertIs(result.tree.folders[2], tree.folders[2])
        self.assertIs(result.tree.folders[3].children[1], tree.folders[3].children[1])

    def test_leaf_moved_out_of_nested_folder_into_its_parent_appears_once(self) -> None:
        tree = _tree()

        result = _accepted(plan(tree, DragSource("leafS1", "S", 0), DropTarget("F4", 2)))

        self.assertEqual(_ids(result.tree, "F4"), ["S", "leafZ", "leafS1"])
        self.assertEqual(_ids(result.tree, "S"), [])
        self.assertEqual([node.id for node, _ in iter_nodes(result.tree)].count("leafS1"), 1)
        self.assertEqual(build_index(result.tree).locations["leafS1"].folder_path, ("F4",))
        self.assertEqual((result.to_parent_id, result.to_index), ("F4", 2))

    def test_leaf_moved_from_nested_folder_to_front_of_parent(self) -> None:
        result = _accepted(plan(_tree(), DragSource("leafS1", "S", 0), DropTarget("F4", 0)))

        self.assertEqual(_ids(result.tree, "F4"), ["leafS1", "S", "leafZ"])
        self.assertEqual(_ids(result.tree, "S"), [])

    def test_leaf_moved_from_parent_into_nested_folder(self) -> None:
        result = _accepted(plan(_tree(), DragSource("leafZ", "F4", 1), DropTarget("S", 0)))

        self.assertEqual(_ids(result.tree, "S"), ["leafZ", "leafS1"])
        self.assertEqual(_ids(result.tree, "F4"), ["S"])
        self.assertEqual([node.id for node, _ in iter_nodes(result.tree)].count("leafZ"), 1)

    def test_locked_order_is_preserved_for_every_folder(self) -> None:
        tree = _tree()
        moves = [
            (DragSource("leafX", "F1", 1), DropTarget("F2", 1)),
            (DragSource("leafY", "F1", 2), DropTarget("F1", 0)),
            (DragSource("leafQ", "F2", 2), DropTarget("F1", 4)),
        ]
        for source, target in moves:
            result = _accepted(plan(tree, source, target))
            for before, after in zip(tree.folders, result.tree.folders):
                self.assertEqual(pinned_order(before), pinned_order(after))

    def test_input_tree_is_never_mutated(self) -> None:
        tree = _tree()
        before = _ids(tree, "F1")

        plan(tree, DragSource("leafY", "F1", 2), DropTarget("F2", 0))

        self.assertEqual(_ids(tree, "F1"), before)


class PlanNoopTests(unittest.TestCase):
    def test_drop_on_own_position_returns_input_tree(self) -> None:
        tree = _tree()
        for index in (1, 2):
            with self.subTest(index=index):
                result = _accepted(plan(tree, DragSource("leafX", "F1", 1), DropTarget("F1", index)))
                self.assertIs(result.tree, tree)
                self.assertTrue(result.noop)
                self.assertEqual(result.to_index, 1)

    def test_leaf_wedged_between_locked_items_can_stay_put(self) -> None:
        tree = Tree((Folder("F", "F", (_leaf("L1", True), _leaf("x"), _leaf("L2", True))),))

        result = _accepted(plan(tree, DragSource("x", "F", 1), DropTarget("F", 1)))

        self.assertIs(result.tree, tree)


class PlanRejectionTests(unittest.TestCase):
    def _rejected(self, source: DragSource, target: DropTarget) -> PlanRejected:
        result = plan(_tree(), source, target)
        self.assertIsInstance(result, PlanRejected)
        assert isinstance(result, PlanRejected)
        self.assertFalse(result.ok)
        return result

    def test_unknown_or_leaf_target_is_target_not_found(self) -> None:
        for parent_id in ("missing", "leafP", None, ["F1"]):
            with self.subTest(parent_id=parent_id):
                result = self._rejected(DragSource("leafX", "F1", 1), DropTarget(parent_id, 0))
                self.assertEqual(result.reason, ErrorKind.TARGET_NOT_FOUND)

    def test_out_of_range_or_non_integer_index_is_invalid(self) -> None:
        for index in (-1, 4, True, "0", 1.0):
            with self.subTest(index=index):
                result = self._rejected(DragSource("leafX", "F1", 1), DropTarget("F2", index))
                self.assertEqual(result.reason, ErrorKind.INVALID_INDEX)
        result = self._rejected(DragSource("leafX", "F1", 1), DropTarget("F3", 1))
        self.assertEqual(result.reason, ErrorKind.INVALID_INDEX)

    def test_locked_source_is_rejected(self) -> None:
        result = self._rejected(DragSource("lockedA", "F1", 0), DropTarget("F2", 0))

        self.assertEqual(result.reason, ErrorKind.SOURCE_LOCKED)

    def test_target_is_checked_before_source(self) -> None:
        result = self._rejected(DragSource("lockedA", "F1", 0), DropTarget("missing", 0))

        self.assertEqual(result.reason, ErrorKind.TARGET_NOT_FOUND)

    def test_stale_or_non_leaf_source_is_source_not_found(self) -> None:
        sources = [
            DragSource("leafX", "F1", 2),
            DragSource("leafX", "F2", 1),
            DragSource("S", "F4", 0),
            DragSource("leafX", "F1", 9),
        ]
        for source in sources:
            with self.subTest(source=source):
                result = self._rejected(source, DropTarget("F3", 0))
                self.assertEqual(result.reason, ErrorKind.SOURCE_NOT_FOUND)


class PlacementHelperTests(unittest.TestCase):
    def test_movable_count_before_ignores_pinned_and_moving_leaf(self) -> None:
        children = _tree().folders[0].children

        self.assertEqual(movable_count_before(children, 4, "leafX"), 1)
        self.assertEqual(movable_count_before(children, 4, "other"), 2)
        self.assertEqual(movable_count_before(children, 1, "other"), 0)

    def test_insertion_index_after_movable_clamps_to_last_movable(self) -> None:
        children = (_leaf("L", True), _leaf("a"), _leaf("M", True), _leaf("b"), _leaf("N", True))

        self.assertEqual(insertion_index_after_movable(children, 0), 0)
        self.assertEqual(insertion_index_after_movable(children, 1), 2)
        self.assertEqual(insertion_index_after_movable(children, 2), 4)
        self.assertEqual(insertion_index_after_movable(children, 5), 4)
        self.assertEqual(insertion_index_after_movable((), 3), 0)

    def test_folder_at_path_walks_nested_folders(self) -> None:
        tree = _tree()

        self.assertEqual(folder_at_path(tree, ("F4", "S")).name, "Sub")
        self.assertIs(folder_at_path(tree, ("F2",)), tree.folders[1])
        with self.assertRaises(ValueError):
            folder_at_path(tree, ("F4", "leafZ"))
        with self.assertRaises(ValueError):
            folder_at_path(tree, ())


if __name__ == "__main__":
    unittest.main()

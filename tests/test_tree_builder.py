"""Tests for tree_builder module."""

import logging

from CineMedia.folder_index import FolderIndex
from CineMedia.models import FolderRecord, ImageRecord, TreeNode
from CineMedia.node_locator import locate
from CineMedia.tree_builder import assign_images, audit_tree, build_tree


def _folder(id: int, name: str, parent_id: int | None = None) -> FolderRecord:
    return FolderRecord(id=id, name=name, parent_id=parent_id)


def _image(id: int, folder_name: str | None = None) -> ImageRecord:
    return ImageRecord(id=id, name=f"{id}.png", folder_name=folder_name)


class TestBuildSkeleton:
    def test_empty_inputs_have_root(self):
        tree = build_tree([], [])
        assert "root" in tree.children
        assert tree.children["root"].children == {}
        assert tree.children["root"].items == []

    def test_top_level_folders_under_root(self):
        folders = [_folder(1, "Posters"), _folder(2, "Banners")]
        root = build_tree([], folders).children["root"]
        assert set(root.children) == {"Posters", "Banners"}

    def test_nested_folder(self):
        folders = [_folder(1, "A"), _folder(2, "B", parent_id=1)]
        root = build_tree([], folders).children["root"]
        assert "B" in root.children["A"].children
        assert "B" not in root.children

    def test_deep_nesting_any_order(self):
        folders = [
            _folder(3, "C", parent_id=2),
            _folder(1, "A"),
            _folder(2, "B", parent_id=1),
        ]
        root = build_tree([], folders).children["root"]
        assert "C" in root.children["A"].children["B"].children

    def test_zero_parent_id_is_top_level(self):
        root = build_tree([], [_folder(1, "Zero", parent_id=0)]).children["root"]
        assert "Zero" in root.children

    def test_folder_named_root_not_duplicated(self):
        folders = [_folder(1, "root"), _folder(2, "Posters")]
        root = build_tree([], folders).children["root"]
        assert "root" not in root.children
        assert "Posters" in root.children

    def test_dangling_parent_not_in_skeleton(self):
        root = build_tree([], [_folder(5, "Lost", parent_id=99)]).children["root"]
        assert root.children == {}

    def test_duplicate_names_terminate(self):
        folders = [_folder(1, "X"), _folder(2, "X", parent_id=2)]
        root = build_tree([], folders).children["root"]
        assert list(root.children) == ["X"]
        assert root.children["X"].children == {}


class TestAssignImages:
    def test_single_folder_scenario(self):
        folders = [_folder(1, "Posters")]
        tree = build_tree([_image(10, "Posters")], folders)
        items = locate(tree, ["root", "Posters"]).items
        assert [img.id for img in items] == [10]

    def test_nested_scenario(self):
        folders = [_folder(1, "A"), _folder(2, "B", parent_id=1)]
        tree = build_tree([_image(10, "B")], folders)
        root = tree.children["root"]
        assert [img.id for img in root.children["A"].children["B"].items] == [10]
        assert root.children["A"].items == []
        assert "B" not in root.children

    def test_root_and_untagged_images(self):
        tree = build_tree([_image(1, "root"), _image(2, None)], [])
        assert [img.id for img in tree.children["root"].items] == [1, 2]

    def test_ghost_folder_lands_under_root(self):
        tree = build_tree([_image(10, "GhostFolder")], [])
        root = tree.children["root"]
        assert [img.id for img in root.children["GhostFolder"].items] == [10]
        assert root.items == []

    def test_dangling_parent_image_at_root_level(self):
        tree = build_tree([_image(7, "Lost")], [_folder(5, "Lost", parent_id=99)])
        assert [img.id for img in tree.children["root"].children["Lost"].items] == [7]

    def test_cycle_terminates(self):
        folders = [_folder(1, "A", parent_id=2), _folder(2, "B", parent_id=1)]
        tree = build_tree([_image(10, "A")], folders)
        node = locate(tree, ["root", "B", "A"])
        assert [img.id for img in node.items] == [10]

    def test_input_order_kept(self):
        folders = [_folder(1, "Posters")]
        images = [_image(3, "Posters"), _image(1, "Posters"), _image(2, "Posters")]
        items = locate(build_tree(images, folders), ["root", "Posters"]).items
        assert [img.id for img in items] == [3, 1, 2]

    def test_image_appears_only_once(self):
        folders = [_folder(1, "A"), _folder(2, "B", parent_id=1)]
        tree = build_tree([_image(10, "B")], folders)

        found = []

        def _walk(node: TreeNode) -> None:
            found.extend(img.id for img in node.items or [])
            for child in node.children.values():
                _walk(child)

        _walk(tree)
        assert found == [10]

    def test_assign_creates_missing_items_list(self):
        tree = TreeNode()
        assign_images(tree, [_image(1)], FolderIndex([]))
        assert [img.id for img in tree.children["root"].items] == [1]


class TestPurity:
    def test_idempotent(self):
        folders = [_folder(1, "A"), _folder(2, "B", parent_id=1)]
        images = [_image(10, "B"), _image(11)]
        assert build_tree(images, folders) == build_tree(images, folders)

    def test_no_aliasing_of_caller_lists(self):
        folders = [_folder(1, "A")]
        images = [_image(10, "A")]
        tree = build_tree(images, folders)

        images.append(_image(11, "A"))
        folders.append(_folder(2, "B"))

        root = tree.children["root"]
        assert [img.id for img in root.children["A"].items] == [10]
        assert "B" not in root.children
        assert root.children["A"].items is not images

    def test_accepts_generators(self):
        folders = (f for f in [_folder(1, "A"), _folder(2, "B", parent_id=1)])
        tree = build_tree(iter([_image(10, "B")]), folders)
        assert locate(tree, ["root", "A", "B"]).count == 1


class TestAuditTree:
    def test_clean(self):
        folders = [_folder(1, "A"), _folder(2, "B", parent_id=1)]
        audit = audit_tree([_image(1, "B"), _image(2)], folders)
        assert audit.is_clean

    def test_orphans_and_cycles(self):
        folders = [
            _folder(1, "A"),
            _folder(2, "Lost", parent_id=99),
            _folder(3, "C1", parent_id=4),
            _folder(4, "C2", parent_id=3),
        ]
        audit = audit_tree([], folders)
        assert audit.orphan_folders == ["Lost", "C1", "C2"]

    def test_unknown_image_folders_deduplicated(self, caplog):
        with caplog.at_level(logging.WARNING, logger="CineMedia.tree_builder"):
            audit = audit_tree([_image(1, "Ghost"), _image(2, "Ghost")], [])
        assert audit.unknown_image_folders == ["Ghost"]
        assert not audit.is_clean
        assert "Ghost" in caplog.text

"""
pytest suite for the path grouper.

Fixtures
--------
BUCKET_ENTRIES   file1.md, dir1/{file2,file3}.md, dir2/file4.md, dir2/subdir/file5.md
TREE_ENTRIES     root.md, folder1/file1.md, folder2/file2.md, folder2/subfolder/file3.md
"""

import pytest

from scan_md.components.grouping import ROOT_BUCKET, group, group_flat, group_tree
from scan_md.components.node import Entry, GroupingMode, Node, NodeType
from scan_md.errors import InvalidConfiguration


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def entries_for(*paths: str) -> list[Entry]:
    return [Entry(path=p, title=p.rsplit("/", 1)[-1].upper()) for p in paths]


def leaves(node: Node) -> list[Node]:
    if node.children is None:
        return [node]
    return [leaf for child in node.children for leaf in leaves(child)]


def count_leaves(nodes: list[Node]) -> int:
    return sum(len(leaves(n)) for n in nodes)


def flatten_buckets(value) -> list[Entry]:
    if isinstance(value, list):
        return list(value)
    return [e for v in value.values() for e in flatten_buckets(v)]


def by_path(nodes: list[Node]) -> dict[str, Node]:
    return {n.path: n for n in nodes}


BUCKET_ENTRIES = [
    Entry(path="file1.md", title="File 1"),
    Entry(path="dir1/file2.md", title="File 2"),
    Entry(path="dir1/file3.md", title="File 3"),
    Entry(path="dir2/file4.md", title="File 4"),
    Entry(path="dir2/subdir/file5.md", title="File 5"),
]

TREE_ENTRIES = entries_for(
    "root.md",
    "folder1/file1.md",
    "folder2/file2.md",
    "folder2/subfolder/file3.md",
)


# ---------------------------------------------------------------------------
# Flat buckets
# ---------------------------------------------------------------------------

class TestGroupFlat:
    def test_depth_1_buckets(self):
        grouped = group_flat(BUCKET_ENTRIES, 1)

        assert list(grouped) == [ROOT_BUCKET, "dir1", "dir2"]
        assert len(grouped["_root"]) == 1
        assert len(grouped["dir1"]) == 2
        assert len(grouped["dir2"]) == 2

        assert grouped["_root"][0].title == "File 1"
        assert [e.title for e in grouped["dir1"]] == ["File 2", "File 3"]
        assert [e.title for e in grouped["dir2"]] == ["File 4", "File 5"]

    def test_depth_2_nests_sub_buckets(self):
        grouped = group_flat(BUCKET_ENTRIES, 2)

        assert len(grouped["_root"]) == 1
        assert len(grouped["dir1"]) == 2
        assert isinstance(grouped["dir2"], dict)
        assert len(grouped["dir2"]["subdir"]) == 1
        assert grouped["dir2"]["subdir"][0].title == "File 5"

    def test_depth_2_keeps_direct_entries_under_root_key(self):
        grouped = group_flat(BUCKET_ENTRIES, 2)

        assert list(grouped["dir2"]) == [ROOT_BUCKET, "subdir"]
        assert [e.path for e in grouped["dir2"][ROOT_BUCKET]] == ["dir2/file4.md"]

    def test_depth_caps_nesting(self):
        grouped = group_flat(entries_for("a/b/c/d/e.md", "a/b/x.md"), 2)
        assert [e.path for e in grouped["a"]["b"]] == ["a/b/c/d/e.md", "a/b/x.md"]

    def test_bucket_order_follows_first_appearance(self):
        grouped = group_flat(entries_for("z/1.md", "top.md", "a/2.md", "z/3.md"), 1)
        assert list(grouped) == ["z", ROOT_BUCKET, "a"]

    def test_empty(self):
        assert group_flat([], 1) == {}

    def test_nested_root_directory_keeps_entries(self):
        grouped = group_flat(entries_for("a/y.md", "a/_root/x.md"), 2)
        assert [e.path for e in grouped["a"][ROOT_BUCKET]] == ["a/y.md", "a/_root/x.md"]

    def test_nested_root_directory_with_sub_buckets(self):
        grouped = group_flat(entries_for("a/y.md", "a/_root/deep/x.md", "a/b/z.md"), 3)

        assert list(grouped["a"]) == [ROOT_BUCKET, "b"]
        assert [e.path for e in grouped["a"][ROOT_BUCKET]] == ["a/y.md", "a/_root/deep/x.md"]
        assert [e.path for e in grouped["a"]["b"]] == ["a/b/z.md"]

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_no_entry_lost(self, depth):
        entries = BUCKET_ENTRIES + entries_for(
            "_root/top.md",
            "_root/_root/twice.md",
            "dir1/_root/nested.md",
            "dir1/_root/sub/deeper.md",
            "dir2/subdir/_root/leaf.md",
            "x/y/z/w/far.md",
        )

        grouped = group_flat(entries, depth)

        assert sorted(e.path for e in flatten_buckets(grouped)) == sorted(e.path for e in entries)


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------

class TestGroupTreeDepth1:
    def setup_method(self):
        self.tree = group_tree(TREE_ENTRIES, 1)
        self.top = by_path(self.tree)

    def test_top_level_items(self):
        assert [n.path for n in self.tree] == ["root.md", "folder1", "folder2"]

    def test_root_file_is_leaf(self):
        root = self.top["root.md"]
        assert root.node_type is NodeType.FILE
        assert root.children is None
        assert root.parent == ""
        assert root.title == "ROOT.MD"

    def test_folder1(self):
        folder1 = self.top["folder1"]
        assert folder1.node_type is NodeType.DIRECTORY
        assert folder1.title == "folder1"
        assert folder1.parent == ""
        assert [c.path for c in folder1.children] == ["folder1/file1.md"]
        assert folder1.children[0].parent == "folder1"

    def test_folder2_children_order(self):
        folder2 = self.top["folder2"]
        assert [c.path for c in folder2.children] == ["folder2/file2.md", "folder2/subfolder"]

    def test_subfolder(self):
        subfolder = self.top["folder2"].children[1]
        assert subfolder.title == "subfolder"
        assert subfolder.parent == "folder2"
        assert [c.path for c in subfolder.children] == ["folder2/subfolder/file3.md"]
        assert subfolder.children[0].parent == "folder2/subfolder"

    def test_leaf_count(self):
        assert count_leaves(self.tree) == len(TREE_ENTRIES)


class TestGroupTreeDepthLimit:
    """Directories deeper than the limit are flattened into the deepest node."""

    def test_depth_1_flattens_below_second_level(self):
        tree = group_tree(entries_for("a/b/c/d/deep.md", "a/b/c/other.md"), 1)

        a = tree[0]
        assert a.path == "a"
        assert [c.path for c in a.children] == ["a/b"]
        b = a.children[0]
        assert [c.path for c in b.children] == ["a/b/c/d/deep.md", "a/b/c/other.md"]
        assert all(c.parent == "a/b" for c in b.children)
        assert all(c.node_type is NodeType.FILE for c in b.children)

    def test_depth_2_materialises_three_levels(self):
        tree = group_tree(entries_for("a/b/c/d/deep.md"), 2)

        c = tree[0].children[0].children[0]
        assert c.path == "a/b/c"
        assert [n.path for n in c.children] == ["a/b/c/d/deep.md"]

    def test_large_depth_has_no_effect(self):
        paths = ("x/y/z/file.md", "x/top.md")
        assert group_tree(entries_for(*paths), 50) == group_tree(entries_for(*paths), 3)

    def test_same_segment_in_different_parents_is_distinct(self):
        tree = group_tree(entries_for("dir1/subdir/a.md", "dir2/subdir/b.md"), 5)

        dir1, dir2 = tree
        assert dir1.children[0].path == "dir1/subdir"
        assert dir2.children[0].path == "dir2/subdir"
        assert dir1.children[0] is not dir2.children[0]

    def test_directory_created_once(self):
        tree = group_tree(entries_for("d/a.md", "d/s/b.md", "d/c.md", "d/s/e.md"), 3)

        d = tree[0]
        assert [c.path for c in d.children] == ["d/a.md", "d/s", "d/c.md"]
        assert [c.path for c in d.children[1].children] == ["d/s/b.md", "d/s/e.md"]

    def test_empty(self):
        assert group_tree([], 1) == []

    def test_leaf_count_many_paths(self):
        entries = entries_for(
            "a.md", "b/c.md", "b/d/e.md", "b/d/f/g.md", "h/i/j/k/l.md", "b/m.md"
        )
        for depth in (1, 2, 3, 10):
            assert count_leaves(group_tree(entries, depth)) == len(entries)


# ---------------------------------------------------------------------------
# Dispatch and validation
# ---------------------------------------------------------------------------

class TestGroup:
    def test_none_returns_entries_in_order(self):
        assert group(TREE_ENTRIES, 1, "none") == TREE_ENTRIES

    def test_modes_dispatch(self):
        assert group(BUCKET_ENTRIES, 1, GroupingMode.FLAT) == group_flat(BUCKET_ENTRIES, 1)
        assert group(TREE_ENTRIES, 1, "tree") == group_tree(TREE_ENTRIES, 1)

    def test_idempotent(self):
        assert group(TREE_ENTRIES, 2, "tree") == group(TREE_ENTRIES, 2, "tree")
        assert group(BUCKET_ENTRIES, 2, "flat") == group(BUCKET_ENTRIES, 2, "flat")

    @pytest.mark.parametrize("depth", [0, -1, 1.5, "2", True, None])
    def test_invalid_depth(self, depth):
        with pytest.raises(InvalidConfiguration):
            group(TREE_ENTRIES, depth, "tree")

    def test_invalid_mode(self):
        with pytest.raises(InvalidConfiguration, match="mode must be one of"):
            group(TREE_ENTRIES, 1, "nested")

    def test_empty_input(self):
        assert group([], 1, "flat") == {}
        assert group([], 1, "tree") == []
        assert group([], 1, "none") == []

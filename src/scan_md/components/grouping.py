"""
scan_md/components/grouping.py - Arrange scanned entries by directory.

Two layouts are supported:

  flat   Buckets keyed by leading path segments, nested `depth` levels deep.
         Top-level documents go to the reserved "_root" bucket.

             {"_root": [Entry], "dir1": [Entry, Entry], "dir2": {...}}

  tree   Directory and file Node objects linked through `parent` paths and
         `children` lists. Top-level items form the returned list.

Both are depth-bounded: directories nested deeper than the limit do not get
their own bucket/node, their documents land in the deepest one that does.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Union

from scan_md.components.node import Entry, GroupingMode, Node
from scan_md.errors import InvalidConfiguration

ROOT_BUCKET = "_root"

FlatResult = List[Entry]
GroupedResult = Dict[str, Union[List[Entry], "GroupedResult"]]
TreeResult = List[Node]
ScanResult = Union[FlatResult, GroupedResult, TreeResult]


def validate_depth(depth: object) -> int:
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
        raise InvalidConfiguration(f"depth must be a positive integer, got {depth!r}")
    return depth


def validate_mode(mode: object) -> GroupingMode:
    try:
        return GroupingMode(mode)
    except ValueError as e:
        choices = ", ".join(m.value for m in GroupingMode)
        raise InvalidConfiguration(
            f"mode must be one of {choices}, got {mode!r}"
        ) from e


# ---------------------------------------------------------------------------
# Flat buckets
# ---------------------------------------------------------------------------


class _Bucket:
    """Entries filed directly at one level plus the buckets nested below it."""

    __slots__ = ("entries", "children")

    def __init__(self) -> None:
        self.entries: List[Entry] = []
        self.children: Dict[str, _Bucket] = {}

    def child(self, key: str) -> _Bucket:
        if key not in self.children:
            self.children[key] = _Bucket()
        return self.children[key]

    def collect(self) -> List[Entry]:
        """Return every entry in this bucket and the buckets below it."""
        found = list(self.entries)
        for bucket in self.children.values():
            found.extend(bucket.collect())
        return found

    def resolve(self) -> Union[List[Entry], GroupedResult]:
        if not self.children:
            return list(self.entries)

        # A directory literally named "_root" shares the reserved key, so its
        # documents are folded into the direct entries of this level.
        direct = list(self.entries)
        if ROOT_BUCKET in self.children:
            direct.extend(self.children[ROOT_BUCKET].collect())

        resolved: GroupedResult = {}
        if direct:
            resolved[ROOT_BUCKET] = direct
        for key, bucket in self.children.items():
            if key != ROOT_BUCKET:
                resolved[key] = bucket.resolve()
        return resolved


def group_flat(entries: Sequence[Entry], depth: int) -> GroupedResult:
    """
    Bucket *entries* by their first `depth` directory segments.

    A bucket that holds both documents and nested buckets becomes a mapping
    whose "_root" key lists the documents filed directly at that level.
    """
    validate_depth(depth)
    top: Dict[str, _Bucket] = {}

    for entry in entries:
        parts = entry.path.split("/")
        if len(parts) == 1:
            top.setdefault(ROOT_BUCKET, _Bucket()).entries.append(entry)
            continue

        dirs = parts[: min(depth, len(parts) - 1)]
        bucket = top.setdefault(dirs[0], _Bucket())
        for segment in dirs[1:]:
            bucket = bucket.child(segment)
        bucket.entries.append(entry)

    return {key: bucket.resolve() for key, bucket in top.items()}


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------


def _tree_dir_levels(depth: int, segment_count: int) -> int:
    # The top-level directory plus `depth` nested levels become nodes.
    return min(depth + 1, segment_count - 1)


def group_tree(entries: Sequence[Entry], depth: int) -> TreeResult:
    """
    Rebuild the directory hierarchy of *entries* as Node objects.

    Directory nodes are created once per distinct directory path, in the
    order they are first reached. Documents below the depth limit are
    attached to the deepest directory node materialised for them.
    """
    validate_depth(depth)
    top_level: TreeResult = []
    directories: Dict[str, Node] = {}

    for entry in entries:
        parts = entry.path.split("/")
        dirs = parts[: _tree_dir_levels(depth, len(parts))]

        parent_path = ""
        for segment in dirs:
            dir_path = f"{parent_path}/{segment}" if parent_path else segment
            if dir_path not in directories:
                node = Node.directory(dir_path, parent=parent_path)
                directories[dir_path] = node
                siblings = directories[parent_path].children if parent_path else top_level
                siblings.append(node)
            parent_path = dir_path

        leaf = Node.from_entry(entry, parent=parent_path)
        if parent_path:
            directories[parent_path].children.append(leaf)
        else:
            top_level.append(leaf)

    return top_level


def group(entries: Sequence[Entry], depth: int, mode: GroupingMode | str) -> ScanResult:
    """Group *entries* with the layout selected by *mode*."""
    mode = validate_mode(mode)
    validate_depth(depth)
    if mode is GroupingMode.FLAT:
        return group_flat(entries, depth)
    if mode is GroupingMode.TREE:
        return group_tree(entries, depth)
    return list(entries)

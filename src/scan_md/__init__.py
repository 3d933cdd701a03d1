"""
scan_md - list Markdown documents with their titles, flat or grouped by directory.
"""

from scan_md.components.grouping import group, group_flat, group_tree
from scan_md.components.node import Entry, GroupingMode, Node, NodeType
from scan_md.components.title import parse_front_matter, resolve_title
from scan_md.scan import collect_entries, scan

__all__ = [
    "Entry",
    "GroupingMode",
    "Node",
    "NodeType",
    "collect_entries",
    "group",
    "group_flat",
    "group_tree",
    "parse_front_matter",
    "resolve_title",
    "scan",
]

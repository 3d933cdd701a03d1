from .node import Entry, GroupingMode, Node, NodeType

__all__ = ["Entry", "GroupingMode", "Node", "NodeType"]

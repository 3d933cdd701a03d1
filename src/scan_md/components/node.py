from __future__ import annotations

from enum import StrEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class NodeType(StrEnum):
    FILE = "file"
    DIRECTORY = "directory"


class GroupingMode(StrEnum):
    NONE = "none"
    FLAT = "flat"
    TREE = "tree"


class Entry(BaseModel):
    """A discovered document and its resolved title."""

    model_config = ConfigDict(frozen=True)

    path: str
    title: str


class Node(BaseModel):
    """
    One unit of the tree result: a document (children is None) or a
    directory (children is a list, possibly empty).
    """

    path: str
    title: str
    parent: str = ""
    children: Optional[List[Node]] = None

    @property
    def node_type(self) -> NodeType:
        return NodeType.FILE if self.children is None else NodeType.DIRECTORY

    @classmethod
    def from_entry(cls, entry: Entry, parent: str) -> Node:
        return cls(path=entry.path, title=entry.title, parent=parent)

    @classmethod
    def directory(cls, path: str, parent: str) -> Node:
        return cls(path=path, title=path.rsplit("/", 1)[-1], parent=parent, children=[])

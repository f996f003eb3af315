"""Data models for aggregated change statistics and the directory tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Iterator, Optional, Union

# Synthetic identity of the repository top level.
ROOT_PATH = "."


class NodeKind(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass
class FileStat:
    """Aggregated history of one path.

    ``change_count`` is the number of change records folded in and
    ``last_modified`` the newest timestamp among them.
    """

    path: str
    change_count: int
    insertions: int
    deletions: int
    last_modified: datetime
    authors: list[str] = field(default_factory=list)  # first-seen order

    kind: ClassVar[NodeKind] = NodeKind.FILE

    @property
    def weight(self) -> int:
        return self.change_count

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def parent_path(self) -> str:
        """Directory part of the path, or the root sentinel."""
        if "/" not in self.path:
            return ROOT_PATH
        return self.path.rsplit("/", 1)[0] or ROOT_PATH

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "changes": self.change_count,
            "insertions": self.insertions,
            "deletions": self.deletions,
            "lastModified": self.last_modified.isoformat(),
            "authors": list(self.authors),
        }


@dataclass(eq=False)
class DirectoryNode:
    """A directory with cumulative counts over every file beneath it."""

    path: str
    total_changes: int = 0
    file_count: int = 0
    children: list[TreeNode] = field(default_factory=list)
    # Back-reference only; children own the tree.
    parent: Optional[DirectoryNode] = field(default=None, repr=False)

    kind: ClassVar[NodeKind] = NodeKind.DIRECTORY

    @property
    def weight(self) -> int:
        return self.total_changes

    @property
    def is_root(self) -> bool:
        return self.path == ROOT_PATH

    @property
    def name(self) -> str:
        if self.is_root:
            return "root"
        return self.path.rsplit("/", 1)[-1]

    def directories(self) -> Iterator[DirectoryNode]:
        """Direct child directories, in insertion order."""
        for child in self.children:
            if child.kind is NodeKind.DIRECTORY:
                yield child  # type: ignore[misc]

    def files(self) -> Iterator[FileStat]:
        """Direct child files, in insertion order."""
        for child in self.children:
            if child.kind is NodeKind.FILE:
                yield child  # type: ignore[misc]

    def ancestors(self) -> Iterator[DirectoryNode]:
        """This directory, then each parent up to and including the root."""
        node: Optional[DirectoryNode] = self
        while node is not None:
            yield node
            node = node.parent

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "totalChanges": self.total_changes,
            "fileCount": self.file_count,
            "children": [child.to_dict() for child in self.children],
        }


TreeNode = Union[DirectoryNode, FileStat]


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    def to_dict(self) -> dict[str, str]:
        return {"from": self.start.isoformat(), "to": self.end.isoformat()}


@dataclass
class HeatmapData:
    """Result of one analysis run."""

    files: list[FileStat]  # filtered, descending by change_count
    directories: DirectoryNode
    max_changes: int  # largest change_count among ``files``
    total_changes: int  # raw change records read, before filtering
    date_range: DateRange

    @property
    def total_files(self) -> int:
        return len(self.files)

    def summary(self) -> dict[str, Any]:
        """Plain summary stats handed to the renderer."""
        return {
            "totalFiles": self.total_files,
            "totalChanges": self.total_changes,
            "dateRange": self.date_range.to_dict(),
        }

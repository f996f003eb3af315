"""Build a directory tree with cumulative change counts from file stats.

Every directory carries ``total_changes`` and ``file_count`` summed over all
files beneath it, at every depth. Directories are created lazily, once per
distinct path prefix, and looked up through an index keyed by full path.
Ancestor totals are updated by walking parent back-references, so each
ancestor is incremented exactly once per file regardless of depth.

A path that was a file in one commit and a directory in another cannot hold
both shapes in one tree. The file inserted later (the lower-ranked one) is
left out of the tree and logged at DEBUG.
"""

from typing import Iterator, Optional, Sequence

from ..exceptions import PathCollisionError
from ..logging_config import get_logger
from .models import ROOT_PATH, DirectoryNode, FileStat

logger = get_logger(__name__)


class TreeBuilder:
    """Incrementally insert files under a root directory node."""

    def __init__(self) -> None:
        self.root = DirectoryNode(path=ROOT_PATH)
        self.files: list[FileStat] = []  # inserted, in insertion order
        self.skipped: list[FileStat] = []
        self._directories: dict[str, DirectoryNode] = {ROOT_PATH: self.root}
        self._file_paths: set[str] = set()

    def add(self, stat: FileStat) -> Optional[DirectoryNode]:
        """Attach *stat* under its parent directory and return that parent.

        Returns None when *stat* collides with the file/directory shape
        already in the tree.

        Raises:
            PathCollisionError: the same file path is added twice
        """
        if stat.path in self._file_paths:
            raise PathCollisionError(stat.path, "file path seen twice")

        segments = stat.path.split("/")
        collision = self._find_collision(stat.path, segments[:-1])
        if collision is not None:
            logger.debug("Skipping %s: %s", stat.path, collision)
            self.skipped.append(stat)
            return None

        parent = self._ensure_directory(segments[:-1])
        parent.children.append(stat)
        self._file_paths.add(stat.path)
        self.files.append(stat)

        for directory in parent.ancestors():
            directory.total_changes += stat.change_count
            directory.file_count += 1

        return parent

    @property
    def directory_count(self) -> int:
        return len(self._directories)

    def finish(self) -> DirectoryNode:
        """Recompute root totals from the inserted files and return the root."""
        self.root.total_changes = sum(f.change_count for f in self.files)
        self.root.file_count = len(self.files)
        return self.root

    def _find_collision(self, path: str, dir_segments: list[str]) -> Optional[str]:
        if path in self._directories:
            return "path is already a directory"
        for depth in range(1, len(dir_segments) + 1):
            prefix = "/".join(dir_segments[:depth])
            if prefix in self._file_paths:
                return f"{prefix} is already a file"
        return None

    def _ensure_directory(self, segments: list[str]) -> DirectoryNode:
        node = self.root
        for depth in range(len(segments)):
            prefix = "/".join(segments[: depth + 1])
            child = self._directories.get(prefix)
            if child is None:
                child = DirectoryNode(path=prefix, parent=node)
                node.children.append(child)
                self._directories[prefix] = child
            node = child
        return node


def build_tree(files: Sequence[FileStat]) -> TreeBuilder:
    """Insert *files* in order and return the finished builder.

    ``builder.files`` holds the files that made it into the tree.

    Raises:
        PathCollisionError: a file path repeats
    """
    builder = TreeBuilder()
    for stat in files:
        builder.add(stat)
    builder.finish()
    logger.debug(
        "Built tree: %d directories, %d files, %d skipped",
        builder.directory_count,
        len(builder.files),
        len(builder.skipped),
    )
    return builder


def build_directory_tree(files: Sequence[FileStat]) -> DirectoryNode:
    """Build the directory tree for *files*, rooted at the ``"."`` sentinel."""
    return build_tree(files).root


def iter_directories(root: DirectoryNode) -> Iterator[DirectoryNode]:
    """Yield *root* and every directory below it in pre-order."""
    yield root
    for child in root.directories():
        yield from iter_directories(child)

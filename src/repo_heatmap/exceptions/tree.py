"""Tree-building exceptions."""

from .base import RepoHeatmapError


class TreeError(RepoHeatmapError):
    """Base class for directory tree construction errors."""

    pass


class PathCollisionError(TreeError):
    """Raised when a file and a directory (or two files) share one path."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Path collision: {path}",
            details={"path": path, "reason": reason},
        )
        self.path = path
        self.reason = reason

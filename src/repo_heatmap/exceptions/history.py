"""History-related exceptions: repository probe and git log invocation."""

from pathlib import Path
from typing import Optional, Union

from .base import RepoHeatmapError


class HistoryError(RepoHeatmapError):
    """Base class for errors raised while reading commit history."""

    pass


class InvalidRepositoryError(HistoryError):
    """Raised when a path is not a git working tree."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(
            f"Not a valid git repository: {path}",
            details={"path": str(path)},
        )
        self.path = path


class HistoryUnavailableError(HistoryError):
    """Raised when ``git log`` cannot be run or exits with a failure status."""

    def __init__(self, reason: str, returncode: Optional[int] = None):
        details = {"reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)

        super().__init__("Git command failed", details=details)
        self.reason = reason
        self.returncode = returncode


class HistoryTimeoutError(HistoryError):
    """Raised when ``git log`` does not finish within the configured timeout."""

    def __init__(self, timeout: float):
        super().__init__(
            f"Git command timed out after {timeout:g}s",
            details={"timeout": f"{timeout:g}"},
        )
        self.timeout = timeout

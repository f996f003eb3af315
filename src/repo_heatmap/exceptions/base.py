"""Root of the repo-heatmap error hierarchy."""

from typing import Dict, Optional


class RepoHeatmapError(Exception):
    """Anything the pipeline raises on purpose.

    ``message`` is the one-line summary the CLI prints after "Error:".
    ``details`` holds the values behind it (a path, git's stderr, a config
    key) and is appended to ``str()`` as ``key=value`` pairs.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        pairs = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({pairs})"

"""Exception hierarchy for repo-heatmap."""

from .base import RepoHeatmapError
from .config import ConfigurationError, InvalidConfigError
from .history import (
    HistoryError,
    HistoryTimeoutError,
    HistoryUnavailableError,
    InvalidRepositoryError,
)
from .tree import PathCollisionError, TreeError

__all__ = [
    "RepoHeatmapError",
    "HistoryError",
    "InvalidRepositoryError",
    "HistoryUnavailableError",
    "HistoryTimeoutError",
    "TreeError",
    "PathCollisionError",
    "ConfigurationError",
    "InvalidConfigError",
]

"""Data models for raw git history."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ChangeRecord:
    """One file's numstat line, attributed to the commit it appeared in."""

    path: str  # relative to the repository root
    insertions: int
    deletions: int
    author: str
    timestamp: datetime  # author date, timezone-aware

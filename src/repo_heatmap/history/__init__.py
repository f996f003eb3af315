"""Git history reading: raw per-file change records."""

from .git_reader import GitHistoryReader, parse_numstat_log
from .models import ChangeRecord

__all__ = [
    "ChangeRecord",
    "GitHistoryReader",
    "parse_numstat_log",
]

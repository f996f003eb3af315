"""Run the full history → heatmap pipeline for one repository."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence, Union

from ..exceptions import InvalidRepositoryError
from ..history import ChangeRecord, GitHistoryReader
from ..logging_config import get_logger
from .aggregator import aggregate_changes
from .filters import filter_files
from .models import DateRange, HeatmapData
from .tree import build_tree

logger = get_logger(__name__)


def analyze_repository(
    repo_path: Union[str, Path],
    since: Optional[str] = None,
    until: Optional[str] = None,
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
    timeout: Optional[float] = None,
) -> HeatmapData:
    """Read git history and build the filtered file list and directory tree.

    Args:
        repo_path: Path inside a git working tree
        since: Passed verbatim to ``git log --since``
        until: Passed verbatim to ``git log --until``
        include: Substrings a path must contain at least one of
        exclude: Substrings a path must contain none of
        timeout: Seconds to wait for ``git log`` (None = no limit)

    Raises:
        InvalidRepositoryError: *repo_path* is not a git working tree
        HistoryUnavailableError: git log failed
        HistoryTimeoutError: git log exceeded *timeout*
    """
    reader = GitHistoryReader(repo_path, since=since, until=until, timeout=timeout)
    if not reader.is_git_repo():
        raise InvalidRepositoryError(repo_path)

    records = reader.read()
    return build_heatmap(records, include=include, exclude=exclude)


def build_heatmap(
    records: Sequence[ChangeRecord],
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
) -> HeatmapData:
    """Aggregate, filter and tree-build already-read records."""
    filtered = filter_files(aggregate_changes(records), include=include, exclude=exclude)
    tree = build_tree(filtered)
    # Files left out of the tree over a file/directory clash are dropped here too
    files = tree.files
    directories = tree.root
    max_changes = max((f.change_count for f in files), default=0)

    logger.debug(
        "Heatmap: %d records, %d files after filtering, max %d changes",
        len(records),
        len(files),
        max_changes,
    )

    return HeatmapData(
        files=files,
        directories=directories,
        max_changes=max_changes,
        total_changes=len(records),
        date_range=compute_date_range(records),
    )


def compute_date_range(records: Sequence[ChangeRecord]) -> DateRange:
    """Span of record timestamps; both ends are "now" when there are none."""
    if not records:
        now = datetime.now(timezone.utc)
        return DateRange(start=now, end=now)
    timestamps = [r.timestamp for r in records]
    return DateRange(start=min(timestamps), end=max(timestamps))

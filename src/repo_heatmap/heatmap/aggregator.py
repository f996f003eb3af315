"""Fold raw change records into one FileStat per path."""

from typing import Iterable

from ..history.models import ChangeRecord
from ..logging_config import get_logger
from .models import FileStat

logger = get_logger(__name__)


def aggregate_changes(records: Iterable[ChangeRecord]) -> list[FileStat]:
    """Aggregate records by path, most-changed first.

    Ties keep the order in which paths were first seen (``sorted`` is
    stable). Every record contributes to exactly one FileStat.
    """
    by_path: dict[str, FileStat] = {}

    for record in records:
        stat = by_path.get(record.path)
        if stat is None:
            by_path[record.path] = FileStat(
                path=record.path,
                change_count=1,
                insertions=record.insertions,
                deletions=record.deletions,
                last_modified=record.timestamp,
                authors=[record.author],
            )
            continue

        stat.change_count += 1
        stat.insertions += record.insertions
        stat.deletions += record.deletions
        if record.author not in stat.authors:
            stat.authors.append(record.author)
        if record.timestamp > stat.last_modified:
            stat.last_modified = record.timestamp

    logger.debug("Aggregated %d distinct paths", len(by_path))
    return sorted(by_path.values(), key=lambda s: s.change_count, reverse=True)

"""Include/exclude filtering of aggregated files."""

from typing import Optional, Sequence

from .models import FileStat


def matches_any(path: str, patterns: Sequence[str]) -> bool:
    """Case-sensitive literal substring match against any pattern."""
    return any(pattern in path for pattern in patterns)


def filter_files(
    files: Sequence[FileStat],
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
) -> list[FileStat]:
    """Keep files matching at least one include and no exclude pattern.

    Patterns are plain substrings, not globs or regexes. An empty or missing
    pattern list does not constrain anything. Order is preserved.
    """
    filtered = list(files)

    if include:
        filtered = [f for f in filtered if matches_any(f.path, include)]

    if exclude:
        filtered = [f for f in filtered if not matches_any(f.path, exclude)]

    return filtered

"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..config import HeatmapConfig, load_config, split_patterns
from ..heatmap.models import HeatmapData

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    since: Optional[str] = None,
    until: Optional[str] = None,
    max_files: Optional[int] = None,
    include: Optional[str] = None,
    exclude: Optional[str] = None,
    open_browser: Optional[bool] = None,
    git_timeout: Optional[float] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> HeatmapConfig:
    """Build the run configuration from CLI options."""
    return load_config(
        config_file=config,
        host=host,
        port=port,
        since=since,
        until=until,
        max_files=max_files,
        include=split_patterns(include),
        exclude=split_patterns(exclude),
        open_browser=open_browser,
        git_timeout=git_timeout,
        verbose=verbose,
        quiet=quiet,
    )


def print_summary(repo_path: Path, heatmap: HeatmapData, settings: HeatmapConfig) -> None:
    """Print the post-analysis summary lines."""
    console.print(f"\n[dim]Repository: {escape(str(repo_path))}[/dim]")
    console.print(f"[dim]Files analyzed: {heatmap.total_files}[/dim]")
    console.print(f"[dim]Total changes: {heatmap.total_changes:,}[/dim]")
    if settings.since or settings.until:
        start = heatmap.date_range.start.date().isoformat()
        end = heatmap.date_range.end.date().isoformat()
        console.print(f"[dim]Period: {start} - {end}[/dim]")

"""Interactive prompt flow for ``repo-heatmap --interactive``."""

from dataclasses import replace
from pathlib import Path
from typing import Optional

from rich.prompt import Confirm, IntPrompt, Prompt

from ..config import HeatmapConfig
from ..exceptions import InvalidRepositoryError
from ..history import GitHistoryReader
from ._common import console


def _ask_int(question: str, default: int, minimum: int, maximum: Optional[int] = None) -> int:
    while True:
        value = IntPrompt.ask(question, default=default, console=console)
        if value >= minimum and (maximum is None or value <= maximum):
            return value
        console.print("[red]Invalid number[/red]")


def _ask_optional(question: str) -> Optional[str]:
    answer = Prompt.ask(question, default="", show_default=False, console=console)
    return answer.strip() or None


def _ask_path(default: Path) -> Path:
    while True:
        answer = Prompt.ask("Repository path?", default=str(default), console=console).strip()
        if answer:
            return Path(answer)
        console.print("[red]Path is required[/red]")


def run_interactive(
    settings: HeatmapConfig, default_path: Path
) -> Optional[tuple[Path, HeatmapConfig]]:
    """Ask for the run options, starting from *settings*.

    Returns the chosen repository path and updated settings, or None when
    the user cancels with Ctrl+C / EOF.

    Raises:
        InvalidRepositoryError: the chosen path is not a git working tree
    """
    console.rule("[bold cyan]repo-heatmap[/bold cyan]")
    try:
        repo_path = _ask_path(default_path)
        if not GitHistoryReader(repo_path).is_git_repo():
            raise InvalidRepositoryError(repo_path)

        port = _ask_int("Server port?", settings.port, 1, 65535)

        since, until = settings.since, settings.until
        if Confirm.ask("Filter by date range?", default=False, console=console):
            since = _ask_optional("Since date? (e.g., 2024-01-01, 1 month ago)")
            until = _ask_optional("Until date? (e.g., 2024-12-31)")

        max_files = _ask_int("Maximum files to display?", settings.max_files, 1)
        open_browser = Confirm.ask(
            "Open browser automatically?", default=settings.open_browser, console=console
        )
    except (KeyboardInterrupt, EOFError):
        return None

    return repo_path, replace(
        settings,
        port=port,
        since=since,
        until=until,
        max_files=max_files,
        open_browser=open_browser,
    )

"""CLI entry point: registers the heatmap command."""

import typer

app = typer.Typer(
    name="repo-heatmap",
    help="Visualize repository file changes as an interactive heatmap graph",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command module to register it
from .main import main as _main_callback  # noqa: F401, E402

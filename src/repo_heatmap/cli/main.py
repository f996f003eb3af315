"""Main heatmap command: analyze, then serve, write or print the graph."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..config import HeatmapConfig
from ..exceptions import RepoHeatmapError
from ..graph import build_visualization
from ..heatmap import analyze_repository
from ..logging_config import setup_logging
from ..server import serve_heatmap, server_url
from ..visualization import write_report
from . import app
from ._common import console, print_summary, resolve_config
from ._interactive import run_interactive


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    path: Path = typer.Option(
        Path("."),
        "-p",
        "--path",
        help="Repository path",
        file_okay=False,
        dir_okay=True,
    ),
    port: Optional[int] = typer.Option(
        None, "--port", help="Server port [default: 3000]", min=1, max=65535
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Host to bind [default: 127.0.0.1]"),
    since: Optional[str] = typer.Option(
        None, "--since", help="Analyze commits since date (passed to git log)"
    ),
    until: Optional[str] = typer.Option(
        None, "--until", help="Analyze commits until date (passed to git log)"
    ),
    max_files: Optional[int] = typer.Option(
        None, "--max-files", help="Maximum files to display [default: 100]", min=1
    ),
    exclude: Optional[str] = typer.Option(
        None, "--exclude", help="Comma-separated substrings to exclude"
    ),
    include: Optional[str] = typer.Option(
        None, "--include", help="Comma-separated substrings to include"
    ),
    open_browser: Optional[bool] = typer.Option(
        None, "--open/--no-open", help="Open browser automatically [default: open]"
    ),
    interactive: bool = typer.Option(False, "--interactive", help="Use interactive prompts"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the HTML page to a file instead of serving it"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print graph and stats as JSON instead of serving"
    ),
    git_timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds to wait for git log", min=0.1, hidden=True
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also append log records to this file", dir_okay=False
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Generate and serve a repository heatmap visualization.

    Reads [bold]git log --numstat[/bold], aggregates changes per file, rolls
    them up into a directory tree and draws the most-changed files as a
    force-directed graph.

    [bold cyan]Examples:[/bold cyan]

      repo-heatmap

      repo-heatmap -p ../project --since "3 months ago" --exclude lock,dist/

      repo-heatmap --output heatmap.html

      repo-heatmap --json --max-files 20
    """
    if ctx.invoked_subcommand is not None:
        return

    from .. import __version__

    if version:
        console.print(f"[bold cyan]repo-heatmap[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    logger = setup_logging(
        verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None
    )

    try:
        settings = resolve_config(
            config=config,
            host=host,
            port=port,
            since=since,
            until=until,
            max_files=max_files,
            include=include,
            exclude=exclude,
            open_browser=open_browser,
            git_timeout=git_timeout,
            verbose=verbose,
            quiet=quiet,
        )

        repo_path = path
        if interactive:
            answers = run_interactive(settings, path)
            if answers is None:
                console.print("[yellow]Cancelled[/yellow]")
                raise typer.Exit(0)
            repo_path, settings = answers

        _run(repo_path, settings, output=output, json_output=json_output)

    except typer.Exit:
        raise

    except RepoHeatmapError as e:
        logger.debug("%s: %s", e.__class__.__name__, e)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


def _run(
    repo_path: Path,
    settings: HeatmapConfig,
    output: Optional[Path] = None,
    json_output: bool = False,
) -> None:
    def analyze():
        return analyze_repository(
            repo_path,
            since=settings.since,
            until=settings.until,
            include=settings.include,
            exclude=settings.exclude,
            timeout=settings.git_timeout,
        )

    if json_output:
        # Keep stdout clean for the JSON document
        heatmap = analyze()
        graph, stats = build_visualization(heatmap, settings.max_files)
        typer.echo(json.dumps({"graph": graph.to_dict(), "stats": stats}, indent=2))
        return

    with console.status("[cyan]Analyzing repository..."):
        heatmap = analyze()
    console.print("[green]Analysis complete![/green]")

    graph, stats = build_visualization(heatmap, settings.max_files)
    print_summary(repo_path, heatmap, settings)

    if output is not None:
        written = write_report(graph, stats, output)
        console.print(f"\n[bold]Heatmap written[/bold] → {escape(written)}")
        return

    url = server_url(settings.host, settings.port)
    console.print(f"\n[bold]Server running at[/bold] [link={url}]{url}[/link]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")
    try:
        serve_heatmap(
            graph,
            stats,
            host=settings.host,
            port=settings.port,
            open_browser=settings.open_browser,
            verbose=settings.verbose,
        )
    except KeyboardInterrupt:
        pass
    finally:
        console.print("\n[dim]Stopped.[/dim]")

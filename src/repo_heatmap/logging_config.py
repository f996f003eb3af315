"""
Logging for repo-heatmap.

The analysis stages log DEBUG diagnostics only: the git command line,
skipped numstat lines and node counts. ``repo-heatmap -v`` surfaces them on
stderr through rich, and ``--log-file`` keeps a plain-text copy. stdout is
never touched so that ``--json`` output stays parseable.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "repo_heatmap"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install the stderr handler (and optional file handler) for one CLI run.

    Args:
        verbose: Show DEBUG records, with source paths and traceback locals
        quiet: Show ERROR records only; wins over ``verbose``
        log_file: Append records to this file as well

    Returns:
        The ``repo_heatmap`` package logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    # Repository paths may contain "[...]", which rich would read as markup.
    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    # Replaces handlers left by an earlier run in the same process
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for *name* under the ``repo_heatmap`` namespace.

    Module loggers are created with ``get_logger(__name__)``; a bare name
    such as ``"tree"`` becomes ``repo_heatmap.tree``.
    """
    if name is None or name == PACKAGE_LOGGER:
        return logging.getLogger(PACKAGE_LOGGER)
    if not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)

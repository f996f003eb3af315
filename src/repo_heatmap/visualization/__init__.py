"""Visualization layer: self-contained HTML page with a force-directed graph."""

from .report import render_html, write_report

__all__ = [
    "render_html",
    "write_report",
]

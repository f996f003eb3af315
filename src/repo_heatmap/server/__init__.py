"""HTTP server for the rendered heatmap."""

from .app import create_app
from .runner import serve_heatmap, server_url

__all__ = [
    "create_app",
    "serve_heatmap",
    "server_url",
]

"""Run the heatmap server with uvicorn and optionally open a browser."""

import logging
import threading
import webbrowser
from typing import Any

import uvicorn

from ..graph.models import GraphData
from .app import create_app

logger = logging.getLogger(__name__)


def server_url(host: str, port: int) -> str:
    # Browsers cannot open the wildcard address
    display_host = "localhost" if host in ("0.0.0.0", "::") else host
    return f"http://{display_host}:{port}"


def serve_heatmap(
    graph: GraphData,
    stats: dict[str, Any],
    host: str = "127.0.0.1",
    port: int = 3000,
    open_browser: bool = True,
    verbose: bool = False,
) -> None:
    """Serve *graph* until interrupted. Blocks the calling thread."""
    asgi_app = create_app(graph, stats)
    url = server_url(host, port)

    if open_browser:
        # Give uvicorn a moment to bind before the browser requests the page
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()

    logger.info("Serving heatmap at %s", url)
    uvicorn.run(
        asgi_app,
        host=host,
        port=port,
        log_level="info" if verbose else "warning",
    )

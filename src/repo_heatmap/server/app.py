"""Starlette ASGI application serving one rendered heatmap."""

from __future__ import annotations

import logging
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from ..graph.models import GraphData
from ..visualization.report import render_html

logger = logging.getLogger(__name__)


def create_app(graph: GraphData, stats: dict[str, Any]) -> Starlette:
    """Build the Starlette application for *graph* and *stats*.

    The page and payload are rendered once here; handlers only read them.
    """
    html = render_html(graph, stats)
    payload = {"graph": graph.to_dict(), "stats": stats}

    async def homepage(request: Request) -> HTMLResponse:
        return HTMLResponse(html)

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    async def api_graph(request: Request) -> JSONResponse:
        return JSONResponse(payload)

    routes = [
        Route("/", homepage),
        Route("/health", health),
        Route("/api/graph", api_graph),
    ]

    logger.debug(
        "Serving %d nodes / %d edges", len(payload["graph"]["nodes"]), len(payload["graph"]["edges"])
    )
    return Starlette(routes=routes)

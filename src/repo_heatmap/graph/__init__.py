"""Graph projection of the heatmap for the force-directed view."""

from .colors import HEATMAP_STOPS, heatmap_color, heatmap_rgb, intensity
from .models import GraphData, GraphEdge, GraphNode
from .projection import DEFAULT_MAX_FILES, build_visualization, generate_graph_data

__all__ = [
    "HEATMAP_STOPS",
    "heatmap_color",
    "heatmap_rgb",
    "intensity",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "DEFAULT_MAX_FILES",
    "build_visualization",
    "generate_graph_data",
]

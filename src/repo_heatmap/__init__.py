"""
repo-heatmap - Repository Change Heatmap

Turns git commit history into a weighted directory tree and renders the
most-changed files as an interactive force-directed graph in the browser.
"""

__version__ = "1.0.0"

from .graph import GraphData, build_visualization, generate_graph_data
from .heatmap import DirectoryNode, FileStat, HeatmapData, analyze_repository

__all__ = [
    "analyze_repository",  # Main entry point
    "build_visualization",
    "generate_graph_data",
    "HeatmapData",
    "FileStat",
    "DirectoryNode",
    "GraphData",
]

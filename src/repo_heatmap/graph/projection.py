"""Project the directory tree and top-N files into graph nodes and edges.

Every directory becomes a node; files are truncated to the first
``max_files`` of the (already ranked) file list. Node size and color both
scale with change intensity against the largest single-file change count.
"""

from typing import Any, Sequence

from ..heatmap.models import DirectoryNode, FileStat, HeatmapData, NodeKind
from ..heatmap.tree import iter_directories
from .colors import heatmap_color, intensity
from .models import GraphData, GraphEdge, GraphNode

DIRECTORY_BASE_SIZE = 20.0
DIRECTORY_SIZE_RANGE = 50.0
FILE_BASE_SIZE = 10.0
FILE_SIZE_RANGE = 30.0

DEFAULT_MAX_FILES = 100


def generate_graph_data(
    root: DirectoryNode,
    files: Sequence[FileStat],
    max_changes: int,
    max_files: int = DEFAULT_MAX_FILES,
) -> GraphData:
    """Build graph nodes and edges.

    Directory nodes come first in pre-order, each followed in the edge list
    by edges to its child directories. File nodes follow, one per retained
    file, linked from the parent path derived from the file path.
    """
    if max_files < 1:
        raise ValueError("max_files must be at least 1")

    graph = GraphData()

    for directory in iter_directories(root):
        t = intensity(directory.total_changes, max_changes)
        graph.nodes.append(
            GraphNode(
                id=directory.path,
                label=directory.name,
                changes=directory.total_changes,
                kind=NodeKind.DIRECTORY,
                size=DIRECTORY_BASE_SIZE + t * DIRECTORY_SIZE_RANGE,
                color=heatmap_color(t),
            )
        )
        for child in directory.directories():
            graph.edges.append(GraphEdge(source=directory.path, target=child.path))

    for stat in files[:max_files]:
        t = intensity(stat.change_count, max_changes)
        graph.nodes.append(
            GraphNode(
                id=stat.path,
                label=stat.name,
                changes=stat.change_count,
                kind=NodeKind.FILE,
                size=FILE_BASE_SIZE + t * FILE_SIZE_RANGE,
                color=heatmap_color(t),
            )
        )
        graph.edges.append(GraphEdge(source=stat.parent_path, target=stat.path))

    return graph


def build_visualization(
    heatmap: HeatmapData, max_files: int = DEFAULT_MAX_FILES
) -> tuple[GraphData, dict[str, Any]]:
    """Graph plus summary stats for one analysis result."""
    graph = generate_graph_data(
        heatmap.directories, heatmap.files, heatmap.max_changes, max_files
    )
    return graph, heatmap.summary()

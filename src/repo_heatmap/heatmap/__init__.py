"""Change aggregation, filtering and directory-tree construction."""

from .aggregator import aggregate_changes
from .analysis import analyze_repository, build_heatmap, compute_date_range
from .filters import filter_files
from .models import ROOT_PATH, DateRange, DirectoryNode, FileStat, HeatmapData, NodeKind
from .tree import TreeBuilder, build_directory_tree, build_tree, iter_directories

__all__ = [
    "ROOT_PATH",
    "NodeKind",
    "FileStat",
    "DirectoryNode",
    "DateRange",
    "HeatmapData",
    "TreeBuilder",
    "aggregate_changes",
    "filter_files",
    "build_tree",
    "build_directory_tree",
    "iter_directories",
    "analyze_repository",
    "build_heatmap",
    "compute_date_range",
]

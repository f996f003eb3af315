"""Graph structure consumed by the visualization front-end."""

from dataclasses import dataclass, field
from typing import Any

from ..heatmap.models import NodeKind


@dataclass(frozen=True)
class GraphNode:
    id: str  # file or directory path
    label: str
    changes: int
    kind: NodeKind
    size: float  # rendered diameter
    color: str  # "rgb(r, g, b)"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "changes": self.changes,
            "kind": self.kind.value,
            "visualSize": self.size,
            "colorValue": self.color,
        }


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "target": self.target}


@dataclass
class GraphData:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def directory_nodes(self) -> list[GraphNode]:
        return [n for n in self.nodes if n.kind is NodeKind.DIRECTORY]

    def file_nodes(self) -> list[GraphNode]:
        return [n for n in self.nodes if n.kind is NodeKind.FILE]

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

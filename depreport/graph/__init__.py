"""Graph views over parsed dependency reports."""

from depreport.graph.builder import build_dependency_graph
from depreport.graph.schema import (
    EdgeKind,
    NodeType,
    dependency_node_id,
    project_node_id,
)

__all__ = [
    "EdgeKind",
    "NodeType",
    "build_dependency_graph",
    "dependency_node_id",
    "project_node_id",
]

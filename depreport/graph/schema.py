"""Node and edge kinds of the dependency graph built from a report."""

from __future__ import annotations

from enum import Enum


class NodeType(str, Enum):
    """Node categories of a report graph."""

    PROJECT = "project"
    DEPENDENCY = "dependency"


class EdgeKind(str, Enum):
    """Edge categories of a report graph."""

    DECLARES = "declares"


def project_node_id(name: str) -> str:
    return f"project:{name}"


def dependency_node_id(name: str) -> str:
    return f"dep:{name}"

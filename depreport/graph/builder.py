"""Build a networkx graph from parsed report projects."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import networkx as nx

from depreport.graph.schema import (
    EdgeKind,
    NodeType,
    dependency_node_id,
    project_node_id,
)
from depreport.parsers.gradle.model import Dependency, Project

logger = logging.getLogger("depreport.graph.builder")


def _project_reference(dependency: Dependency) -> Optional[str]:
    """Return the project path of a ``project :lib`` entry, else None."""
    if not dependency.is_project_dependency:
        return None
    _, _, path = dependency.name.literal.partition(":")
    return path.strip() or None


def build_dependency_graph(
    projects: Iterable[Project],
    dependencies: Optional[Iterable[Dependency]] = None,
) -> nx.MultiDiGraph:
    """Create a project -> dependency graph.

    Args:
        projects: Parsed projects; each becomes a ``project`` node.
        dependencies: Entries to turn into edges. Defaults to the projects'
            own dependency lists (repeats excluded). Pass the parser's flat
            list to include repeats as well.

    Returns:
        MultiDiGraph with one ``declares`` edge per dependency entry, carrying
        ``configuration``, ``requested_version``, ``resolved_version`` and
        ``is_repeat`` attributes.
    """
    graph = nx.MultiDiGraph()
    projects = list(projects)

    for project in projects:
        graph.add_node(
            project_node_id(project.name.literal),
            type=NodeType.PROJECT.value,
            name=project.name.literal,
        )

    if dependencies is None:
        dependencies = [dep for project in projects for dep in project.dependencies]

    edge_count = 0
    for dependency in dependencies:
        source = project_node_id(dependency.owning_project)
        if not graph.has_node(source):
            logger.warning(
                "Dependency %s refers to unknown project %s",
                dependency.name.literal,
                dependency.owning_project,
            )
            continue

        reference = _project_reference(dependency)
        if reference is not None:
            target = project_node_id(reference)
            if not graph.has_node(target):
                graph.add_node(target, type=NodeType.PROJECT.value, name=reference)
        else:
            target = dependency_node_id(dependency.name.literal)
            if not graph.has_node(target):
                graph.add_node(
                    target,
                    type=NodeType.DEPENDENCY.value,
                    name=dependency.name.literal,
                )

        graph.add_edge(
            source,
            target,
            kind=EdgeKind.DECLARES.value,
            configuration=dependency.configuration.literal,
            requested_version=dependency.requested_version.literal or None,
            resolved_version=(
                dependency.resolved_version.literal
                if dependency.resolved_version is not None
                else None
            ),
            is_repeat=dependency.is_repeat,
        )
        edge_count += 1

    logger.debug(
        "Built dependency graph: %d nodes, %d edges",
        graph.number_of_nodes(),
        edge_count,
    )
    return graph

"""Dependency graph construction tests."""

from __future__ import annotations

from depreport.graph import EdgeKind, NodeType, build_dependency_graph
from depreport.parsers.gradle import parse_report

REPORT = (
    "Project ':app'\n\n"
    "api\n"
    "+--- com.example:lib:1.0 -> 2.0\n"
    "|    \\--- com.example:core:2.0\n"
    "\\--- project :shared (*)\n\n"
    "Project ':shared'\n\n"
    "implementation\n"
    "\\--- com.example:core:1.5\n"
)


def test_projects_and_dependencies_become_nodes() -> None:
    result = parse_report(REPORT)
    graph = build_dependency_graph(result.projects)

    assert graph.nodes["project:app"]["type"] == NodeType.PROJECT.value
    assert graph.nodes["project:shared"]["type"] == NodeType.PROJECT.value
    assert graph.nodes["dep:com.example:lib"]["type"] == NodeType.DEPENDENCY.value
    # Repeats are left out unless the flat list is passed.
    assert not graph.has_edge("project:app", "dep:com.example:core")
    assert graph.has_edge("project:shared", "dep:com.example:core")


def test_edges_carry_configuration_and_versions() -> None:
    result = parse_report(REPORT)
    graph = build_dependency_graph(result.projects)

    (attrs,) = graph.get_edge_data("project:app", "dep:com.example:lib").values()
    assert attrs["kind"] == EdgeKind.DECLARES.value
    assert attrs["configuration"] == "api"
    assert attrs["requested_version"] == "1.0"
    assert attrs["resolved_version"] == "2.0"
    assert attrs["is_repeat"] is False


def test_project_references_link_projects() -> None:
    result = parse_report(REPORT)
    graph = build_dependency_graph(result.projects)

    assert graph.has_edge("project:app", "project:shared")
    (attrs,) = graph.get_edge_data("project:app", "project:shared").values()
    assert attrs["requested_version"] is None


def test_flat_list_adds_repeat_edges() -> None:
    result = parse_report(REPORT)
    graph = build_dependency_graph(result.projects, result.dependencies)

    (attrs,) = graph.get_edge_data("project:app", "dep:com.example:core").values()
    assert attrs["is_repeat"] is True
    assert graph.number_of_edges() == 4

"""JSON export for parsed dependency reports."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, TextIO

import networkx as nx

from depreport.parsers.gradle.model import Dependency, Project
from depreport.parsers.gradle.tokens import TerminalSymbol

logger = logging.getLogger("depreport.export.json")


def _symbol(symbol: Optional[TerminalSymbol]) -> Optional[Dict[str, Any]]:
    if symbol is None:
        return None
    return {
        "literal": symbol.literal,
        "start": symbol.start_offset,
        "end": symbol.end_offset,
    }


def dependency_record(dependency: Dependency) -> Dict[str, Any]:
    """Flatten one dependency into a JSON-ready mapping."""
    return {
        "project": dependency.owning_project,
        "configuration": dependency.configuration.literal,
        "name": dependency.name.literal,
        "requested_version": dependency.requested_version.literal or None,
        "resolved_version": (
            dependency.resolved_version.literal
            if dependency.resolved_version is not None
            else None
        ),
        "is_repeat": dependency.is_repeat,
        "span": _symbol(dependency.name),
    }


def dependency_records(dependencies: Iterable[Dependency]) -> List[Dict[str, Any]]:
    return [dependency_record(dep) for dep in dependencies]


def project_records(projects: Iterable[Project]) -> List[Dict[str, Any]]:
    """Nest each project's dependencies under the project name."""
    return [
        {
            "name": project.name.literal,
            "span": _symbol(project.name),
            "configurations": project.configurations,
            "dependencies": dependency_records(project.dependencies),
        }
        for project in projects
    ]


def graph_data(graph: nx.MultiDiGraph) -> Dict[str, Any]:
    return nx.readwrite.json_graph.node_link_data(graph, edges="edges")


def write_json(data: Any, output: TextIO) -> None:
    json.dump(data, output, indent=2, ensure_ascii=False)
    output.write("\n")


def export_json(data: Any, output_path: Path) -> None:
    """Write JSON-ready data to a file.

    Args:
        data: Records or node-link data.
        output_path: Output file path; parent directories are created.
    """
    logger.info("Exporting report to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        write_json(data, f)

    logger.info("JSON export completed: %s", output_path)

"""Parse command implementation."""

import logging
import sys
from pathlib import Path
from typing import Any, Optional, TextIO

from depreport.export.json import (
    dependency_records,
    export_json,
    graph_data,
    project_records,
    write_json,
)
from depreport.graph import build_dependency_graph
from depreport.parsers.base import RecoverableError
from depreport.parsers.gradle import ReportParseResult, parse_report
from depreport.runtime.config_loader import load_parser_config

logger = logging.getLogger("depreport.cli.parse")

OUTPUT_FORMATS = ("projects", "records", "graph")


def _render(result: ReportParseResult, output_format: str) -> Any:
    if output_format == "records":
        return dependency_records(result.dependencies)
    if output_format == "graph":
        return graph_data(build_dependency_graph(result.projects, result.dependencies))
    return project_records(result.projects)


def _parse(report: str, config) -> ReportParseResult:
    if report == "-":
        return parse_report(sys.stdin, config)
    with open(report, "r", encoding="utf-8") as handle:
        return parse_report(handle, config)


def parse_command(args, stdout: Optional[TextIO] = None) -> int:
    """Execute parse command.

    Args:
        args: Parsed command-line arguments containing:
            - report: Report file path or '-'
            - output: Output file path (optional)
            - format: projects, records or graph
            - config: Configuration source (optional)
            - lenient: Skip unknown configuration blocks

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        config = load_parser_config(getattr(args, "config", None))
        if getattr(args, "lenient", False):
            config = config.model_copy(update={"strict_configurations": False})

        result = _parse(args.report, config)
    except RecoverableError as e:
        logger.error("Failed to parse %s: %s", args.report, e)
        return 1
    except OSError as e:
        logger.error("Cannot read report %s: %s", args.report, e)
        return 1

    logger.info(
        "Parsed %d project(s), %d dependency entries",
        len(result.projects),
        len(result.dependencies),
    )

    data = _render(result, getattr(args, "format", "projects"))
    output = getattr(args, "output", None)
    if output:
        try:
            export_json(data, Path(output))
        except OSError as e:
            logger.error("Cannot write %s: %s", output, e)
            return 1
    else:
        write_json(data, stdout or sys.stdout)
    return 0

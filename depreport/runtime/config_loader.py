"""Helpers for loading parser configuration from TOML/JSON sources.

This module provides a single entry point `load_parser_config` that
accepts various configuration sources:

* None -> default ReportParserConfig
* dict -> validated ReportParserConfig
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

TOML and JSON documents may either hold the parser options at top level
or nest them under a ``parser`` table.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from depreport.config.schema import ReportParserConfig
from depreport.parsers.base import ConfigurationError

logger = logging.getLogger("depreport.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], ReportParserConfig, None]


def _from_mapping(data: Dict[str, Any]) -> ReportParserConfig:
    section = data.get("parser", data)
    if not isinstance(section, dict):
        raise ConfigurationError("The 'parser' section must be a mapping/dict")
    try:
        return ReportParserConfig.model_validate(section)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid parser configuration: {exc}") from exc


def _detect_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith(("{", "[")) else "toml"


def load_parser_config(source: ConfigSource) -> ReportParserConfig:
    """Load ReportParserConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns ReportParserConfig.default()
            * ReportParserConfig: returned unchanged
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        ReportParserConfig instance.

    Raises:
        ConfigurationError: The source cannot be decoded or fails validation.
    """
    if source is None:
        logger.debug("No config source provided; using default ReportParserConfig")
        return ReportParserConfig.default()

    if isinstance(source, ReportParserConfig):
        return source

    # Already parsed mapping
    if isinstance(source, dict):
        logger.debug("Loading ReportParserConfig from provided dict")
        return _from_mapping(source)

    # Path or string (file path or inline text)
    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None
        fmt: Optional[str] = None

        if isinstance(source, Path) or (
            "\n" not in str(source) and path.suffix and path.exists()
        ):
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as exc:
                raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _detect_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _detect_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        try:
            data = json.loads(text) if fmt == "json" else tomllib.loads(text)
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(f"Malformed {fmt} configuration: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Top-level configuration must be a mapping/dict")

        return _from_mapping(data)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["load_parser_config"]

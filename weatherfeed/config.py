from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from weatherfeed.parsers import KV_SEPARATOR, PAIR_DELIMITER

CONFIG_FILENAME = "weatherfeed.yaml"
EXAMPLE_CONFIG_FILENAME = "weatherfeed.example.yaml"
OUTPUT_FORMATS = {"json", "kv"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(RuntimeError):
    pass


@dataclass
class ParserConfig:
    pair_delimiter: str = PAIR_DELIMITER
    kv_separator: str = KV_SEPARATOR


@dataclass
class OutputConfig:
    format: str = "json"
    indent: int | None = None
    missing_value: str | None = None


@dataclass
class AppConfig:
    parser: ParserConfig = field(default_factory=ParserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "WARNING"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = AppConfig()


def _merge_dict(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in updates.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def _to_parser(item: Any) -> ParserConfig:
    if not isinstance(item, dict):
        raise ConfigError("parser must be an object")
    pair_delimiter = item.get("pair_delimiter", PAIR_DELIMITER)
    kv_separator = item.get("kv_separator", KV_SEPARATOR)
    if not isinstance(pair_delimiter, str) or not pair_delimiter:
        raise ConfigError("parser.pair_delimiter must be a non-empty string")
    if not isinstance(kv_separator, str) or not kv_separator:
        raise ConfigError("parser.kv_separator must be a non-empty string")
    if pair_delimiter == kv_separator:
        raise ConfigError("parser.pair_delimiter and parser.kv_separator must differ")
    return ParserConfig(pair_delimiter=pair_delimiter, kv_separator=kv_separator)


def _to_output(item: Any) -> OutputConfig:
    if not isinstance(item, dict):
        raise ConfigError("output must be an object")
    fmt = str(item.get("format", "json")).lower()
    if fmt not in OUTPUT_FORMATS:
        raise ConfigError("output.format must be json or kv")
    indent = item.get("indent")
    if indent is not None:
        if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
            raise ConfigError("output.indent must be null or an integer >= 0")
    missing_value = item.get("missing_value")
    return OutputConfig(
        format=fmt,
        indent=indent,
        missing_value=str(missing_value) if missing_value is not None else None,
    )


def _validate(merged: dict[str, Any]) -> AppConfig:
    parser = _to_parser(merged.get("parser", {}))
    output = _to_output(merged.get("output", {}))
    log_level = str(merged.get("log_level", "WARNING")).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError("log_level must be one of " + ", ".join(sorted(LOG_LEVELS)))
    return AppConfig(parser=parser, output=output, log_level=log_level)


def load_config(path: Path | None = None, project_root: Path | None = None) -> AppConfig:
    if path is not None:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        source_path = path
    else:
        root = project_root if project_root is not None else Path.cwd()
        config_yaml = root / CONFIG_FILENAME
        example_yaml = root / EXAMPLE_CONFIG_FILENAME
        source_path = config_yaml if config_yaml.exists() else example_yaml
        if not source_path.exists():
            return DEFAULT_CONFIG

    try:
        text = source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config {source_path}: {exc}") from exc
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config format in {source_path}")

    merged = _merge_dict(DEFAULT_CONFIG.to_dict(), data)
    return _validate(merged)

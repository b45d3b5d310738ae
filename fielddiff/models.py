"""Data models for FieldDiff."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml

from .exceptions import ConfigError


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class NodeKind(Enum):
    OBJECT = "OBJECT"
    ARRAY = "ARRAY"
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    BINARY = "BINARY"
    OPAQUE = "OPAQUE"
    MISSING = "MISSING"


class FieldState(Enum):
    COMMON_SAME = "COMMON_SAME"
    COMMON_DIFFERENT = "COMMON_DIFFERENT"
    ONLY_IN_FIRST = "ONLY_IN_FIRST"
    ONLY_IN_SECOND = "ONLY_IN_SECOND"


class WarningType(Enum):
    MISSING_NODE = "MISSING_NODE"
    UNREADABLE_BINARY = "UNREADABLE_BINARY"


@dataclass
class EngineConfig:
    """Global configuration for the comparison engine."""
    concurrent: bool = False
    max_depth: Optional[int] = None
    log_level: LogLevel = LogLevel.INFO
    collect_warnings: bool = True

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> EngineConfig:
        """
        Build a config from a plain mapping (e.g. a parsed YAML document).

        Unknown keys and values of the wrong type raise ConfigError.
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(
                "Engine config must be a mapping",
                {"type": type(data).__name__}
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}", {"keys": unknown})

        kwargs: dict[str, Any] = {}
        for key in ("concurrent", "collect_warnings"):
            if key in data:
                if not isinstance(data[key], bool):
                    raise ConfigError(f"'{key}' must be a boolean", {"value": data[key]})
                kwargs[key] = data[key]

        if "max_depth" in data:
            max_depth = data["max_depth"]
            if max_depth is not None and (
                isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1
            ):
                raise ConfigError("'max_depth' must be a positive integer or null", {"value": max_depth})
            kwargs["max_depth"] = max_depth

        if "log_level" in data:
            level = str(data["log_level"]).upper()
            if level not in [lvl.value for lvl in LogLevel]:
                raise ConfigError(f"Invalid log level: {data['log_level']}", {"value": data["log_level"]})
            kwargs["log_level"] = LogLevel(level)

        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str | Path) -> EngineConfig:
        """Load config from a YAML or JSON file."""
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            content = f.read()

        # JSON is valid YAML, so one loader covers both
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file: {e}")

        return cls.from_dict(data)


@dataclass
class WarningEntry:
    """A non-fatal observation made while flattening a document."""
    path: str
    type: WarningType
    message: str

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "type": self.type.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class FieldComparison:
    """Classification of a single field path across both documents."""
    path: str
    in_first: bool
    in_second: bool
    value_first: Optional[str]
    value_second: Optional[str]
    state: FieldState
    status: str
    difference: str

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "in_first": self.in_first,
            "in_second": self.in_second,
            "value_first": self.value_first,
            "value_second": self.value_second,
            "state": self.state.value,
            "status": self.status,
            "difference": self.difference,
        }


@dataclass(frozen=True)
class DiffReport:
    """
    Field-by-field comparison of two flattened documents.

    Entries are ordered by path. The report is immutable once built.
    """
    entries: tuple[FieldComparison, ...] = ()
    first_name: str = "File 1"
    second_name: str = "File 2"
    common_fields: int = 0
    only_in_first: int = 0
    only_in_second: int = 0
    different_values: int = 0
    warnings: tuple[WarningEntry, ...] = ()

    @property
    def has_differences(self) -> bool:
        return (self.only_in_first + self.only_in_second + self.different_values) > 0

    @property
    def total_first(self) -> int:
        """Number of paths present in the first document."""
        return sum(1 for e in self.entries if e.in_first)

    @property
    def total_second(self) -> int:
        """Number of paths present in the second document."""
        return sum(1 for e in self.entries if e.in_second)

    def get(self, path: str) -> Optional[FieldComparison]:
        for entry in self.entries:
            if entry.path == path:
                return entry
        return None

    def to_dict(self) -> dict:
        return {
            "first_name": self.first_name,
            "second_name": self.second_name,
            "summary": {
                "common_fields": self.common_fields,
                "only_in_first": self.only_in_first,
                "only_in_second": self.only_in_second,
                "different_values": self.different_values,
            },
            "entries": [e.to_dict() for e in self.entries],
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass
class ExecutionInfo:
    """Execution metadata."""
    duration_ms: int
    timestamp: str
    engine_version: str = "1.0.0"

    def to_dict(self) -> dict:
        return {
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
            "engine_version": self.engine_version,
        }


@dataclass
class ComparisonResult:
    """
    Outcome of comparing two documents end to end.

    ``is_match`` is the structural verdict. ``report`` is built from rendered
    values and can disagree with it (``1`` vs ``1.0`` match structurally but
    render differently). It is None when the documents match but the report
    could not be built.
    """
    is_match: bool
    report: Optional[DiffReport]
    execution: ExecutionInfo
    warnings: list[WarningEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "is_match": self.is_match,
            "execution": self.execution.to_dict(),
            "report": self.report.to_dict() if self.report is not None else None,
            "warnings": [w.to_dict() for w in self.warnings],
        }

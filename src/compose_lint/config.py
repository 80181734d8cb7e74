"""Configuration management for compose-lint."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from compose_lint.exceptions import ConfigError
from compose_lint.models import Severity
from compose_lint.rules.classifier import (
    DEFAULT_IMMUTABLE_COLLECTIONS,
    DEFAULT_IMMUTABLE_MARKERS,
    DEFAULT_MODIFIER_TYPES,
    DEFAULT_UNSTABLE_COLLECTIONS,
    TypeRegistry,
)
from compose_lint.rules.filters import DEFAULT_COMPONENT_MARKERS

if TYPE_CHECKING:
    from compose_lint.rules.issues import Issue

PYPROJECT_TABLE = "compose-lint"


@dataclass
class Config:
    """Central configuration: marker names, type registry and host policy."""

    # Declaration markers (decorator / annotation names, last dotted segment)
    component_markers: frozenset[str] = DEFAULT_COMPONENT_MARKERS
    interface_bases: frozenset[str] = frozenset({"Protocol"})
    abstract_markers: frozenset[str] = frozenset(
        {"abstractmethod", "abstractproperty", "abstractclassmethod", "abstractstaticmethod"}
    )
    platform_markers: frozenset[str] = frozenset({"expect", "actual"})
    override_markers: frozenset[str] = frozenset({"override"})

    # Type registry
    modifier_types: frozenset[str] = DEFAULT_MODIFIER_TYPES
    default_modifier_expression: str = "Modifier"
    unstable_collections: frozenset[str] = DEFAULT_UNSTABLE_COLLECTIONS
    immutable_collections: frozenset[str] = DEFAULT_IMMUTABLE_COLLECTIONS
    immutable_markers: frozenset[str] = DEFAULT_IMMUTABLE_MARKERS

    # Host policy (applied when rendering results, never by the emitter)
    disabled_issues: frozenset[str] = frozenset()
    severity_overrides: dict[str, Severity] = field(default_factory=dict)

    # Execution
    workers: int = 4
    log_dir: Path | None = None

    @property
    def registry(self) -> TypeRegistry:
        return TypeRegistry(
            modifier_types=self.modifier_types,
            unstable_collections=self.unstable_collections,
            immutable_collections=self.immutable_collections,
            immutable_markers=self.immutable_markers,
        )

    def severity_for(self, issue: Issue) -> Severity:
        """Issue severity after applying overrides (ids compared case-insensitively)."""
        for issue_id, severity in self.severity_overrides.items():
            if issue_id.lower() == issue.id.lower():
                return severity
        return issue.severity

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> Config:
        """Build a Config from a ``[tool.compose-lint]``-style mapping.

        Keys may use dashes or underscores. Unknown keys raise ConfigError.
        """
        known = {f.name: f for f in fields(cls)}
        kwargs: dict[str, Any] = {}

        for raw_key, value in data.items():
            key = raw_key.replace("-", "_")
            if key not in known:
                raise ConfigError(f"Unknown configuration key: {raw_key}")

            if key == "severity_overrides":
                kwargs[key] = _parse_severities(value)
            elif key == "log_dir":
                kwargs[key] = Path(value)
            elif key == "workers":
                if not isinstance(value, int) or value < 1:
                    raise ConfigError(f"workers must be a positive integer, got {value!r}")
                kwargs[key] = value
            elif key == "default_modifier_expression":
                if not isinstance(value, str) or not value.strip():
                    raise ConfigError("default_modifier_expression must be a non-empty string")
                kwargs[key] = value
            else:
                if isinstance(value, str) or not isinstance(value, list):
                    raise ConfigError(f"{raw_key} must be a list of names")
                kwargs[key] = frozenset(str(v) for v in value)

        return cls(**kwargs)

    @classmethod
    def from_pyproject(cls, path: Path) -> Config:
        """Load ``[tool.compose-lint]`` from a pyproject.toml. Missing table -> defaults."""
        try:
            with path.open("rb") as f:
                document = tomllib.load(f)
        except OSError as exc:
            raise ConfigError(f"Cannot read {path}: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

        table = document.get("tool", {}).get(PYPROJECT_TABLE, {})
        if not isinstance(table, dict):
            raise ConfigError(f"[tool.{PYPROJECT_TABLE}] must be a table")
        return cls.from_mapping(table)


def _parse_severities(value: Any) -> dict[str, Severity]:
    if not isinstance(value, dict):
        raise ConfigError("severity_overrides must be a table of issue id -> severity")
    try:
        return {str(k): Severity(str(v).lower()) for k, v in value.items()}
    except ValueError as exc:
        raise ConfigError(f"Invalid severity in severity_overrides: {exc}") from exc

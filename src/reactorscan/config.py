"""Scan configuration: defaults, TOML lookup and command-line overrides."""

from __future__ import annotations

import dataclasses
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from reactorscan.errors import ConfigurationConflictError, ConfigurationError
from reactorscan.mapper import DEFAULT_MAX_DEPTH
from reactorscan.model import AggregationStrategy

logger = logging.getLogger(__name__)

DEFAULT_IGNORED_SCOPES = frozenset({"test", "provided"})
DEFAULT_TIME_FORMAT = "[%H:%M:%S] "

_LIST_FIELDS = {"includes", "excludes", "scope", "ignored_scopes"}
_MAP_FIELDS = {"module_tokens", "special_module_tokens"}
_BOOL_FIELDS = {
    "ignore",
    "ignore_pom_modules",
    "aggregate_modules",
    "preserve_module_info",
    "ignore_dependency_resolution_errors",
    "update_empty_project",
    "skip",
    "fail_on_error",
}
_INT_FIELDS = {"max_depth"}


@dataclass(frozen=True)
class ScanConfig:
    """Immutable settings for one scan, shared by every component."""

    project_token: str | None = None
    module_tokens: Mapping[str, str] = field(default_factory=dict)
    special_module_tokens: Mapping[str, str] = field(default_factory=dict)
    ignore: bool = False
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    scope: tuple[str, ...] = ()  # deprecated alias of ignored_scopes
    ignored_scopes: tuple[str, ...] = ()
    ignore_pom_modules: bool = False
    aggregate_modules: bool = False
    preserve_module_info: bool = False
    aggregate_project_name: str | None = None
    aggregate_project_token: str | None = None
    ignore_dependency_resolution_errors: bool = False
    update_empty_project: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    product: str | None = None
    product_version: str | None = None
    skip: bool = False
    fail_on_error: bool = True
    time_format: str = DEFAULT_TIME_FORMAT
    output_directory: Path | None = None

    def __post_init__(self) -> None:
        # read-only views
        object.__setattr__(self, "module_tokens", MappingProxyType(dict(self.module_tokens)))
        object.__setattr__(
            self, "special_module_tokens", MappingProxyType(dict(self.special_module_tokens))
        )

    @property
    def ignored_scope_set(self) -> frozenset[str]:
        """Union of the legacy and primary lists, or the defaults if both are empty."""
        scopes = frozenset(self.scope) | frozenset(self.ignored_scopes)
        return scopes or DEFAULT_IGNORED_SCOPES

    @property
    def merged_module_tokens(self) -> Mapping[str, str]:
        """Module tokens with the special (non-identifier-safe) names layered on top."""
        tokens = dict(self.module_tokens)
        tokens.update(self.special_module_tokens)
        return MappingProxyType(tokens)

    @property
    def aggregation(self) -> AggregationStrategy:
        if self.aggregate_modules and self.preserve_module_info:
            raise ConfigurationConflictError(
                "aggregate_modules and preserve_module_info are mutually exclusive"
            )
        if self.aggregate_modules:
            return AggregationStrategy.FLAT
        if self.preserve_module_info:
            return AggregationStrategy.PRESERVE_MODULES
        return AggregationStrategy.NONE

    def validate(self) -> None:
        """Raise ConfigurationError for settings that make a scan impossible."""
        strategy = self.aggregation
        logger.debug("Aggregation strategy: %s", strategy.value)
        if self.max_depth < 1:
            raise ConfigurationError(f"max_depth must be positive, got {self.max_depth}")

    def with_overrides(self, **overrides: Any) -> ScanConfig:
        """Return a copy with every non-None override applied."""
        given = {k: v for k, v in overrides.items() if v is not None}
        return from_mapping(given, base=self)


def _coerce(key: str, value: Any) -> Any:
    if key in _LIST_FIELDS:
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            return tuple(value)
        raise ConfigurationError(f"{key} must be a list of strings, got {value!r}")
    if key in _MAP_FIELDS:
        if isinstance(value, Mapping):
            return {str(k): str(v) for k, v in value.items()}
        raise ConfigurationError(f"{key} must be a table, got {value!r}")
    if key in _BOOL_FIELDS:
        if isinstance(value, bool):
            return value
        raise ConfigurationError(f"{key} must be true or false, got {value!r}")
    if key in _INT_FIELDS:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise ConfigurationError(f"{key} must be an integer, got {value!r}")
    if key == "output_directory":
        return Path(value)
    if not isinstance(value, str):
        raise ConfigurationError(f"{key} must be a string, got {value!r}")
    return value


def from_mapping(data: Mapping[str, Any], base: ScanConfig | None = None) -> ScanConfig:
    """Build a ScanConfig from a TOML-style table.

    Keys may use dashes or underscores.  Unknown keys are ignored with a
    warning.
    """
    known = {f.name for f in dataclasses.fields(ScanConfig)}
    values: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = raw_key.replace("-", "_")
        if key not in known:
            logger.warning("Ignoring unknown configuration key %r", raw_key)
            continue
        values[key] = _coerce(key, value)
    return dataclasses.replace(base or ScanConfig(), **values)


def read_config(project_dir: Path) -> ScanConfig:
    """Read settings from .reactorscan.toml or [tool.reactorscan] in pyproject.toml."""
    own_toml = project_dir / ".reactorscan.toml"
    if own_toml.exists():
        table = _load_table(own_toml, ("reactorscan",))
        if table is not None:
            return from_mapping(table)

    pyproject = project_dir / "pyproject.toml"
    if pyproject.exists():
        table = _load_table(pyproject, ("tool", "reactorscan"))
        if table is not None:
            return from_mapping(table)

    return ScanConfig()


def _load_table(path: Path, keys: tuple[str, ...]) -> Mapping[str, Any] | None:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        return None
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e

    for key in keys:
        data = data.get(key)
        if not isinstance(data, dict):
            return None
    logger.debug("Loaded configuration from %s", path)
    return data

"""Configuration loading and management for codegauge.

Configuration sources are merged in priority order:
    1. Defaults (defined in MetricsConfig)
    2. Global config (~/.codegauge.toml)
    3. Project config (./codegauge.toml)
    4. Explicit config file
    5. Environment variables (CODEGAUGE_* prefix)
    6. Direct overrides (passed as kwargs, typically CLI flags)

Example:
    >>> config = load_config(verbose=True, min_block_lines=4)
    >>> config.verbosity
    'verbose'
    >>> config.min_block_lines
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_VERBOSITY_LEVELS = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class MetricsConfig:
    """Runtime policy for a metrics run.

    Formula coefficients are not configurable; they live in
    ``codegauge.metrics.constants``. This object only carries the
    resource and presentation policy around them.

    Attributes:
        min_block_lines: Shortest run of identical non-blank lines reported
            as a duplicate block.
        max_duplication_lines: Inputs with more non-blank lines than this
            skip duplication detection (quadratic in line count).
        default_language: Language used when the caller gives none.
        workers: Thread pool size for batch analysis (None = auto).
        verbosity: Logging verbosity.
    """

    min_block_lines: int = 3
    max_duplication_lines: int = 5000
    default_language: str = "javascript"
    workers: Optional[int] = None
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.min_block_lines < 1:
            raise InvalidConfigError(
                "min_block_lines", self.min_block_lines, "must be at least 1"
            )
        if self.max_duplication_lines < 0:
            raise InvalidConfigError(
                "max_duplication_lines", self.max_duplication_lines, "must be non-negative"
            )
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.verbosity not in _VERBOSITY_LEVELS:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"must be one of {', '.join(_VERBOSITY_LEVELS)}"
            )
        if not self.default_language:
            raise InvalidConfigError("default_language", self.default_language, "must not be empty")

    @property
    def resolved_workers(self) -> int:
        """Worker count with auto-detection applied."""
        if self.workers is not None:
            return self.workers
        return min(os.cpu_count() or 4, 8)


DEFAULT_CONFIG = MetricsConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> MetricsConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``verbose``
            and ``quiet`` booleans are translated into ``verbosity``.

    Returns:
        Validated MetricsConfig instance

    Raises:
        ConfigFileError: If a config file is missing or cannot be parsed
        InvalidConfigError: If a value fails validation or a key is unknown
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".codegauge.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "codegauge.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(merged) - set(MetricsConfig.__dataclass_fields__))
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown configuration key")

    return MetricsConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CODEGAUGE_* environment variables.

    Supported environment variables:
        CODEGAUGE_MIN_BLOCK_LINES: int
        CODEGAUGE_MAX_DUPLICATION_LINES: int
        CODEGAUGE_DEFAULT_LANGUAGE: str
        CODEGAUGE_WORKERS: int
        CODEGAUGE_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(MetricsConfig)
    result: dict[str, Any] = {}

    for field_name in MetricsConfig.__dataclass_fields__:
        env_key = f"CODEGAUGE_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict.

    A ``[codegauge]`` table is used when present, otherwise the top level.
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e))

    section = data.get("codegauge")
    if isinstance(section, dict):
        return section
    return data

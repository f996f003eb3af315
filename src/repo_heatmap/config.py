"""Configuration loading and management for repo-heatmap.

Configuration sources are merged in priority order:
    1. Defaults (defined in HeatmapConfig)
    2. Global config (~/.repo-heatmap.toml)
    3. Project config (./repo-heatmap.toml)
    4. Explicit config file (--config)
    5. Environment variables (REPO_HEATMAP_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(max_files=50, exclude=["vendor/"])
    >>> config.max_files
    50
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "REPO_HEATMAP_"
GLOBAL_CONFIG_NAME = ".repo-heatmap.toml"
PROJECT_CONFIG_NAME = "repo-heatmap.toml"


@dataclass(frozen=True)
class HeatmapConfig:
    """Settings for one heatmap run.

    Attributes:
        Server:
            host: Interface the server binds to
            port: Server port (1-65535)
            open_browser: Open the page in a browser once serving

        History:
            since: Passed verbatim to ``git log --since``
            until: Passed verbatim to ``git log --until``
            git_timeout: Seconds to wait for git log (None = no limit)

        Projection:
            max_files: Number of most-changed files drawn as nodes
            include: Substrings a path must contain (any of)
            exclude: Substrings a path must not contain

        Output:
            verbosity: Logging verbosity level
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    open_browser: bool = True

    # History
    since: Optional[str] = None
    until: Optional[str] = None
    git_timeout: Optional[float] = None

    # Projection
    max_files: int = 100
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)

    # Output
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        if not 1 <= self.port <= 65535:
            raise InvalidConfigError("port", self.port, "must be between 1 and 65535")
        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")
        if self.git_timeout is not None and self.git_timeout <= 0:
            raise InvalidConfigError("git_timeout", self.git_timeout, "must be positive")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )
        for name in ("include", "exclude"):
            value = getattr(self, name)
            if isinstance(value, str) or not all(isinstance(p, str) for p in value):
                raise InvalidConfigError(name, value, "must be a list of strings")

    @property
    def verbose(self) -> bool:
        return self.verbosity == "verbose"


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> HeatmapConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset flags never mask lower layers

    Returns:
        Validated HeatmapConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable, or a
            key is unknown
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(HeatmapConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration key(s): {', '.join(unknown)}",
            details={"known": ", ".join(sorted(known))},
        )

    return HeatmapConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from REPO_HEATMAP_* environment variables.

    Supported environment variables:
        REPO_HEATMAP_HOST: str
        REPO_HEATMAP_PORT: int
        REPO_HEATMAP_OPEN_BROWSER: bool (true/false/1/0/yes/no)
        REPO_HEATMAP_SINCE / REPO_HEATMAP_UNTIL: str
        REPO_HEATMAP_GIT_TIMEOUT: float
        REPO_HEATMAP_MAX_FILES: int
        REPO_HEATMAP_INCLUDE / REPO_HEATMAP_EXCLUDE: comma-separated
        REPO_HEATMAP_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(HeatmapConfig)
    result: dict[str, Any] = {}

    for f in fields(HeatmapConfig):
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[f.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment string to the field's type.

    Raises:
        ValueError: If value can't be parsed to the expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none = [t for t in args if t is not type(None)]
        if non_none:
            type_hint = non_none[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list:
        return split_patterns(value)

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


def split_patterns(value: Optional[str]) -> Optional[list[str]]:
    """Split a comma-separated pattern list, dropping blanks.

    Returns None when *value* is None so callers can tell "unset" apart.
    """
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

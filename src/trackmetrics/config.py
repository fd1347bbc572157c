"""
trackmetrics configuration loader

This module centralizes *all* configuration handling for trackmetrics.

Design goals:
- Keep the CLI Unix-friendly: flags override everything.
- Provide sensible defaults if no config exists (the analysis thresholds
  the engine was designed around: 1.5 km/h, 1 second).
- Allow per-machine config:
    ~/.config/trackmetrics/config.toml
- Allow repo-local config:
    <repo_root>/config/config.toml
- Allow environment variable overrides for automation.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by the entry point)
2) Environment variables (TRACKMETRICS_*)
3) User config: ~/.config/trackmetrics/config.toml
4) Repo config: <repo_root>/config/config.toml
5) Hard defaults

Example config.toml:

    [filter]
    min_speed_kmh = 1.5
    min_interval_s = 1.0

This module uses Python's built-in tomllib on Python 3.11+, or `tomli` if installed.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from trackmetrics.analyze.movement import MIN_INTERVAL_S, MIN_SPEED_KMH
from trackmetrics.errors import ConfigError


# ---------------------------------------------------------------------------
# TOML loading helpers
# ---------------------------------------------------------------------------
def _load_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file at `path`.

    Behavior:
    - If the file does not exist, return an empty dict (non-fatal).
    - If the file exists but is invalid TOML, raise a ConfigError
      with a clear, user-facing message.
    """
    if not path.is_file():
        return {}

    try:
        try:
            # Python 3.11+ standard library
            import tomllib
            return tomllib.loads(path.read_text(encoding="utf-8")) or {}
        except ModuleNotFoundError:
            import tomli
            return tomli.loads(path.read_text(encoding="utf-8")) or {}
    except Exception as e:
        raise ConfigError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Example:
        _deep_get(cfg, "filter.min_speed_kmh")

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_threshold(v: Any, where: str) -> Optional[float]:
    """
    Coerce a config value into a non-negative finite float.

    None means "not set". Anything unusable raises ConfigError.
    """
    if v is None:
        return None
    if isinstance(v, bool):
        raise ConfigError(f"{where}: expected a number, got {v!r}")
    try:
        f = float(v.strip() if isinstance(v, str) else v)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{where}: expected a number, got {v!r}") from e
    if not math.isfinite(f) or f < 0:
        raise ConfigError(f"{where}: expected a non-negative number, got {v!r}")
    return f


# ---------------------------------------------------------------------------
# Repo discovery
# ---------------------------------------------------------------------------
def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for the repo root.

    Heuristic:
    - The presence of a `config/` directory marks the repo root
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


# ---------------------------------------------------------------------------
# Typed config dataclasses
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FilterConfig:
    """Thresholds for the movement filter."""

    min_speed_kmh: float = MIN_SPEED_KMH
    min_interval_s: float = MIN_INTERVAL_S


@dataclass(frozen=True)
class TrackMetricsConfig:
    """
    Fully merged configuration.

    Attributes:
    - filter: movement filter thresholds
    - source: provenance map showing where each value came from
    """

    filter: FilterConfig
    source: dict[str, str]


_KEYS = ("filter.min_speed_kmh", "filter.min_interval_s")

_ENV_MAP = {
    "TRACKMETRICS_MIN_SPEED_KMH": "filter.min_speed_kmh",
    "TRACKMETRICS_MIN_INTERVAL_S": "filter.min_interval_s",
}


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_root: Optional[Path] = None,
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> TrackMetricsConfig:
    """
    Load and merge all trackmetrics configuration.

    This function is the single authoritative entry point
    for configuration access.
    """

    # Locate repo and config files
    if repo_root is None:
        repo_root = find_repo_root(Path(__file__).resolve())
    if repo_config_path is None and repo_root is not None:
        repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "trackmetrics" / "config.toml"

    repo_cfg = _load_toml(repo_config_path) if repo_config_path else {}
    user_cfg = _load_toml(user_config_path) if user_config_path else {}

    values: dict[str, float] = {
        "filter.min_speed_kmh": MIN_SPEED_KMH,
        "filter.min_interval_s": MIN_INTERVAL_S,
    }
    src = {k: "default" for k in _KEYS}

    # Repo, then user (user overrides repo)
    for cfg, label, path in (
        (repo_cfg, "repo", repo_config_path),
        (user_cfg, "user", user_config_path),
    ):
        for k in _KEYS:
            v = _as_threshold(_deep_get(cfg, k), f"{path}: {k}")
            if v is None:
                continue
            values[k] = v
            src[k] = f"{label}:{path}"

    # Environment variable overrides (highest non-CLI precedence)
    for env, key in _ENV_MAP.items():
        raw = os.environ.get(env)
        if not raw:
            continue
        values[key] = _as_threshold(raw, env)
        src[key] = f"env:{env}"

    return TrackMetricsConfig(
        filter=FilterConfig(
            min_speed_kmh=values["filter.min_speed_kmh"],
            min_interval_s=values["filter.min_interval_s"],
        ),
        source=src,
    )

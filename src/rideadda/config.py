"""
RideAdda configuration loader

This module centralizes *all* configuration handling for RideAdda.

Design goals:
- Keep the CLI Unix-friendly: flags override everything.
- Provide sensible defaults if no config exists.
- Allow per-machine config without committing personal paths:
    ~/.config/rideadda/config.toml
- Allow repo-local config:
    <repo_root>/config/config.toml
- Allow environment variable overrides for automation.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by the CLI)
2) Environment variables (RIDEADDA_*)
3) User config: ~/.config/rideadda/config.toml
4) Repo config: <repo_root>/config/config.toml
5) Hard defaults

Recognized keys:

    [paths]
    work_root = "~/Rides/_work"     # where the CLI looks for *.gpx

    [analytics]
    max_plausible_speed_kph = 180.0 # segment speeds at/above this are jitter
    idle_gap_s = 60                 # optional; unset = wall-clock moving time

This module uses Python's built-in tomllib on Python 3.11+, or `tomli` if installed.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from rideadda.analyze.track import MAX_PLAUSIBLE_SPEED_KPH, AnalyticsSettings
from rideadda.errors import ConfigError

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

    Missing config files are normal; malformed ones indicate user intent
    and should fail loudly.
    """
    if not path.is_file():
        return {}

    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib

    try:
        return tomllib.loads(path.read_text(encoding="utf-8")) or {}
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        # Wrap parsing errors with file context for usability
        raise ConfigError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Example:
        _deep_get(cfg, "analytics.idle_gap_s")

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_path(v: Any) -> Optional[Path]:
    """
    Coerce a config value into a pathlib.Path if possible.

    Returns None if value cannot be interpreted as a path.
    """
    if v is None:
        return None
    if isinstance(v, Path):
        return v.expanduser()
    if isinstance(v, str):
        return Path(v).expanduser()
    return None


def _as_positive_float(v: Any) -> Optional[float]:
    """
    Coerce TOML numbers or env strings into a positive, finite float.

    Anything else (missing, garbage, zero, negative, inf/nan) yields None,
    which callers treat as "not configured here".
    """
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f) or f <= 0:
        return None
    return f


def _env_path(var: str) -> Optional[Path]:
    """
    Read an environment variable and interpret it as a Path.

    Used for automation, CI, and power-user overrides.
    """
    val = os.environ.get(var)
    return Path(val).expanduser() if val else None


# ---------------------------------------------------------------------------
# Repo discovery + defaults
# ---------------------------------------------------------------------------
def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for the RideAdda repo root.

    Heuristic:
    - The presence of a `config/` directory marks the repo root
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


def default_work_root() -> Path:
    """Default location of recorded GPX tracks if nothing is configured."""
    return Path.home() / "Rides" / "_work"


# ---------------------------------------------------------------------------
# Typed config dataclasses
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RideAddaPaths:
    """
    Canonical resolved filesystem paths used by RideAdda.
    """

    work_root: Path


@dataclass(frozen=True)
class RideAddaConfig:
    """
    Fully merged RideAdda configuration.

    Attributes:
    - paths: resolved filesystem layout
    - analytics: reducer tunables, ready to pass to compute_ride_statistics
    - source: provenance map showing where each value came from
    """

    paths: RideAddaPaths
    analytics: AnalyticsSettings
    source: dict[str, str]


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_root: Optional[Path] = None,
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> RideAddaConfig:
    """
    Load, merge, and normalize all RideAdda configuration.

    This function is the single authoritative entry point
    for configuration access.
    """

    # Locate repo and config files
    if repo_root is None:
        repo_root = find_repo_root(Path(__file__).resolve())
    if repo_config_path is None and repo_root is not None:
        repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "rideadda" / "config.toml"

    # Load raw TOML dicts
    repo_cfg = _load_toml(repo_config_path) if repo_config_path else {}
    user_cfg = _load_toml(user_config_path) if user_config_path else {}

    # ------------------------------------------------------------------
    # Defaults
    # ------------------------------------------------------------------
    work_root = default_work_root()
    max_speed = MAX_PLAUSIBLE_SPEED_KPH
    idle_gap: Optional[float] = None

    # Track provenance for debugging
    src = {
        "paths.work_root": "default",
        "analytics.max_plausible_speed_kph": "default",
        "analytics.idle_gap_s": "default",
    }

    # ------------------------------------------------------------------
    # Repo + user overrides (user wins)
    # ------------------------------------------------------------------
    for cfg, label, cfg_path in (
        (repo_cfg, "repo", repo_config_path),
        (user_cfg, "user", user_config_path),
    ):
        v_path = _as_path(_deep_get(cfg, "paths.work_root"))
        if v_path is not None:
            work_root = v_path
            src["paths.work_root"] = f"{label}:{cfg_path}"

        v_speed = _as_positive_float(_deep_get(cfg, "analytics.max_plausible_speed_kph"))
        if v_speed is not None:
            max_speed = v_speed
            src["analytics.max_plausible_speed_kph"] = f"{label}:{cfg_path}"

        v_gap = _as_positive_float(_deep_get(cfg, "analytics.idle_gap_s"))
        if v_gap is not None:
            idle_gap = v_gap
            src["analytics.idle_gap_s"] = f"{label}:{cfg_path}"

    # ------------------------------------------------------------------
    # Environment variable overrides (highest non-CLI precedence)
    # ------------------------------------------------------------------
    env_work_root = _env_path("RIDEADDA_WORK_ROOT")
    if env_work_root is not None:
        work_root = env_work_root
        src["paths.work_root"] = "env:RIDEADDA_WORK_ROOT"

    env_speed = _as_positive_float(os.environ.get("RIDEADDA_MAX_SPEED_KPH"))
    if env_speed is not None:
        max_speed = env_speed
        src["analytics.max_plausible_speed_kph"] = "env:RIDEADDA_MAX_SPEED_KPH"

    env_gap = _as_positive_float(os.environ.get("RIDEADDA_IDLE_GAP_S"))
    if env_gap is not None:
        idle_gap = env_gap
        src["analytics.idle_gap_s"] = "env:RIDEADDA_IDLE_GAP_S"

    return RideAddaConfig(
        paths=RideAddaPaths(work_root=work_root.expanduser()),
        analytics=AnalyticsSettings(
            max_plausible_speed_kph=max_speed,
            idle_gap_s=idle_gap,
        ),
        source=src,
    )

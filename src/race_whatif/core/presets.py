"""
YAML → preset scenario loader.

Loads named what-if presets from presets.yaml (bundled with the package)
and optionally merges user presets from ~/.race-whatif/presets.yaml.

Usage:
    from race_whatif.core.presets import get_preset
    preset = get_preset("hot")
    compare_scenarios(baseline, preset.overrides, pace, distance)

If the user file exists but cannot be parsed, a warning is emitted and
the file is ignored. A broken bundled file is a packaging error and
raises RuntimeError.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import UnknownParameter
from .validation import resolve_parameter


@dataclass(frozen=True)
class Preset:
    """A named set of overrides."""

    key: str
    name: str
    description: str = ""
    overrides: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping. Raises yaml.YAMLError / OSError on failure."""
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def preset_from_dict(key: str, d: dict[str, Any]) -> Preset:
    """
    Convert a raw YAML entry to a Preset.

    Raises ValueError if the entry is malformed or names an unknown parameter.
    """
    if not isinstance(d, dict):
        raise ValueError(f"preset {key!r} must be a mapping")
    overrides = d.get("overrides") or {}
    if not isinstance(overrides, dict):
        raise ValueError(f"preset {key!r}: overrides must be a mapping")
    for name in overrides:
        try:
            resolve_parameter(name)
        except UnknownParameter as e:
            raise ValueError(f"preset {key!r}: {e}") from e

    return Preset(
        key=key,
        name=str(d.get("name", key)),
        description=str(d.get("description", "")),
        overrides=dict(overrides),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_presets_path() -> Path:
    """Return the path to the bundled presets.yaml."""
    ref = importlib.resources.files("race_whatif").joinpath("presets.yaml")
    with importlib.resources.as_file(ref) as p:
        return p


def get_user_presets_path() -> Path | None:
    """Return ~/.race-whatif/presets.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".race-whatif" / "presets.yaml"
    return p if p.exists() else None


def load_presets() -> dict[str, Preset]:
    """
    Load and merge preset scenarios.

    Load order (later overrides earlier):
    1. Bundled src/race_whatif/presets.yaml
    2. User file at ~/.race-whatif/presets.yaml

    Returns:
        {preset_key: Preset}, in file order
    """
    bundled = get_bundled_presets_path()
    try:
        config = _load_yaml_file(bundled)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise RuntimeError(f"race-whatif: cannot load bundled presets ({exc})") from exc

    user = get_user_presets_path()
    if user is not None:
        try:
            config = _deep_merge(config, _load_yaml_file(user))
        except (OSError, ValueError, yaml.YAMLError) as exc:
            warnings.warn(
                f"race-whatif: ignoring user presets at {user} ({exc})",
                stacklevel=2,
            )

    entries = config.get("presets") or {}
    if not isinstance(entries, dict):
        raise RuntimeError("race-whatif: 'presets' must be a mapping of preset keys")

    result: dict[str, Preset] = {}
    for key, raw in entries.items():
        try:
            result[key] = preset_from_dict(key, raw)
        except ValueError as exc:
            warnings.warn(f"race-whatif: skipping preset: {exc}", stacklevel=2)
    return result


def get_preset(key: str) -> Preset:
    """
    Return one preset by key.

    Raises:
        ValueError: If the key is unknown
    """
    presets = load_presets()
    if key not in presets:
        valid = ", ".join(presets)
        raise ValueError(f"Unknown preset '{key}'. Valid keys: {valid}")
    return presets[key]

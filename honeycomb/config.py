"""Defaults and JSON loading for the honeycomb toy."""
from __future__ import annotations

import copy
import json
import logging
import os
from fractions import Fraction
from typing import Any, Dict, Optional

LOG = logging.getLogger("honeycomb.config")

# --------------------------- CONFIG ---------------------------
DEFAULT_CONFIG: Dict[str, Any] = {
    # Surface / lattice
    "width": 1280,
    "height": 800,
    "fps": 60,
    "hex_radius": 40.0,
    "neighbor_distance_factor": 1.9,

    # Pitch palette
    "base_freq": 220.0,
    "ratio_scale": (1.0, 9 / 8, 5 / 4, 45 / 32, 3 / 2, 5 / 3, 15 / 8),
    "pitches_per_cell": 6,
    "octave_range": (0, 7),

    # Energy
    "active_rate": 80.0,
    "decay_rate": 5.0,

    # Spillage
    "spillage_interval_ms": 100,
    "spillage_threshold": 30.0,
    "spillage_amount": 50.0,
    "spillage_probability": 0.2,

    # Audio
    "tone_duration": 0.5,
    "attack_time": 0.01,
    "tone_peak": 0.2,
    "master_volume": 0.3,
    "sample_rate": 44100,
    "mixer_channels": 64,
    "mixer_buffer": 512,

    # Colors
    "background_top": (14, 10, 24),
    "background_bottom": (40, 22, 8),
    "cell_base_color": (46, 30, 12),
    "active_outline_color": (255, 196, 0),
    "glow_color": (255, 214, 120),
    "glow_max_blur": 18.0,
    "glow_max_opacity": 0.85,
    "glow_levels": 24,

    # Display / UX
    "debug_overlay": False,
    "save_frames_dir": "frames",
    "seed": None,
}
# --------------------------------------------------------------

DEFAULT_CONFIG_PATH = "config.json"


def _coerce_ratio(value) -> float:
    if isinstance(value, str):
        return float(Fraction(value.strip()))
    return float(value)


def _coerce_config_value(value, default):
    """Best-effort coercion of JSON-loaded values to match defaults."""

    if isinstance(default, tuple):
        if isinstance(value, (list, tuple)):
            return tuple(value)
        return default
    if isinstance(default, bool):
        return bool(value)
    if isinstance(default, float) and isinstance(value, int):
        return float(value)
    return value


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return config
    try:
        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
    except FileNotFoundError:
        LOG.debug("No config file at %s, using defaults", path)
        return config
    except json.JSONDecodeError as exc:
        LOG.warning("Failed to parse config file %s: %s", path, exc)
        return config
    if not isinstance(user_config, dict):
        LOG.warning("Config file %s must hold a JSON object, got %s; using defaults", path, type(user_config).__name__)
        return config
    for key, value in user_config.items():
        if key in config:
            config[key] = _coerce_config_value(value, config[key])
        else:
            LOG.warning("Ignoring unknown config key %r in %s", key, path)
    config["ratio_scale"] = tuple(_coerce_ratio(r) for r in config["ratio_scale"])
    config["save_frames_dir"] = resolve_path(config["save_frames_dir"], os.path.dirname(os.path.abspath(path)))
    return config


def resolve_path(path_value: Optional[str], base_dir: str) -> Optional[str]:
    if path_value in (None, ""):
        return path_value
    path_str = str(path_value)
    if os.path.isabs(path_str):
        return path_str
    return os.path.abspath(os.path.join(base_dir, path_str))


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Raise ValueError for settings the simulation cannot run with."""

    if config["hex_radius"] <= 0:
        raise ValueError(f"hex_radius must be positive, got {config['hex_radius']}")
    if config["width"] <= 0 or config["height"] <= 0:
        raise ValueError(f"surface size must be positive, got {config['width']}x{config['height']}")
    if not 0 <= config["decay_rate"] < config["active_rate"]:
        raise ValueError(
            f"decay_rate ({config['decay_rate']}) must be non-negative and below active_rate ({config['active_rate']})"
        )
    if not 0.0 <= config["spillage_probability"] <= 1.0:
        raise ValueError(f"spillage_probability must be within [0, 1], got {config['spillage_probability']}")
    if config["spillage_interval_ms"] <= 0:
        raise ValueError("spillage_interval_ms must be positive")
    if config["spillage_amount"] <= 0:
        raise ValueError("spillage_amount must be positive")
    if any(r <= 0 for r in config["ratio_scale"]):
        raise ValueError("ratio_scale entries must be positive")
    if len(set(config["ratio_scale"])) != len(config["ratio_scale"]):
        raise ValueError("ratio_scale entries must be unique")
    if not 0 < config["pitches_per_cell"] <= len(config["ratio_scale"]):
        raise ValueError(
            f"pitches_per_cell ({config['pitches_per_cell']}) must be between 1 and the "
            f"ratio scale size ({len(config['ratio_scale'])})"
        )
    lo, hi = config["octave_range"]
    if lo > hi:
        raise ValueError(f"octave_range is inverted: {config['octave_range']}")
    if config["base_freq"] <= 0:
        raise ValueError("base_freq must be positive")
    if config["tone_duration"] <= 0:
        raise ValueError("tone_duration must be positive")
    return config


__all__ = ["DEFAULT_CONFIG", "DEFAULT_CONFIG_PATH", "load_config", "resolve_path", "validate_config"]

# Configuration loading and validation
# YAML in, simulation objects out

import copy
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
import yaml

from .core.types import VehicleState, WorldBounds
from .sim.inputs import ScriptedInput
from .sim.loop import FixedTimestepLoop, PeriodicReporter


DEFAULT_CONFIG: Dict[str, Any] = {
    "vehicle": {
        "max_speed": 150.0,
        "accel_rate": 40.0,
        "brake_rate": 60.0,
        "max_steering_angle_deg": 30.0,
        "wheel_base": 50.0,
        "track": 30.0,
    },
    "world": {
        "width": 1200.0,
        "height": 800.0,
    },
    "sim": {
        "tick_rate": 120.0,
        "max_ticks_per_frame": 8,
        "frame_rate": 60.0,
        "duration": 10.0,
        "report_interval": 0.5,
    },
    "maneuvers": [],
    "logging": {
        "level": "INFO",
        "log_file": None,
    },
}


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _is_number(value) -> bool:
    # YAML booleans are ints to isinstance; .inf/.nan parse as floats
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return bool(np.isfinite(value))


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Missing sections and keys fall back to DEFAULT_CONFIG.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary
    """
    with open(config_path) as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")
    return _merge(DEFAULT_CONFIG, config)


def apply_overrides(config: dict, overrides: list) -> dict:
    """Apply command-line overrides to config.

    Args:
        config: Base configuration
        overrides: List of "key.subkey=value" strings

    Returns:
        Modified configuration
    """
    for override in overrides:
        if "=" not in override:
            raise ValueError(f"Invalid override format: {override}. Expected key=value")

        key, value = override.split("=", 1)
        keys = key.split(".")

        d = config
        for k in keys[:-1]:
            if k not in d:
                d[k] = {}
            d = d[k]

        # YAML scalar parsing gives ints, floats, bools and null
        d[keys[-1]] = yaml.safe_load(value)

    return config


def validate_config(config: dict) -> List[str]:
    """Validate configuration.

    Args:
        config: Configuration dictionary

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    for section in ("vehicle", "world", "sim"):
        if not isinstance(config.get(section), dict):
            errors.append(f"Missing required section: {section}")
    if errors:
        return errors

    vehicle = config["vehicle"]
    for name in ("max_speed", "wheel_base", "track"):
        value = vehicle.get(name, 0)
        if not _is_number(value) or value <= 0:
            errors.append(f"vehicle.{name} must be positive, got {value}")
    for name in ("accel_rate", "brake_rate"):
        value = vehicle.get(name, -1)
        if not _is_number(value) or value < 0:
            errors.append(f"vehicle.{name} must be non-negative, got {value}")
    angle = vehicle.get("max_steering_angle_deg", 0)
    if not _is_number(angle) or not 0 < angle < 90:
        errors.append(f"vehicle.max_steering_angle_deg must be in (0, 90), got {angle}")

    world = config["world"]
    for name in ("width", "height"):
        value = world.get(name, 0)
        if not _is_number(value) or value <= 0:
            errors.append(f"world.{name} must be positive, got {value}")

    sim = config["sim"]
    for name in ("tick_rate", "frame_rate", "report_interval"):
        value = sim.get(name, 0)
        if not _is_number(value) or value <= 0:
            errors.append(f"sim.{name} must be positive, got {value}")
    duration = sim.get("duration", -1)
    if not _is_number(duration) or duration < 0:
        errors.append(f"sim.duration must be non-negative, got {duration}")
    max_ticks = sim.get("max_ticks_per_frame", 0)
    if isinstance(max_ticks, bool) or not isinstance(max_ticks, int) or max_ticks < 1:
        errors.append(f"sim.max_ticks_per_frame must be a positive integer, got {max_ticks}")

    maneuvers = config.get("maneuvers") or []
    if not isinstance(maneuvers, list):
        errors.append("maneuvers must be a list")
    else:
        try:
            ScriptedInput.from_config(maneuvers)
        except (ValueError, TypeError, AttributeError) as e:
            errors.append(f"maneuvers: {e}")

    return errors


def build_vehicle(config: dict) -> VehicleState:
    """Vehicle at rest from the `vehicle` section."""
    v = config["vehicle"]
    return VehicleState.at_rest(
        max_speed=float(v["max_speed"]),
        accel_rate=float(v["accel_rate"]),
        brake_rate=float(v["brake_rate"]),
        max_steering_angle=float(np.radians(v["max_steering_angle_deg"])),
        wheel_base=float(v["wheel_base"]),
        track=float(v["track"]),
    )


def build_world(config: dict) -> WorldBounds:
    w = config["world"]
    return WorldBounds(width=float(w["width"]), height=float(w["height"]))


def build_loop(config: dict) -> FixedTimestepLoop:
    s = config["sim"]
    return FixedTimestepLoop(
        tick_rate=float(s["tick_rate"]),
        max_ticks_per_frame=int(s["max_ticks_per_frame"]),
    )


def build_reporter(config: dict) -> PeriodicReporter:
    return PeriodicReporter(interval=float(config["sim"]["report_interval"]))


def build_inputs(config: dict) -> ScriptedInput:
    return ScriptedInput.from_config(config.get("maneuvers") or [])

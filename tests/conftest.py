# Pytest configuration and fixtures

import copy

import pytest
import numpy as np
from pathlib import Path
import tempfile
import yaml

from kinecar.config import DEFAULT_CONFIG
from kinecar.core.types import VehicleState, WorldBounds
from kinecar.sim.car import CarBody


@pytest.fixture
def seed():
    """Fixed seed for reproducibility."""
    return 42


@pytest.fixture
def rng(seed):
    """Seeded random generator."""
    return np.random.default_rng(seed)


@pytest.fixture
def dt():
    """Reference tick duration (120 Hz)."""
    return 1.0 / 120.0


@pytest.fixture
def vehicle():
    """Reference car at rest."""
    return VehicleState.at_rest(
        max_speed=150.0,
        accel_rate=40.0,
        brake_rate=60.0,
        max_steering_angle=float(np.radians(30.0)),
        wheel_base=50.0,
        track=30.0,
    )


@pytest.fixture
def bounds():
    """Reference 1200 x 800 world."""
    return WorldBounds(width=1200.0, height=800.0)


@pytest.fixture
def car(vehicle):
    """Reference car at the origin facing +y."""
    return CarBody(state=vehicle)


@pytest.fixture
def config():
    """Standard test configuration."""
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    cfg["sim"]["duration"] = 2.0
    cfg["maneuvers"] = [
        {"duration": 1.0, "keys": ["up"]},
        {"duration": 0.5, "keys": ["up", "left"]},
    ]
    cfg["logging"]["level"] = "WARNING"
    return cfg


@pytest.fixture
def temp_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_file(config, temp_dir):
    """Create temporary config file."""
    config_path = temp_dir / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(config, f)
    return config_path

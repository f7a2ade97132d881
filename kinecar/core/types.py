# Core type definitions
# FORBIDDEN: logging, any I/O

from dataclasses import dataclass, replace
from typing import Iterable, Tuple
import numpy as np

from .physics import turning_radius


# Reference car, as tuned for the 1200 x 800 world
DEFAULT_MAX_SPEED = 150.0
DEFAULT_ACCEL_RATE = 40.0
DEFAULT_BRAKE_RATE = 60.0
DEFAULT_MAX_STEERING_ANGLE = float(np.radians(30.0))
DEFAULT_WHEEL_BASE = 50.0
DEFAULT_TRACK = 30.0


@dataclass(frozen=True)
class VehicleState:
    """Motion and steering parameters plus the current dynamic values.

    Constants are fixed at construction; `speed`, `yaw` and `steering_angle`
    change once per tick through the integrator, which returns a new
    instance rather than mutating this one.
    """
    max_speed: float = DEFAULT_MAX_SPEED
    accel_rate: float = DEFAULT_ACCEL_RATE        # speed units / s
    brake_rate: float = DEFAULT_BRAKE_RATE        # speed units / s
    max_steering_angle: float = DEFAULT_MAX_STEERING_ANGLE  # rad, +-
    wheel_base: float = DEFAULT_WHEEL_BASE
    track: float = DEFAULT_TRACK                  # visual layout only
    speed: float = 0.0
    yaw: float = 0.0
    steering_angle: float = 0.0

    def __post_init__(self):
        for name in (
            "max_speed", "accel_rate", "brake_rate", "max_steering_angle",
            "wheel_base", "track", "speed", "yaw", "steering_angle",
        ):
            if not np.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite, got {getattr(self, name)}")

        if self.max_speed <= 0:
            raise ValueError(f"max_speed must be positive, got {self.max_speed}")
        if self.accel_rate < 0:
            raise ValueError(f"accel_rate must be non-negative, got {self.accel_rate}")
        if self.brake_rate < 0:
            raise ValueError(f"brake_rate must be non-negative, got {self.brake_rate}")
        if not 0.0 < self.max_steering_angle < np.pi / 2:
            raise ValueError(
                f"max_steering_angle must be in (0, pi/2), got {self.max_steering_angle}"
            )
        if self.wheel_base <= 0:
            raise ValueError(f"wheel_base must be positive, got {self.wheel_base}")
        if self.track <= 0:
            raise ValueError(f"track must be positive, got {self.track}")
        if abs(self.speed) > self.max_speed:
            raise ValueError(f"|speed| exceeds max_speed: {self.speed}")
        if abs(self.steering_angle) > self.max_steering_angle:
            raise ValueError(
                f"|steering_angle| exceeds max_steering_angle: {self.steering_angle}"
            )

    @classmethod
    def at_rest(cls, **constants) -> "VehicleState":
        """Create a vehicle with the given constants and zero dynamics."""
        return cls(speed=0.0, yaw=0.0, steering_angle=0.0, **constants)

    def with_dynamics(self, **changes) -> "VehicleState":
        """Copy with new `speed`, `yaw` and/or `steering_angle`."""
        unknown = set(changes) - {"speed", "yaw", "steering_angle"}
        if unknown:
            raise TypeError(f"Not a dynamic field: {sorted(unknown)}")
        return replace(self, **changes)

    @property
    def turning_radius(self) -> float:
        """Radius of the full-lock turning circle."""
        return turning_radius(self.wheel_base, self.max_steering_angle)

    @property
    def steering_deg(self) -> float:
        return float(np.degrees(self.steering_angle))


_KEY_ALIASES = {
    "up": "throttle_forward",
    "down": "throttle_reverse",
    "left": "steer_left",
    "right": "steer_right",
}


@dataclass(frozen=True)
class InputIntent:
    """Held-key snapshot for one tick. Level-triggered."""
    throttle_forward: bool = False
    throttle_reverse: bool = False
    steer_left: bool = False
    steer_right: bool = False

    @classmethod
    def idle(cls) -> "InputIntent":
        return cls()

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> "InputIntent":
        """Build from arrow-key names.

        Args:
            keys: Any of "up", "down", "left", "right" (case-insensitive)

        Returns:
            Intent with the matching signals held
        """
        held = {}
        for key in keys:
            name = _KEY_ALIASES.get(str(key).strip().lower())
            if name is None:
                raise ValueError(f"Unknown key: {key!r}")
            held[name] = True
        return cls(**held)

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(k for k, field in _KEY_ALIASES.items() if getattr(self, field))


@dataclass(frozen=True)
class PoseDelta:
    """World-space change produced by one tick."""
    dx: float = 0.0
    dy: float = 0.0
    rotation: float = 0.0   # rad, about the vertical axis


@dataclass(frozen=True)
class Pose:
    """Chassis position and heading in world coordinates."""
    x: float = 0.0
    y: float = 0.0
    yaw: float = 0.0

    def apply(self, delta: PoseDelta) -> "Pose":
        return Pose(
            x=self.x + delta.dx,
            y=self.y + delta.dy,
            yaw=self.yaw + delta.rotation,
        )

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


@dataclass(frozen=True)
class WheelIndicators:
    """Front-wheel angles relative to the chassis."""
    left: float = 0.0
    right: float = 0.0


@dataclass(frozen=True)
class WorldBounds:
    """Rectangular world centred on the origin."""
    width: float = 1200.0
    height: float = 800.0

    def __post_init__(self):
        if not (np.isfinite(self.width) and self.width > 0):
            raise ValueError(f"width must be positive, got {self.width}")
        if not (np.isfinite(self.height) and self.height > 0):
            raise ValueError(f"height must be positive, got {self.height}")

    @property
    def half_extents(self) -> Tuple[float, float]:
        return self.width / 2.0, self.height / 2.0

    def clamp(self, x: float, y: float) -> Tuple[float, float]:
        """Clamp a position to the world, each axis independently."""
        half_w, half_h = self.half_extents
        return (
            max(-half_w, min(half_w, x)),
            max(-half_h, min(half_h, y)),
        )

    def contains(self, x: float, y: float) -> bool:
        half_w, half_h = self.half_extents
        return -half_w <= x <= half_w and -half_h <= y <= half_h

    def on_boundary(self, x: float, y: float) -> bool:
        half_w, half_h = self.half_extents
        return abs(x) == half_w or abs(y) == half_h


@dataclass(frozen=True)
class StepResult:
    """Output of one integrator tick."""
    state: VehicleState
    delta: PoseDelta
    wheels: WheelIndicators

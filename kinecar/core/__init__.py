# Core module - Pure functions, no side effects
# FORBIDDEN: logging, pathlib, any I/O

from .types import (
    VehicleState,
    InputIntent,
    Pose,
    PoseDelta,
    WheelIndicators,
    WorldBounds,
    StepResult,
)
from .math_utils import clamp, rotate_2d, forward_vector
from .physics import slip_angle, yaw_rate, turning_radius
from .integrator import step, update_speed, update_steering, integrate_pose, STEER_RATE, STEERING_DECAY

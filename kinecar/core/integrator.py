# Per-tick motion integration
# FORBIDDEN: logging, any I/O

from typing import Optional

import numpy as np

from .types import (
    InputIntent,
    Pose,
    PoseDelta,
    StepResult,
    VehicleState,
    WheelIndicators,
)
from .math_utils import clamp, forward_vector
from .physics import slip_angle, yaw_rate


STEER_RATE = float(np.radians(60.0))  # rad/s while a steer key is held

# Applied once per tick with no steer key held. Not scaled by dt, so the
# return-to-centre time depends on the tick rate.
STEERING_DECAY = 0.9


def _check_dt(dt: float) -> None:
    if not np.isfinite(dt) or dt < 0:
        raise ValueError(f"dt must be finite and non-negative, got {dt}")


def update_speed(state: VehicleState, intent: InputIntent, dt: float) -> float:
    """Integrate throttle, brake and coasting.

    Forward wins over reverse. With neither held the car coasts toward
    zero at accel_rate without crossing it.

    Args:
        state: Current vehicle state
        intent: Held keys for this tick
        dt: Tick duration in seconds

    Returns:
        New signed speed, |speed| <= max_speed
    """
    top = state.max_speed
    if intent.throttle_forward:
        return clamp(state.speed + state.accel_rate * dt, -top, top)
    if intent.throttle_reverse:
        return clamp(state.speed - state.brake_rate * dt, -top, top)
    if state.speed > 0:
        return clamp(state.speed - state.accel_rate * dt, 0.0, top)
    return clamp(state.speed + state.accel_rate * dt, -top, 0.0)


def update_steering(state: VehicleState, intent: InputIntent, dt: float) -> float:
    """Integrate steering input, or relax toward centre.

    Args:
        state: Current vehicle state
        intent: Held keys for this tick
        dt: Tick duration in seconds

    Returns:
        New steering angle, |angle| <= max_steering_angle
    """
    lock = state.max_steering_angle
    if intent.steer_left:
        return clamp(state.steering_angle + STEER_RATE * dt, -lock, lock)
    if intent.steer_right:
        return clamp(state.steering_angle - STEER_RATE * dt, -lock, lock)
    return state.steering_angle * STEERING_DECAY


def integrate_pose(
    speed: float,
    steering_angle: float,
    wheel_base: float,
    yaw: float,
    dt: float,
) -> PoseDelta:
    """Bicycle-model pose change for one tick.

    The translation follows the velocity vector, which leads the chassis
    heading by the slip angle, and uses the heading from before this
    tick's rotation.

    Args:
        speed: Signed speed after this tick's update
        steering_angle: Steering angle after this tick's update
        wheel_base: Axle-to-axle distance
        yaw: Chassis heading before the tick
        dt: Tick duration in seconds

    Returns:
        Translation and rotation to apply to the chassis
    """
    beta = slip_angle(steering_angle)
    rotation = yaw_rate(speed, wheel_base, steering_angle) * dt
    dir_x, dir_y = forward_vector(yaw + beta)
    distance = speed * dt
    return PoseDelta(dx=dir_x * distance, dy=dir_y * distance, rotation=rotation)


def step(
    state: VehicleState,
    intent: InputIntent,
    dt: float,
    pose: Optional[Pose] = None,
) -> StepResult:
    """Advance the vehicle by one tick.

    Args:
        state: Vehicle state before the tick
        intent: Held keys for this tick
        dt: Tick duration in seconds, >= 0
        pose: Chassis pose owned by the caller; its yaw orients the
            translation. Defaults to the yaw tracked in `state`.

    Returns:
        StepResult with the new state, the pose delta and the front-wheel
        indicator angles
    """
    _check_dt(dt)

    speed = update_speed(state, intent, dt)
    steering = update_steering(state, intent, dt)
    heading = state.yaw if pose is None else pose.yaw

    delta = integrate_pose(speed, steering, state.wheel_base, heading, dt)
    new_state = state.with_dynamics(
        speed=speed,
        steering_angle=steering,
        yaw=heading + delta.rotation,
    )
    return StepResult(
        state=new_state,
        delta=delta,
        wheels=WheelIndicators(left=steering, right=steering),
    )

# Physics calculations
# FORBIDDEN: logging, any I/O
# Single-track (bicycle) kinematics with the centre of mass halfway
# between the axles. No mass, inertia or tyre slip.

import numpy as np


def slip_angle(steering_angle: float) -> float:
    """Angle between the velocity vector and the chassis centreline.

    beta = atan(0.5 * tan(delta))

    Args:
        steering_angle: Front-wheel angle in radians

    Returns:
        Slip angle in radians, same sign as the steering angle
    """
    return float(np.arctan(0.5 * np.tan(steering_angle)))


def yaw_rate(speed: float, wheel_base: float, steering_angle: float) -> float:
    """Chassis rotation rate.

    omega = v / L * cos(beta) * tan(delta)

    Args:
        speed: Signed longitudinal speed
        wheel_base: Axle-to-axle distance
        steering_angle: Front-wheel angle in radians

    Returns:
        Yaw rate in rad/s (positive turns counter-clockwise)
    """
    beta = slip_angle(steering_angle)
    return float((speed / wheel_base) * np.cos(beta) * np.tan(steering_angle))


def turning_radius(wheel_base: float, max_steering_angle: float) -> float:
    """Minimum turning radius at full steering lock.

    R = L / (tan(delta_max) * cos(beta))

    Inputs are not validated: a zero angle gives inf and angles at or
    beyond pi/2 give meaningless values. VehicleState rejects both.

    Args:
        wheel_base: Axle-to-axle distance
        max_steering_angle: Steering lock in radians

    Returns:
        Turning radius, same units as wheel_base
    """
    beta = slip_angle(max_steering_angle)
    with np.errstate(divide="ignore"):
        return float(np.float64(wheel_base) / (np.tan(max_steering_angle) * np.cos(beta)))

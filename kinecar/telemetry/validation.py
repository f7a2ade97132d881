# State validation
# FORBIDDEN: analysis.*, file I/O

import numpy as np
from typing import Tuple, List, Optional

from ..core.types import WorldBounds
from ..sim.car import CarBody


class StateValidator:
    """Check the car against the simulation invariants."""

    @classmethod
    def validate(
        cls,
        car: CarBody,
        bounds: Optional[WorldBounds] = None,
    ) -> Tuple[bool, List[str]]:
        """Check speed, steering and position limits.

        Args:
            car: Car to check
            bounds: World the chassis must stay inside

        Returns:
            (is_valid, list of violations)
        """
        violations = []

        # NaN/Inf first, the bound checks are meaningless otherwise
        if not cls.check_finite(car):
            violations.append("State contains NaN or Inf")
            return False, violations

        state = car.state
        if abs(state.speed) > state.max_speed:
            violations.append(
                f"Speed out of bounds: {state.speed} (max {state.max_speed})"
            )

        if abs(state.steering_angle) > state.max_steering_angle:
            violations.append(
                f"Steering out of bounds: {state.steering_deg:.2f} deg "
                f"(max {np.degrees(state.max_steering_angle):.2f})"
            )

        for wheel in car.wheels:
            if wheel.steerable and wheel.angle != state.steering_angle:
                violations.append(
                    f"Wheel {wheel.name} angle {wheel.angle} != steering {state.steering_angle}"
                )

        if bounds is not None and not bounds.contains(car.pose.x, car.pose.y):
            violations.append(
                f"Position out of world: ({car.pose.x:.2f}, {car.pose.y:.2f})"
            )

        return len(violations) == 0, violations

    @classmethod
    def check_finite(cls, car: CarBody) -> bool:
        """Quick check for NaN or Inf values.

        Returns:
            True if pose and dynamics are clean
        """
        values = np.array([
            car.pose.x,
            car.pose.y,
            car.pose.yaw,
            car.state.speed,
            car.state.yaw,
            car.state.steering_angle,
        ], dtype=np.float64)
        return bool(np.all(np.isfinite(values)))

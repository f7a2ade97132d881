# Telemetry records built from the car each tick
# FORBIDDEN: analysis.*, file I/O

import numpy as np
from typing import Dict, Any, Optional

from ..core.types import InputIntent
from ..sim.car import CarBody


class TelemetryBuilder:
    """Flatten car state into one record per tick."""

    FIELDS = (
        "time",
        "x",
        "y",
        "yaw",
        "speed",
        "steering_deg",
        "throttle_forward",
        "throttle_reverse",
        "steer_left",
        "steer_right",
    )

    def build(
        self,
        car: CarBody,
        time: float,
        intent: Optional[InputIntent] = None,
    ) -> Dict[str, Any]:
        """Snapshot of the car after a tick.

        Args:
            car: Car to read
            time: Simulation time in seconds
            intent: Keys held during the tick

        Returns:
            Dict keyed by FIELDS
        """
        intent = intent or InputIntent.idle()
        return {
            "time": float(time),
            "x": float(car.pose.x),
            "y": float(car.pose.y),
            "yaw": float(car.pose.yaw),
            "speed": float(car.state.speed),
            "steering_deg": car.state.steering_deg,
            "throttle_forward": int(intent.throttle_forward),
            "throttle_reverse": int(intent.throttle_reverse),
            "steer_left": int(intent.steer_left),
            "steer_right": int(intent.steer_right),
        }

    def to_array(self, record: Dict[str, Any]) -> np.ndarray:
        """Record as a float32 row in FIELDS order."""
        return np.array([record[name] for name in self.FIELDS], dtype=np.float32)

    def get_component(self, record: Dict[str, Any], component: str) -> float:
        if component not in self.FIELDS:
            raise ValueError(f"Unknown component: {component}")
        return record[component]

# Drive metrics

import numpy as np
from typing import Dict, List, Any, Optional

from ..core.types import WorldBounds


def compute_drive_metrics(
    records: List[Dict[str, Any]],
    bounds: Optional[WorldBounds] = None,
) -> Dict[str, float]:
    """Compute summary metrics from per-tick telemetry.

    Args:
        records: Telemetry records in tick order (TelemetryBuilder output)
        bounds: World bounds, for time spent against the wall

    Returns:
        Dict of computed metrics
    """
    metrics = {}
    if not records:
        return metrics

    x = np.array([r["x"] for r in records], dtype=np.float64)
    y = np.array([r["y"] for r in records], dtype=np.float64)
    speed = np.array([r["speed"] for r in records], dtype=np.float64)
    steering = np.array([r["steering_deg"] for r in records], dtype=np.float64)
    yaw = np.array([r["yaw"] for r in records], dtype=np.float64)

    metrics["ticks"] = len(records)
    metrics["duration"] = float(records[-1]["time"])
    metrics["distance"] = float(np.sum(np.hypot(np.diff(x), np.diff(y))))
    metrics["mean_abs_speed"] = float(np.mean(np.abs(speed)))
    metrics["max_abs_speed"] = float(np.max(np.abs(speed)))
    metrics["max_abs_steering_deg"] = float(np.max(np.abs(steering)))
    metrics["yaw_change"] = float(yaw[-1] - yaw[0])
    metrics["final_x"] = float(x[-1])
    metrics["final_y"] = float(y[-1])

    if bounds is not None:
        on_wall = [bounds.on_boundary(px, py) for px, py in zip(x, y)]
        metrics["wall_fraction"] = float(np.mean(on_wall))

    return metrics


def check_drive_health(metrics: Dict[str, float], max_speed: float) -> List[str]:
    """Flag suspicious sessions.

    Args:
        metrics: Output of compute_drive_metrics
        max_speed: Vehicle speed cap

    Returns:
        List of warning messages
    """
    warnings = []

    if metrics.get("max_abs_speed", 0.0) > max_speed:
        warnings.append(f"Speed exceeded cap: {metrics['max_abs_speed']:.2f} > {max_speed:.2f}")

    if metrics.get("wall_fraction", 0.0) > 0.5:
        warnings.append(f"Car spent {metrics['wall_fraction']:.0%} of the session on the wall")

    if metrics.get("ticks", 0) > 1 and metrics.get("distance", 0.0) == 0.0:
        warnings.append("Car never moved")

    return warnings

# Mathematical utilities
# FORBIDDEN: logging, any I/O

import numpy as np
from typing import Tuple


def rotate_2d(x: float, y: float, angle: float) -> Tuple[float, float]:
    """Rotate 2D point by angle.

    Args:
        x, y: Point coordinates
        angle: Rotation angle in radians (counter-clockwise)

    Returns:
        Rotated (x, y) coordinates
    """
    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    return (
        float(x * cos_a - y * sin_a),
        float(x * sin_a + y * cos_a),
    )


def forward_vector(angle: float) -> Tuple[float, float]:
    """Body forward axis (+y in the chassis frame) rotated by angle.

    Args:
        angle: Heading in radians, 0 means facing +y

    Returns:
        Unit (x, y) direction in world coordinates
    """
    return rotate_2d(0.0, 1.0, angle)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range.

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))

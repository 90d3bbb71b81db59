"""
Vector, angle and clamping helpers used by the pose classifier.
"""
import math
from typing import Optional, Sequence

import numpy as np


def distance_2d(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two points using only x and y."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a value between lo and hi."""
    return min(max(value, lo), hi)


def rad_to_deg(rad: float) -> float:
    return rad * (180.0 / math.pi)


def deg_to_rad(deg: float) -> float:
    return deg * (math.pi / 180.0)


def normalize_angle(degrees: float) -> float:
    """Normalize an angle in degrees to the [0, 360) range."""
    angle = degrees % 360.0
    # -1e-17 % 360.0 rounds to 360.0
    return 0.0 if angle >= 360.0 else angle


def angle_from_up(dx: float, dy: float) -> Optional[float]:
    """
    Angle between a 2D direction and straight up in image space.

    Image y grows downward, so "up" is (0, -1).

    Args:
        dx: Horizontal component of the direction
        dy: Vertical component of the direction

    Returns:
        Angle in radians in [0, pi], or None for a zero-length vector
    """
    length = math.hypot(dx, dy)
    if length == 0:
        return None
    cos_angle = -dy / length
    return math.acos(clamp(cos_angle, -1.0, 1.0))


def signed_tilt_deg(dx: float, dy: float) -> float:
    """Signed angle of a direction from vertical. Positive leans toward +x."""
    return rad_to_deg(math.atan2(dx, -dy))


def palm_normal(wrist: Sequence[float], index_mcp: Sequence[float],
                pinky_mcp: Sequence[float]) -> np.ndarray:
    """
    Normal of the palm plane from three 3D points.

    Args:
        wrist: Wrist point (x, y, z)
        index_mcp: Index finger knuckle (x, y, z)
        pinky_mcp: Pinky knuckle (x, y, z)

    Returns:
        Cross product (wrist -> index MCP) x (wrist -> pinky MCP)
    """
    origin = np.asarray(wrist[:3], dtype=float)
    a = np.asarray(index_mcp[:3], dtype=float) - origin
    b = np.asarray(pinky_mcp[:3], dtype=float) - origin
    return np.cross(a, b)


def azimuth_deg(normal: Sequence[float]) -> float:
    """
    Azimuth of a 3D vector projected onto the horizontal (x-z) plane.

    0 degrees points toward the camera (-z), 90 degrees toward +x.
    """
    nx, nz = float(normal[0]), float(normal[2])
    return normalize_angle(rad_to_deg(math.atan2(nx, -nz)))


"""
MediaPipe 21-point hand landmark model.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple


NUM_LANDMARKS = 21


class HandLandmark(IntEnum):
    """MediaPipe hand landmark indices."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


@dataclass(frozen=True)
class FingerJoints:
    """Joint indices of a non-thumb finger used by the curl test."""
    name: str
    tip: int
    pip: int
    mcp: int


CURL_FINGERS: Tuple[FingerJoints, ...] = (
    FingerJoints("index", HandLandmark.INDEX_FINGER_TIP, HandLandmark.INDEX_FINGER_PIP,
                 HandLandmark.INDEX_FINGER_MCP),
    FingerJoints("middle", HandLandmark.MIDDLE_FINGER_TIP, HandLandmark.MIDDLE_FINGER_PIP,
                 HandLandmark.MIDDLE_FINGER_MCP),
    FingerJoints("ring", HandLandmark.RING_FINGER_TIP, HandLandmark.RING_FINGER_PIP,
                 HandLandmark.RING_FINGER_MCP),
    FingerJoints("pinky", HandLandmark.PINKY_TIP, HandLandmark.PINKY_PIP,
                 HandLandmark.PINKY_MCP),
)

# Bones drawn by the debug overlay
HAND_CONNECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (5, 9), (9, 10), (10, 11), (11, 12),
    (9, 13), (13, 14), (14, 15), (15, 16),
    (13, 17), (0, 17), (17, 18), (18, 19), (19, 20),
)


def check_landmark_set(landmarks: Sequence[Sequence[float]], name: str = "landmarks") -> None:
    """
    Verify a hand landmark set has the expected number of points.

    Args:
        landmarks: Sequence of (x, y[, z]) points
        name: Label used in the error message

    Raises:
        ValueError: If the set does not contain exactly 21 points
    """
    if len(landmarks) != NUM_LANDMARKS:
        raise ValueError(f"{name} must contain {NUM_LANDMARKS} points, got {len(landmarks)}")


def palm_center(landmarks: Sequence[Sequence[float]]) -> Tuple[float, float]:
    """
    Calculate the center of the palm.

    Args:
        landmarks: List of 21 hand landmarks

    Returns:
        (x, y) coordinates of palm center in [0..1] range
    """
    palm_indices = [
        HandLandmark.WRIST,
        HandLandmark.INDEX_FINGER_MCP,
        HandLandmark.MIDDLE_FINGER_MCP,
        HandLandmark.RING_FINGER_MCP,
        HandLandmark.PINKY_MCP,
    ]

    x_sum = sum(landmarks[i][0] for i in palm_indices)
    y_sum = sum(landmarks[i][1] for i in palm_indices)

    return (x_sum / len(palm_indices), y_sum / len(palm_indices))

"""
OpenCV drawing for effect instances, hand landmarks and the gesture debug panel.
"""
from typing import Iterable, Optional, Sequence

import cv2
import numpy as np

from .landmarks import HAND_CONNECTIONS, palm_center
from .types import EffectInstance, GesturePhase, GestureSnapshot, HandSnapshot, TrackedHand


# BGR for hsl(200, 100%, 60%) and its lighter glow, hsl(200, 100%, 70%)
ACCENT_BGR = (255, 187, 51)
GLOW_BGR = (255, 204, 102)

PHASE_COLORS = {
    GesturePhase.IDLE: (180, 180, 180),
    GesturePhase.CANDIDATE: (36, 191, 251),
    GesturePhase.CONFIRMED: (129, 211, 52),
    GesturePhase.COOLDOWN: (250, 165, 96),
}

FONT = cv2.FONT_HERSHEY_SIMPLEX

# Glow blur radius cap, in pixels
MAX_GLOW_RADIUS = 15


def _blend(frame: np.ndarray, overlay: np.ndarray, alpha: float) -> None:
    cv2.addWeighted(overlay, alpha, frame, 1.0 - alpha, 0, dst=frame)


def draw_effect(frame: np.ndarray, instance: EffectInstance) -> np.ndarray:
    """
    Draw a single effect instance: a glowing accent square above the thumb tip.

    Args:
        frame: BGR frame, drawn on in place
        instance: Effect to draw; nothing is drawn at zero opacity

    Returns:
        The same frame
    """
    if instance.opacity <= 0:
        return frame

    height, width = frame.shape[:2]
    size = instance.size_fraction * height
    half = size / 2
    cx = instance.x * width
    cy = (instance.y - instance.y_offset) * height
    k = 2 * min(MAX_GLOW_RADIUS, max(1, int(size * 0.4))) + 1

    # Work only on the square plus room for the glow, clipped to the frame
    pad = half + k
    x0 = max(0, int(cx - pad)); x1 = min(width, int(cx + pad) + 1)
    y0 = max(0, int(cy - pad)); y1 = min(height, int(cy + pad) + 1)
    if x0 >= x1 or y0 >= y1:
        return frame

    roi = frame[y0:y1, x0:x1].copy()
    top_left = (int(cx - half) - x0, int(cy - half) - y0)
    bottom_right = (int(cx + half) - x0, int(cy + half) - y0)

    # Outer glow
    glow = np.zeros_like(roi)
    cv2.rectangle(glow, top_left, bottom_right, GLOW_BGR, -1)
    glow = cv2.GaussianBlur(glow, (k, k), 0)
    cv2.add(roi, cv2.convertScaleAbs(glow, alpha=0.6 * instance.opacity), dst=roi)

    # Fill
    overlay = roi.copy()
    cv2.rectangle(overlay, top_left, bottom_right, ACCENT_BGR, -1)
    _blend(roi, overlay, 0.7 * instance.opacity)

    # Border
    overlay = roi.copy()
    cv2.rectangle(overlay, top_left, bottom_right, GLOW_BGR, max(1, int(size * 0.04)))
    _blend(roi, overlay, 0.9 * instance.opacity)

    frame[y0:y1, x0:x1] = roi
    return frame


def draw_effects(frame: np.ndarray, instances: Iterable[EffectInstance]) -> np.ndarray:
    for instance in instances:
        draw_effect(frame, instance)
    return frame


def draw_landmarks(frame: np.ndarray, landmarks: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Draw hand landmarks and bones on the frame.

    Args:
        frame: Input frame
        landmarks: List of (x, y[, z]) coordinates in [0..1] range

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]
    points = [(int(lm[0] * width), int(lm[1] * height)) for lm in landmarks]

    for a, b in HAND_CONNECTIONS:
        cv2.line(frame, points[a], points[b], (255, 255, 255), 1)
    for i, (px, py) in enumerate(points):
        cv2.circle(frame, (px, py), 3, (0, 255, 0), -1)
        cv2.putText(frame, str(i), (px + 5, py - 5), FONT, 0.3, (255, 255, 255), 1)

    return frame


def _hand_lines(hand: HandSnapshot):
    detection = hand.detection
    detected = detection is not None and detection.detected
    yield f"Phase: {hand.state.phase.value}", PHASE_COLORS[hand.state.phase]
    yield f"Detected: {'Yes' if detected else 'No'}", (129, 211, 52) if detected else (180, 180, 180)
    yield f"Confidence: {detection.confidence:.2f}" if detection else "Confidence: --", (255, 255, 255)
    yield f"Angle: {detection.palm_angle_deg:.1f} deg" if detected else "Angle: --", (255, 255, 255)
    yield f"Hand Scale: {detection.hand_scale:.3f}" if detection else "Hand Scale: --", (255, 255, 255)


def draw_debug_panel(frame: np.ndarray, snapshot: Optional[GestureSnapshot],
                     hands: Iterable[TrackedHand] = ()) -> np.ndarray:
    """
    Draw per-hand gesture state in two columns, and label each tracked hand.

    Args:
        frame: BGR frame, drawn on in place
        snapshot: Latest gesture snapshot; nothing is drawn when None
        hands: Tracked hands, labelled at their palm centers

    Returns:
        The same frame
    """
    if snapshot is None:
        return frame

    height, width = frame.shape[:2]
    for column, (title, hand) in enumerate((("Left Hand", snapshot.left),
                                            ("Right Hand", snapshot.right))):
        x = 10 + column * 220
        cv2.putText(frame, title, (x, 120), FONT, 0.55, (255, 255, 255), 2)
        for row, (text, color) in enumerate(_hand_lines(hand), start=1):
            cv2.putText(frame, text, (x, 120 + row * 22), FONT, 0.5, color, 1)

    for hand in hands:
        px, py = palm_center(hand.landmarks)
        cv2.putText(frame, hand.handedness, (int(px * width), int(py * height)),
                    FONT, 0.5, (0, 0, 255), 2)

    return frame

"""
Single-frame thumbs-up pose classifier.

Pure function of the current landmark sets: no history, no side effects.
"""
import math
from typing import Optional, Sequence

from .config import ClassifierConfig
from .geometry import (
    angle_from_up,
    azimuth_deg,
    clamp,
    distance_2d,
    palm_normal,
    signed_tilt_deg,
)
from .landmarks import CURL_FINGERS, HandLandmark, check_landmark_set
from .types import ThumbsUpDetection


_DEFAULT_CFG = ClassifierConfig()


def classify_thumbs_up(landmarks: Sequence[Sequence[float]],
                       world_landmarks: Sequence[Sequence[float]],
                       cfg: Optional[ClassifierConfig] = None) -> ThumbsUpDetection:
    """
    Decide whether one hand is showing a thumbs-up.

    The pose must pass three structural tests (thumb extended and pointing up,
    all four fingers curled, thumb within the allowed angle of vertical) and
    then reach the minimum confidence. Degenerate geometry is reported as a
    negative result, never raised.

    Args:
        landmarks: 21 normalized 2D landmarks (x, y[, z]) in image space
        world_landmarks: 21 metric 3D landmarks (x, y, z), used for palm angle
        cfg: Thresholds. Defaults to ClassifierConfig()

    Returns:
        ThumbsUpDetection. hand_scale is populated even when detected is False.

    Raises:
        ValueError: If either landmark set does not hold exactly 21 points
    """
    cfg = cfg or _DEFAULT_CFG
    check_landmark_set(landmarks, "landmarks")
    check_landmark_set(world_landmarks, "world_landmarks")

    wrist = landmarks[HandLandmark.WRIST]
    thumb_mcp = landmarks[HandLandmark.THUMB_MCP]
    thumb_tip = landmarks[HandLandmark.THUMB_TIP]
    tip_xy = (float(thumb_tip[0]), float(thumb_tip[1]))

    hand_scale = distance_2d(wrist, landmarks[HandLandmark.MIDDLE_FINGER_MCP])
    no_detection = ThumbsUpDetection(
        detected=False,
        confidence=0.0,
        thumb_tip_position=tip_xy,
        palm_angle_deg=0.0,
        thumb_tilt_deg=0.0,
        hand_scale=hand_scale,
    )

    # Thumb extended: tip clearly farther from the wrist than the thumb MCP
    mcp_dist = distance_2d(thumb_mcp, wrist)
    if mcp_dist == 0:
        return no_detection
    extension_ratio = distance_2d(thumb_tip, wrist) / mcp_dist
    if extension_ratio < cfg.thumb_extension_ratio:
        return no_detection

    thumb_dx = thumb_tip[0] - thumb_mcp[0]
    thumb_dy = thumb_tip[1] - thumb_mcp[1]
    if thumb_dy >= 0:  # image y grows downward
        return no_detection

    curl_score = _curl_score(landmarks, cfg.finger_curl_ratio)
    if curl_score is None:
        return no_detection

    angle = angle_from_up(thumb_dx, thumb_dy)
    max_angle = math.radians(cfg.max_thumb_angle_deg)
    if angle is None or angle > max_angle:
        return no_detection

    extension_score = clamp(
        (extension_ratio - cfg.thumb_extension_ratio) / cfg.extension_score_span, 0.0, 1.0)
    orientation_score = clamp(1.0 - angle / max_angle, 0.0, 1.0)
    confidence = combine_scores(extension_score, curl_score, orientation_score, cfg)

    if confidence < cfg.min_confidence:
        return no_detection

    return ThumbsUpDetection(
        detected=True,
        confidence=confidence,
        thumb_tip_position=tip_xy,
        palm_angle_deg=palm_angle_deg(world_landmarks),
        thumb_tilt_deg=signed_tilt_deg(thumb_dx, thumb_dy),
        hand_scale=hand_scale,
    )


def combine_scores(extension_score: float, curl_score: float, orientation_score: float,
                   cfg: Optional[ClassifierConfig] = None) -> float:
    """Weighted sum of the three sub-scores, each in [0, 1]."""
    cfg = cfg or _DEFAULT_CFG
    return (cfg.extension_weight * extension_score
            + cfg.curl_weight * curl_score
            + cfg.orientation_weight * orientation_score)


def _curl_score(landmarks: Sequence[Sequence[float]], curl_ratio: float) -> Optional[float]:
    """
    Average curl tightness of the four fingers.

    Returns None unless every finger is curled. A finger whose PIP sits on its
    MCP cannot be measured and counts as not curled.
    """
    tightness = 0.0
    for finger in CURL_FINGERS:
        mcp = landmarks[finger.mcp]
        pip_to_mcp = distance_2d(landmarks[finger.pip], mcp)
        if pip_to_mcp == 0:
            return None
        ratio = distance_2d(landmarks[finger.tip], mcp) / pip_to_mcp
        if ratio > curl_ratio:
            return None
        # lower ratio = tighter curl
        tightness += clamp(1.0 - ratio / curl_ratio, 0.0, 1.0)
    return tightness / len(CURL_FINGERS)


def palm_angle_deg(world_landmarks: Sequence[Sequence[float]]) -> float:
    """
    Palm rotation around the vertical axis from 3D world landmarks.

    Returns:
        Degrees in [0, 360). 0 = palm facing the camera, 90 = turned toward +x
    """
    normal = palm_normal(
        world_landmarks[HandLandmark.WRIST],
        world_landmarks[HandLandmark.INDEX_FINGER_MCP],
        world_landmarks[HandLandmark.PINKY_MCP],
    )
    return azimuth_deg(normal)

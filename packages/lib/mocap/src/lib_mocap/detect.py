"""Skeleton tracking from camera frames using MediaPipe Pose."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import cv2
import numpy as np
from mediapipe import Image, ImageFormat
from mediapipe.tasks.python.core.base_options import BaseOptions
from mediapipe.tasks.python.vision.core.vision_task_running_mode import (
    VisionTaskRunningMode as RunningMode,
)
from mediapipe.tasks.python.vision.pose_landmarker import (
    PoseLandmarker,
    PoseLandmarkerOptions,
    PoseLandmarkerResult,
)

from .data import (
    AVERAGED_LANDMARK_JOINTS,
    DIRECT_LANDMARK_JOINTS,
    MEDIAPIPE_LANDMARKS,
    CapturedSkeleton,
    JointType,
)

MEDIAPIPE_LANDMARK_COUNT = 33


def _landmarks_to_arrays(
    landmarks: "PoseLandmarkerResult",
) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """MediaPipe の結果を (33,3) のワールド座標と正規化画像座標に変換する。

    検出が無ければ None を返す。
    """
    if not landmarks.pose_world_landmarks or not landmarks.pose_landmarks:
        return None

    world = np.array(
        [(lm.x, lm.y, lm.z) for lm in landmarks.pose_world_landmarks[0]],
        dtype=np.float64,
    )
    image = np.array(
        [(lm.x, lm.y, lm.z) for lm in landmarks.pose_landmarks[0]],
        dtype=np.float64,
    )
    return world, image


def skeleton_from_landmarks(
    world: np.ndarray,
    image: Optional[np.ndarray] = None,
    timestamp: Optional[float] = None,
) -> CapturedSkeleton:
    """Convert MediaPipe landmarks into a `CapturedSkeleton`.

    world: (33, 3) world landmarks in meters, origin between the hips, y down.
    image: optional (33, 3) normalized image landmarks. When given, the hip
            midpoint's image position is added to every joint so moving around
            the room shows up as root motion (world landmarks alone are always
            centered on the hips).

    The result is y-up; depth keeps MediaPipe's sign (larger is further from
    the camera).
    """

    if world.shape != (MEDIAPIPE_LANDMARK_COUNT, 3):
        raise ValueError(f"Expected (33, 3) world landmarks, got {world.shape}")

    points = np.array(world, dtype=np.float64, copy=True)
    points[:, 1] *= -1.0

    if image is not None:
        if image.shape != (MEDIAPIPE_LANDMARK_COUNT, 3):
            raise ValueError(f"Expected (33, 3) image landmarks, got {image.shape}")
        hips = (
            image[MEDIAPIPE_LANDMARKS["left_hip"]]
            + image[MEDIAPIPE_LANDMARKS["right_hip"]]
        ) / 2.0
        # image y grows downward; only x/y carry a usable translation
        translation = np.array([hips[0] - 0.5, 0.5 - hips[1], 0.0], dtype=np.float64)
        points += translation

    def landmark(name: str) -> np.ndarray:
        return points[MEDIAPIPE_LANDMARKS[name]]

    joints: Dict[JointType, np.ndarray] = {
        joint: landmark(name) for joint, name in DIRECT_LANDMARK_JOINTS.items()
    }
    for joint, names in AVERAGED_LANDMARK_JOINTS.items():
        joints[joint] = np.mean([landmark(name) for name in names], axis=0)
    joints[JointType.SPINE] = (
        joints[JointType.HIP_CENTER] + joints[JointType.SHOULDER_CENTER]
    ) / 2.0

    return CapturedSkeleton.from_points(joints, timestamp=timestamp)


class SkeletonTracker:
    """長寿命の MediaPipe Pose ラッパー。

    with 文で使用でき、`process_frame(frame)` を呼ぶと各フレームの
    `CapturedSkeleton` を返します (検出できなければ None)。
    """

    def __init__(
        self,
        model_asset_path: str = "pose_landmarker_full.task",
        min_detection_confidence: float = 0.5,
        min_presence_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        track_translation: bool = True,
    ):
        base_options = BaseOptions(model_asset_path=model_asset_path)
        options = PoseLandmarkerOptions(
            base_options=base_options,
            running_mode=RunningMode.IMAGE,
            min_pose_detection_confidence=min_detection_confidence,
            min_pose_presence_confidence=min_presence_confidence,
            min_tracking_confidence=min_tracking_confidence,
            output_segmentation_masks=False,
        )
        self._detector = PoseLandmarker.create_from_options(options)
        self.track_translation = track_translation

    def process_frame(
        self, frame: np.ndarray, timestamp: Optional[float] = None
    ) -> Optional[CapturedSkeleton]:
        """BGR フレームを入力に取り、CapturedSkeleton を返す。"""
        if frame is None:
            return None

        image_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        image_rgb.flags.writeable = False
        mp_image = Image(image_format=ImageFormat.SRGB, data=image_rgb)
        results = self._detector.detect(mp_image)
        image_rgb.flags.writeable = True

        arrays = _landmarks_to_arrays(results)
        if arrays is None:
            return None
        world, image = arrays
        return skeleton_from_landmarks(
            world,
            image if self.track_translation else None,
            timestamp=timestamp,
        )

    def close(self) -> None:
        self._detector.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

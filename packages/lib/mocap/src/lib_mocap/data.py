"""Capture-side data definitions: joint identifiers and skeleton frames."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional

import numpy as np


class JointType(Enum):
    """Joints of the depth-camera skeleton (20 joints, capture order)."""

    HIP_CENTER = 0
    SPINE = 1
    SHOULDER_CENTER = 2
    HEAD = 3
    SHOULDER_LEFT = 4
    ELBOW_LEFT = 5
    WRIST_LEFT = 6
    HAND_LEFT = 7
    SHOULDER_RIGHT = 8
    ELBOW_RIGHT = 9
    WRIST_RIGHT = 10
    HAND_RIGHT = 11
    HIP_LEFT = 12
    KNEE_LEFT = 13
    ANKLE_LEFT = 14
    FOOT_LEFT = 15
    HIP_RIGHT = 16
    KNEE_RIGHT = 17
    ANKLE_RIGHT = 18
    FOOT_RIGHT = 19


JOINT_COUNT = len(JointType)


@dataclass(frozen=True, eq=False)
class CapturedSkeleton:
    """One captured frame.

    attributes:
            positions: mapping JointType -> numpy.ndarray (3,) with (x, y, z).
                    x is lateral, y points up and z is depth (positive values are
                    further from the camera, i.e. behind the subject).
            timestamp: capture time in seconds, if known.
    """

    positions: Mapping[JointType, np.ndarray]
    timestamp: Optional[float] = None

    @classmethod
    def from_points(
        cls,
        points: Mapping[JointType, Iterable[float]],
        timestamp: Optional[float] = None,
    ) -> "CapturedSkeleton":
        """Build a frame from any sequence-like coordinates."""

        positions: Dict[JointType, np.ndarray] = {}
        for joint, point in points.items():
            array = np.asarray(tuple(point), dtype=np.float64)
            if array.shape != (3,):
                raise ValueError(f"{joint.name} needs 3 coordinates, got {array.shape}")
            array.flags.writeable = False
            positions[joint] = array
        return cls(positions=positions, timestamp=timestamp)

    def __contains__(self, joint: object) -> bool:
        return joint in self.positions

    def __getitem__(self, joint: JointType) -> np.ndarray:
        return self.positions[joint]

    def missing(self, joints: Iterable[JointType]) -> list[JointType]:
        """Return the joints from `joints` that this frame does not carry."""

        return [joint for joint in joints if joint not in self.positions]

    def to_array(self) -> tuple[np.ndarray, np.ndarray]:
        """Pack into a (20, 3) position array and a (20,) presence mask."""

        coords = np.zeros((JOINT_COUNT, 3), dtype=np.float64)
        present = np.zeros(JOINT_COUNT, dtype=bool)
        for joint, position in self.positions.items():
            coords[joint.value] = position
            present[joint.value] = True
        return coords, present

    @classmethod
    def from_array(
        cls,
        coords: np.ndarray,
        present: Optional[np.ndarray] = None,
        timestamp: Optional[float] = None,
    ) -> "CapturedSkeleton":
        """Inverse of `to_array`; joints masked out by `present` are omitted."""

        if coords.shape != (JOINT_COUNT, 3):
            raise ValueError(f"Expected ({JOINT_COUNT}, 3) coordinates, got {coords.shape}")
        if present is None:
            present = np.ones(JOINT_COUNT, dtype=bool)
        points = {
            joint: coords[joint.value] for joint in JointType if bool(present[joint.value])
        }
        return cls.from_points(points, timestamp=timestamp)


# MediaPipe Pose のランドマーク番号 (必要なものだけ)
MEDIAPIPE_LANDMARKS = {
    "left_ear": 7,
    "right_ear": 8,
    "left_shoulder": 11,
    "right_shoulder": 12,
    "left_elbow": 13,
    "right_elbow": 14,
    "left_wrist": 15,
    "right_wrist": 16,
    "left_pinky": 17,
    "right_pinky": 18,
    "left_index": 19,
    "right_index": 20,
    "left_hip": 23,
    "right_hip": 24,
    "left_knee": 25,
    "right_knee": 26,
    "left_ankle": 27,
    "right_ankle": 28,
    "left_foot_index": 31,
    "right_foot_index": 32,
}

# Joints copied straight from a single landmark
DIRECT_LANDMARK_JOINTS = {
    JointType.SHOULDER_LEFT: "left_shoulder",
    JointType.SHOULDER_RIGHT: "right_shoulder",
    JointType.ELBOW_LEFT: "left_elbow",
    JointType.ELBOW_RIGHT: "right_elbow",
    JointType.WRIST_LEFT: "left_wrist",
    JointType.WRIST_RIGHT: "right_wrist",
    JointType.HIP_LEFT: "left_hip",
    JointType.HIP_RIGHT: "right_hip",
    JointType.KNEE_LEFT: "left_knee",
    JointType.KNEE_RIGHT: "right_knee",
    JointType.ANKLE_LEFT: "left_ankle",
    JointType.ANKLE_RIGHT: "right_ankle",
    JointType.FOOT_LEFT: "left_foot_index",
    JointType.FOOT_RIGHT: "right_foot_index",
}

# Joints synthesized as the mean of several landmarks
AVERAGED_LANDMARK_JOINTS = {
    JointType.HEAD: ("left_ear", "right_ear"),
    JointType.HAND_LEFT: ("left_index", "left_pinky"),
    JointType.HAND_RIGHT: ("right_index", "right_pinky"),
    JointType.SHOULDER_CENTER: ("left_shoulder", "right_shoulder"),
    JointType.HIP_CENTER: ("left_hip", "right_hip"),
}

# Skeleton connections used for 2D overlays
SKELETON_CONNECTIONS = frozenset(
    [
        (JointType.HIP_CENTER, JointType.SPINE),
        (JointType.SPINE, JointType.SHOULDER_CENTER),
        (JointType.SHOULDER_CENTER, JointType.HEAD),
        (JointType.SHOULDER_CENTER, JointType.SHOULDER_LEFT),
        (JointType.SHOULDER_LEFT, JointType.ELBOW_LEFT),
        (JointType.ELBOW_LEFT, JointType.WRIST_LEFT),
        (JointType.WRIST_LEFT, JointType.HAND_LEFT),
        (JointType.SHOULDER_CENTER, JointType.SHOULDER_RIGHT),
        (JointType.SHOULDER_RIGHT, JointType.ELBOW_RIGHT),
        (JointType.ELBOW_RIGHT, JointType.WRIST_RIGHT),
        (JointType.WRIST_RIGHT, JointType.HAND_RIGHT),
        (JointType.HIP_CENTER, JointType.HIP_LEFT),
        (JointType.HIP_LEFT, JointType.KNEE_LEFT),
        (JointType.KNEE_LEFT, JointType.ANKLE_LEFT),
        (JointType.ANKLE_LEFT, JointType.FOOT_LEFT),
        (JointType.HIP_CENTER, JointType.HIP_RIGHT),
        (JointType.HIP_RIGHT, JointType.KNEE_RIGHT),
        (JointType.KNEE_RIGHT, JointType.ANKLE_RIGHT),
        (JointType.ANKLE_RIGHT, JointType.FOOT_RIGHT),
    ]
)

"""
Shared fixtures: hand-built skeletons with easy-to-check geometry.
"""

import numpy as np
import pytest

from lib_mocap.data import CapturedSkeleton, JointType

# Upright subject facing the camera: x lateral, y up, z depth.
STANDING_POINTS = {
    JointType.HIP_CENTER: (0.0, 1.0, 0.0),
    JointType.SPINE: (0.0, 1.25, 0.0),
    JointType.SHOULDER_CENTER: (0.0, 1.5, 0.0),
    JointType.HEAD: (0.0, 1.7, 0.0),
    JointType.SHOULDER_LEFT: (-0.2, 1.5, 0.0),
    JointType.ELBOW_LEFT: (-0.2, 1.2, 0.0),
    JointType.WRIST_LEFT: (-0.2, 1.0, 0.0),
    JointType.HAND_LEFT: (-0.2, 0.9, 0.0),
    JointType.SHOULDER_RIGHT: (0.2, 1.5, 0.0),
    JointType.ELBOW_RIGHT: (0.2, 1.2, 0.0),
    JointType.WRIST_RIGHT: (0.2, 1.0, 0.0),
    JointType.HAND_RIGHT: (0.2, 0.9, 0.0),
    JointType.HIP_LEFT: (-0.1, 1.0, 0.0),
    JointType.KNEE_LEFT: (-0.1, 0.5, 0.0),
    JointType.ANKLE_LEFT: (-0.1, 0.1, 0.0),
    JointType.FOOT_LEFT: (-0.1, 0.0, -0.1),
    JointType.HIP_RIGHT: (0.1, 1.0, 0.0),
    JointType.KNEE_RIGHT: (0.1, 0.5, 0.0),
    JointType.ANKLE_RIGHT: (0.1, 0.1, 0.0),
    JointType.FOOT_RIGHT: (0.1, 0.0, -0.1),
}


def make_skeleton(overrides=None, drop=(), shift=(0.0, 0.0, 0.0), timestamp=None):
    """Standing skeleton with some joints moved, removed or the body shifted."""
    points = dict(STANDING_POINTS)
    points.update(overrides or {})
    for joint in drop:
        points.pop(joint)
    shifted = {
        joint: np.asarray(point, dtype=np.float64) + np.asarray(shift)
        for joint, point in points.items()
    }
    return CapturedSkeleton.from_points(shifted, timestamp=timestamp)


def random_skeleton(rng):
    """Skeleton with every joint at a random, almost surely distinct, spot."""
    return CapturedSkeleton.from_points(
        {joint: rng.normal(size=3) for joint in JointType}
    )


@pytest.fixture
def standing():
    return make_skeleton()


@pytest.fixture
def rng():
    return np.random.default_rng(42)

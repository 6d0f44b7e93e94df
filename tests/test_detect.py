"""
Test conversion of MediaPipe landmarks into captured skeletons.
"""

import numpy as np
import pytest

pytest.importorskip("mediapipe")
pytest.importorskip("cv2")

from lib_mocap.data import MEDIAPIPE_LANDMARKS, JointType  # noqa: E402
from lib_mocap.detect import skeleton_from_landmarks  # noqa: E402


def _world_landmarks():
    """MediaPipe-style world landmarks (y down) for an upright subject."""
    world = np.zeros((33, 3))
    world[MEDIAPIPE_LANDMARKS["left_hip"]] = (-0.1, 0.0, 0.0)
    world[MEDIAPIPE_LANDMARKS["right_hip"]] = (0.1, 0.0, 0.0)
    world[MEDIAPIPE_LANDMARKS["left_shoulder"]] = (-0.2, -0.5, 0.0)
    world[MEDIAPIPE_LANDMARKS["right_shoulder"]] = (0.2, -0.5, 0.0)
    world[MEDIAPIPE_LANDMARKS["left_ear"]] = (-0.05, -0.7, 0.1)
    world[MEDIAPIPE_LANDMARKS["right_ear"]] = (0.05, -0.7, 0.1)
    world[MEDIAPIPE_LANDMARKS["left_knee"]] = (-0.1, 0.45, 0.0)
    world[MEDIAPIPE_LANDMARKS["left_index"]] = (-0.2, 0.1, 0.0)
    world[MEDIAPIPE_LANDMARKS["left_pinky"]] = (-0.3, 0.1, 0.0)
    return world


def test_all_joints_present():
    skeleton = skeleton_from_landmarks(_world_landmarks())
    assert skeleton.missing(JointType) == []


def test_y_axis_points_up():
    skeleton = skeleton_from_landmarks(_world_landmarks())
    np.testing.assert_allclose(skeleton[JointType.KNEE_LEFT], [-0.1, -0.45, 0.0])
    np.testing.assert_allclose(skeleton[JointType.SHOULDER_LEFT], [-0.2, 0.5, 0.0])


def test_synthesized_joints():
    """Center joints, head, hands and spine are averaged from landmarks."""
    skeleton = skeleton_from_landmarks(_world_landmarks())
    np.testing.assert_allclose(skeleton[JointType.HIP_CENTER], [0.0, 0.0, 0.0])
    np.testing.assert_allclose(skeleton[JointType.SHOULDER_CENTER], [0.0, 0.5, 0.0])
    np.testing.assert_allclose(skeleton[JointType.SPINE], [0.0, 0.25, 0.0])
    np.testing.assert_allclose(skeleton[JointType.HEAD], [0.0, 0.7, 0.1])
    np.testing.assert_allclose(skeleton[JointType.HAND_LEFT], [-0.25, -0.1, 0.0])


def test_image_translation():
    """The hips' image position moves the whole skeleton."""
    image = np.full((33, 3), 0.5)
    image[MEDIAPIPE_LANDMARKS["left_hip"]] = (0.7, 0.25, 0.0)
    image[MEDIAPIPE_LANDMARKS["right_hip"]] = (0.8, 0.25, 0.0)

    skeleton = skeleton_from_landmarks(_world_landmarks(), image, timestamp=1.5)

    np.testing.assert_allclose(skeleton[JointType.HIP_CENTER], [0.25, 0.25, 0.0])
    np.testing.assert_allclose(skeleton[JointType.SHOULDER_CENTER], [0.25, 0.75, 0.0])
    assert skeleton.timestamp == 1.5


def test_input_not_modified():
    world = _world_landmarks()
    before = world.copy()
    skeleton_from_landmarks(world)
    np.testing.assert_array_equal(world, before)


@pytest.mark.parametrize("shape", [(32, 3), (33, 2), (33,)])
def test_rejects_bad_world_shape(shape):
    with pytest.raises(ValueError):
        skeleton_from_landmarks(np.zeros(shape))


def test_rejects_bad_image_shape():
    with pytest.raises(ValueError):
        skeleton_from_landmarks(_world_landmarks(), np.zeros((33, 2)))

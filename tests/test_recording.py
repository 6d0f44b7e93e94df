"""
Test the recording buffer used by the recorder scenes.
"""

import os

import numpy as np
import pytest
from conftest import make_skeleton

pytest.importorskip("pygame")
pytest.importorskip("mediapipe")
pytest.importorskip("matplotlib")

from lib_mocap.alice import AliceCodeGenerator  # noqa: E402
from lib_mocap.data import JointType  # noqa: E402
from lib_mocap.io import load_skeletons  # noqa: E402
from lib_recorder.recording import Recording  # noqa: E402


def test_add_frame_before_start():
    with pytest.raises(RuntimeError):
        Recording().add_frame(make_skeleton())


def test_frames_accumulate():
    recording = Recording()
    recording.start()

    assert recording.add_frame(make_skeleton())
    assert recording.add_frame(make_skeleton(shift=(0.0, 0.5, 0.0)))

    assert recording.frame_count == 2
    assert len(recording.skeletons) == 2
    assert recording.skipped == 0


def test_code_matches_generator(standing):
    frames = [standing, make_skeleton(shift=(0.0, 1.0, 0.0)), make_skeleton(shift=(0.3, 0.0, 0.0))]

    recording = Recording()
    recording.start()
    for frame in frames:
        recording.add_frame(frame)

    generator = AliceCodeGenerator()
    generator.init()
    expected = "".join(generator.frame_code(frame) for frame in frames)
    assert recording.code == expected


def test_incomplete_frame_is_skipped(standing, capsys):
    recording = Recording()
    recording.start()

    assert not recording.add_frame(make_skeleton(drop=[JointType.KNEE_LEFT]))
    assert recording.add_frame(standing)

    assert recording.skipped == 1
    assert recording.frame_count == 1
    assert "KNEE_LEFT" in capsys.readouterr().out


def test_start_resets_session(standing):
    recording = Recording()
    recording.start()
    recording.add_frame(standing)
    recording.add_frame(make_skeleton(drop=[JointType.HEAD]))
    recording.stop()
    assert not recording.active

    recording.start()
    assert recording.active
    assert recording.frame_count == 0
    assert recording.skipped == 0
    assert recording.code == ""


def test_final_positions(standing):
    recording = Recording()
    recording.start()
    recording.add_frame(standing)

    positions = recording.final_positions()
    np.testing.assert_allclose(positions[JointType.SHOULDER_CENTER], [0.0, 1.4375, 0.0])


def test_save(tmp_path, standing):
    recording = Recording()
    recording.start()
    recording.add_frame(standing)
    recording.add_frame(make_skeleton(shift=(0.0, 0.2, 0.0), timestamp=0.5))

    directory = os.path.join(tmp_path, "out")
    code_path, capture_path = recording.save(directory, "take")

    assert code_path == os.path.join(directory, "take.txt")
    assert capture_path == os.path.join(directory, "take.npz")
    with open(code_path, encoding="utf-8") as f:
        assert f.read() == recording.code
    loaded = load_skeletons(capture_path)
    assert len(loaded) == 2
    assert loaded[1].timestamp == 0.5

"""
Test the scene manager and the key handling of the recorder scenes.
"""

import os

import pytest
from conftest import make_skeleton

pygame = pytest.importorskip("pygame")
pytest.importorskip("mediapipe")
matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from lib_recorder import (  # noqa: E402
    GlobalState,
    Recording,
    ReviewScene,
    SceneInterface,
    SequenceManager,
    StartScene,
)


class DummyScene(SceneInterface):
    def __init__(self):
        super().__init__()
        self.calls = []

    def enter(self):
        self.calls.append("enter")

    def exit(self):
        self.calls.append("exit")

    def update(self, dt):
        self.calls.append(("update", dt))

    def handle_event(self, event):
        self.calls.append(("event", event))

    def render(self, surface):
        self.calls.append(("render", surface))


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def test_register_assigns_manager():
    manager = SequenceManager()
    scene = DummyScene()
    manager.register_scene("a", scene)
    assert scene.manager is manager


def test_start_switches_scenes():
    manager = SequenceManager()
    first, second = DummyScene(), DummyScene()
    manager.register_scene("first", first)
    manager.register_scene("second", second)

    manager.start("first")
    manager.start("second")

    assert first.calls == ["enter", "exit"]
    assert second.calls == ["enter"]
    assert manager.current_name == "second"


def test_start_unknown_scene():
    manager = SequenceManager()
    with pytest.raises(KeyError):
        manager.start("missing")


def test_dispatch_step_and_shutdown():
    manager = SequenceManager()
    scene = DummyScene()
    manager.register_scene("only", scene)
    manager.initialize()
    manager.start("only")

    manager.dispatch(["ping", "pong"])
    manager.step(0.5, None)
    manager.shutdown()

    assert scene.calls == [
        "enter",
        ("event", "ping"),
        ("event", "pong"),
        ("update", 0.5),
        ("render", None),
        "exit",
    ]
    assert manager.current_name is None
    assert not manager.running


def test_window_close_stops_loop():
    manager = SequenceManager()
    scene = DummyScene()
    manager.register_scene("only", scene)
    manager.initialize()
    manager.start("only")

    quit_event = pygame.event.Event(pygame.QUIT)
    manager.dispatch([quit_event])

    assert not manager.running
    assert ("event", quit_event) in scene.calls


def test_step_renders_scene_switched_to_during_update():
    class HandOff(DummyScene):
        def update(self, dt):
            super().update(dt)
            self.manager.start("next")

    manager = SequenceManager()
    first, second = HandOff(), DummyScene()
    manager.register_scene("first", first)
    manager.register_scene("next", second)
    manager.start("first")

    manager.step(0.1, None)

    assert ("render", None) not in first.calls
    assert second.calls == ["enter", ("render", None)]


def test_without_active_scene():
    manager = SequenceManager()
    manager.dispatch([None])
    manager.step(0.1, None)
    manager.shutdown()


def test_start_scene_keys():
    manager = SequenceManager()
    record = DummyScene()
    manager.register_scene("record", record)
    scene = StartScene(manager)
    manager.initialize()

    scene.handle_event(_key(pygame.K_r))
    assert manager.current_name == "record"

    scene.handle_event(_key(pygame.K_q))
    assert not manager.running


def _review_manager(output_dir, frames):
    recording = Recording()
    recording.start()
    for frame in frames:
        recording.add_frame(frame)
    recording.stop()
    manager = SequenceManager(GlobalState(recording=recording, output_dir=output_dir))
    return manager, ReviewScene(manager)


def test_review_save(tmp_path):
    output_dir = os.path.join(tmp_path, "recordings")
    manager, scene = _review_manager(output_dir, [make_skeleton(), make_skeleton()])

    paths = scene.save()

    assert paths is not None
    assert paths == manager.global_state.saved_paths
    code_path, capture_path = paths
    assert os.path.dirname(code_path) == output_dir
    assert os.path.basename(code_path).startswith("recording_")
    assert os.path.exists(code_path)
    assert os.path.exists(capture_path)


def test_review_save_empty_recording(tmp_path):
    output_dir = os.path.join(tmp_path, "recordings")
    manager, scene = _review_manager(output_dir, [])

    assert scene.save() is None
    assert manager.global_state.saved_paths is None
    assert not os.path.exists(output_dir)


def test_review_keys(tmp_path):
    manager, scene = _review_manager(os.path.join(tmp_path, "recordings"), [make_skeleton()])
    record = DummyScene()
    manager.register_scene("record", record)
    manager.initialize()

    scene.handle_event(_key(pygame.K_s))
    assert manager.global_state.saved_paths is not None

    scene.handle_event(_key(pygame.K_r))
    assert manager.current_name == "record"

    scene.handle_event(_key(pygame.K_q))
    assert not manager.running

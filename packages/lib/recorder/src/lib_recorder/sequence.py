"""Scene switching for the recorder.

The recorder moves between three session states: idle (start), capturing
(record) and review. Each state is a scene; `SequenceManager` keeps the
active one and drives it once per pygame frame through `dispatch` and
`step`.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, Iterable, Optional

import pygame

from .recording import Recording


class SceneInterface(abc.ABC):
    """One recorder session state. Hooks a scene does not override do nothing."""

    def __init__(self, manager: Optional["SequenceManager"] = None) -> None:
        self.manager = manager

    def enter(self) -> None:
        return None

    def exit(self) -> None:
        return None

    def update(self, dt: float) -> None:
        return None

    def render(self, surface: Optional[pygame.Surface]) -> None:
        """surface is None when no window is open."""
        return None

    def handle_event(self, event: Optional[pygame.event.Event]) -> None:
        return None


class GlobalState:
    """State shared by the scenes of one recorder run."""

    def __init__(
        self,
        recording: Optional[Recording] = None,
        output_dir: str = "recordings",
        model_asset_path: str = "pose_landmarker_full.task",
    ):
        self.recording = recording or Recording()
        self.output_dir = output_dir
        self.model_asset_path = model_asset_path
        # opened by the app, released on shutdown
        self.camera: Any = None
        self.saved_paths: Optional[tuple[str, str]] = None


class SequenceManager:
    """Holds the recorder's scenes by name and runs the active one.

    `running` turns False when a scene asks to quit or the window is closed;
    the app loop stops on it.
    """

    def __init__(self, global_state: Optional[GlobalState] = None) -> None:
        self._scenes: Dict[str, SceneInterface] = {}
        self._current: Optional[SceneInterface] = None
        self.current_name: Optional[str] = None
        self.running = False
        self.global_state = global_state or GlobalState()

    def initialize(self) -> None:
        self.running = True

    def register_scene(self, name: str, scene: SceneInterface) -> None:
        scene.manager = self
        self._scenes[name] = scene

    def start(self, name: str) -> None:
        """Leave the active scene and enter `name`."""
        if name not in self._scenes:
            raise KeyError(f"Unknown scene: {name}")

        print(f"SequenceManager: {self.current_name} -> {name}")
        if self._current is not None:
            self._current.exit()
        self._current = self._scenes[name]
        self.current_name = name
        self._current.enter()

    def dispatch(self, events: Iterable[Any]) -> None:
        """Hand this frame's input events to the active scene."""
        for event in events:
            if getattr(event, "type", None) == pygame.QUIT:
                self.running = False
            if self._current is not None:
                self._current.handle_event(event)

    def step(self, dt: float, surface: Optional[pygame.Surface]) -> None:
        """Advance the active scene by dt seconds and draw it on surface."""
        if self._current is None:
            return
        self._current.update(dt)
        # update may have switched scenes; draw whichever is active now
        self._current.render(surface)

    def shutdown(self) -> None:
        if self._current is not None:
            self._current.exit()
        self._current = None
        self.current_name = None
        self.running = False

from __future__ import annotations

import time
from typing import Optional

import pygame
from lib_mocap.util_3d import (
    SkeletonVisuals,
    create_skeleton_3d,
    dispose_skeleton_visuals,
)
from matplotlib import pyplot as plt
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d import Axes3D

from ..sequence import SceneInterface, SequenceManager


class ReviewScene(SceneInterface):
    """Shows the retargeted skeleton of the last recorded frame.

    S saves the recording, R records again, Q quits.
    """

    def __init__(self, manager: Optional[SequenceManager] = None) -> None:
        super().__init__(manager)
        self._figure: Optional[Figure] = None
        self._axes: Optional[Axes3D] = None
        self._visuals: Optional[SkeletonVisuals] = None
        self._status_text = None

    def enter(self) -> None:
        print("ReviewScene: enter")
        self._open_viewer()

    def exit(self) -> None:
        print("ReviewScene: exit")
        self._close_viewer()

    def update(self, dt: float) -> None:
        if self._figure is None:
            return

        if not plt.fignum_exists(self._figure.number):
            self._close_viewer()
            return

        self._figure.canvas.draw_idle()
        self._figure.canvas.flush_events()
        plt.pause(0.001)

    def handle_event(self, event) -> None:
        if event is None:
            return

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_s:
                self.save()
            elif event.key == pygame.K_r:
                self._restart_recording()
            elif event.key == pygame.K_q:
                self._request_quit()

    def save(self) -> Optional[tuple[str, str]]:
        """Write the recording to the output directory."""
        if self.manager is None:
            return None

        state = self.manager.global_state
        if state.recording.frame_count == 0:
            print("ReviewScene: nothing recorded, not saving")
            return None

        stem = time.strftime("recording_%Y%m%d_%H%M%S")
        try:
            state.saved_paths = state.recording.save(state.output_dir, stem)
        except OSError as e:
            print("ReviewScene: save failed:", e)
            return None

        code_path, capture_path = state.saved_paths
        print(f"ReviewScene: saved {code_path} and {capture_path}")
        self._set_status(f"Saved {code_path}")
        return state.saved_paths

    def _restart_recording(self) -> None:
        self._close_viewer()
        if self.manager is not None:
            self.manager.start("record")

    def _request_quit(self) -> None:
        self._close_viewer()
        if self.manager is not None:
            self.manager.running = False

    def _open_viewer(self) -> None:
        self._close_viewer()

        plt.ion()
        self._figure = plt.figure(figsize=(8, 6))
        axes = self._figure.add_subplot(111, projection="3d")
        axes.set_box_aspect((1.0, 1.0, 1.0))
        axes.set_xlim(-1.0, 1.0)
        axes.set_ylim(-1.0, 1.0)  # depth (z)
        axes.set_zlim(0.0, 2.0)  # vertical (y)
        axes.view_init(elev=20.0, azim=-60.0)
        axes.set_title("Recorded skeleton (last frame)")
        self._axes = axes

        recording = self.manager.global_state.recording if self.manager else None
        if recording is not None and recording.frame_count > 0:
            self._visuals = create_skeleton_3d(recording.final_positions(), ax=axes)
            summary = f"{recording.frame_count} frames ({recording.skipped} skipped)"
        else:
            summary = "No frames recorded."

        axes.text2D(0.02, 0.95, summary, transform=axes.transAxes, fontsize=14)
        axes.text2D(
            0.02,
            0.88,
            "Press S to save / R to record again / Q to quit",
            transform=axes.transAxes,
            fontsize=10,
            color="dimgray",
        )
        self._status_text = axes.text2D(
            0.02, 0.82, "", transform=axes.transAxes, fontsize=10, color="darkgreen"
        )

        canvas = self._figure.canvas
        canvas.draw_idle()
        canvas.flush_events()
        plt.show(block=False)
        canvas.mpl_connect("close_event", self._on_close_event)

    def _set_status(self, text: str) -> None:
        if self._status_text is not None:
            self._status_text.set_text(text)

    def _on_close_event(self, _event) -> None:
        self._figure = None
        self._axes = None
        self._visuals = None
        self._status_text = None

    def _close_viewer(self) -> None:
        dispose_skeleton_visuals(self._visuals)
        self._visuals = None
        if self._figure is not None:
            plt.close(self._figure)
        self._figure = None
        self._axes = None
        self._status_text = None

import time

import cv2
import numpy as np
import pygame
from lib_mocap.detect import SkeletonTracker
from lib_mocap.util_2d import draw_skeleton_on_frame, draw_status_on_frame

from ..sequence import SceneInterface


class RecordScene(SceneInterface):
    """Captures camera frames and feeds tracked skeletons to the recording."""

    def __init__(self, manager=None):
        super().__init__(manager)
        self.cap = None
        self._tracker = None
        self.last_frame = None
        self._started_at = 0.0

    def enter(self):
        """Grab the shared camera, start the tracker and a new recording."""
        print("RecordScene: enter")

        if self.manager is None:
            raise RuntimeError("RecordScene: no manager assigned")
        state = self.manager.global_state
        self.cap = state.camera
        if self.cap is None:
            raise RuntimeError("RecordScene: no camera in global state")

        # long-lived tracker
        self._tracker = SkeletonTracker(model_asset_path=state.model_asset_path)

        state.recording.start()
        state.saved_paths = None
        self.last_frame = None
        self._started_at = time.monotonic()

    def exit(self):
        print("RecordScene: exit")
        if self.manager is not None:
            recording = self.manager.global_state.recording
            recording.stop()
            print(
                f"RecordScene: recorded {recording.frame_count} frames "
                f"({recording.skipped} skipped)"
            )
        if self._tracker is not None:
            self._tracker.close()
        self._tracker = None
        # the camera belongs to the app; it is released on shutdown
        self.cap = None

    def update(self, dt: float) -> None:
        """Capture a frame, track the skeleton and append its code."""

        if self.cap is None or self._tracker is None or self.manager is None:
            print("RecordScene: update called before enter")
            return

        ret, frame = self.cap.read()
        if not ret:
            print("RecordScene: failed to read frame from camera")
            return

        recording = self.manager.global_state.recording
        skeleton = self._tracker.process_frame(
            frame, timestamp=time.monotonic() - self._started_at
        )
        if skeleton is not None:
            recording.add_frame(skeleton)

        # mirror only for the user-facing preview surface
        display_frame = np.ascontiguousarray(frame[:, ::-1, :])
        draw_skeleton_on_frame(display_frame, skeleton, mirror=True)
        draw_status_on_frame(display_frame, recording.frame_count, recording.active)
        self.last_frame = display_frame

    def render(self, surface):
        """Convert the last processed frame to a pygame surface and blit it.

        The frame from OpenCV is BGR; convert to RGB and scale to surface size.
        """

        if surface is None or self.last_frame is None:
            return

        surf_w, surf_h = surface.get_size()
        frame_resized = cv2.resize(self.last_frame, (surf_w, surf_h))
        frame_rgb = np.ascontiguousarray(cv2.cvtColor(frame_resized, cv2.COLOR_BGR2RGB))
        pg_surf = pygame.image.frombuffer(frame_rgb.tobytes(), (surf_w, surf_h), "RGB")
        surface.blit(pg_surf, (0, 0))

    def handle_event(self, event) -> None:
        """ESC stops the recording and opens the review scene."""

        if event is None:
            return

        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            if self.manager is not None:
                self.manager.start("review")

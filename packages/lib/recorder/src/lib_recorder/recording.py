"""Recording buffer: captured frames and the Alice code generated for them."""

from __future__ import annotations

import os
from typing import List, Optional, Tuple

from lib_mocap import AliceCodeGenerator, CapturedSkeleton, MissingJointError
from lib_mocap.io import save_code, save_skeletons


class Recording:
    """One recording session.

    `start()` begins a new session on the generator; every accepted frame is
    kept together with its code block so the session can be saved as both a
    capture (.npz) and Alice code (.txt).
    """

    def __init__(self, generator: Optional[AliceCodeGenerator] = None) -> None:
        self.generator = generator or AliceCodeGenerator()
        self.skeletons: List[CapturedSkeleton] = []
        self.blocks: List[str] = []
        self.skipped = 0
        self.active = False

    def start(self) -> None:
        self.generator.init()
        self.skeletons = []
        self.blocks = []
        self.skipped = 0
        self.active = True

    def stop(self) -> None:
        self.active = False

    def add_frame(self, skeleton: CapturedSkeleton) -> bool:
        """Generate code for `skeleton`; returns False if the frame was skipped.

        Frames missing a joint are dropped (and counted) rather than ending
        the session.
        """

        if not self.active:
            raise RuntimeError("Recording.add_frame called before start()")

        try:
            block = self.generator.frame_code(skeleton)
        except MissingJointError as e:
            self.skipped += 1
            print(f"Recording: skipped frame {len(self.blocks) + self.skipped}: {e}")
            return False

        self.skeletons.append(skeleton)
        self.blocks.append(block)
        return True

    @property
    def frame_count(self) -> int:
        return len(self.blocks)

    @property
    def code(self) -> str:
        return "".join(self.blocks)

    def final_positions(self):
        """Final positions resolved for the most recent accepted frame."""
        return self.generator.accumulator.final_positions()

    def save(self, directory: str, stem: str = "recording") -> Tuple[str, str]:
        """Write `<stem>.txt` (Alice code) and `<stem>.npz` (capture).

        Returns the (code path, capture path) pair.
        """

        code_path = os.path.join(directory, f"{stem}.txt")
        capture_path = os.path.join(directory, f"{stem}.npz")
        save_code(code_path, self.code)
        save_skeletons(capture_path, self.skeletons)
        return code_path, capture_path

"""Recorder app: capture a performance and turn it into Alice code.

Keys: R starts a recording, ESC stops it, S saves, Q quits.
"""

import argparse
import os
from typing import Optional

import cv2
import pygame
from lib_recorder import (
    GlobalState,
    RecordScene,
    ReviewScene,
    SequenceManager,
    StartScene,
)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--camera",
        type=int,
        default=0,
        help="Index passed to OpenCV's VideoCapture (default: 0).",
    )
    parser.add_argument(
        "--model",
        default="pose_landmarker_full.task",
        help="MediaPipe pose landmarker model file.",
    )
    parser.add_argument(
        "--output-dir",
        default="recordings",
        help="Directory for saved code and captures (default: recordings).",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_argument_parser().parse_args(argv)

    state = GlobalState(output_dir=args.output_dir, model_asset_path=args.model)
    manager = SequenceManager(state)
    manager.initialize()

    manager.register_scene("start", StartScene())
    manager.register_scene("record", RecordScene())
    manager.register_scene("review", ReviewScene())

    cap = cv2.VideoCapture(args.camera)
    if not cap.isOpened():
        raise RuntimeError("Could not open camera")
    state.camera = cap

    os.environ["SDL_VIDEO_WINDOW_POS"] = "%d,%d" % (500, 500)

    pygame.init()
    screen = pygame.display.set_mode((1024, 576))
    pygame.display.set_caption("Alice motion recorder")
    clock = pygame.time.Clock()

    manager.start("start")
    try:
        while manager.running:
            dt = clock.tick(30) / 1000.0
            manager.dispatch(pygame.event.get())
            manager.step(dt, screen)
            pygame.display.flip()
    finally:
        manager.shutdown()
        cap.release()
        pygame.quit()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

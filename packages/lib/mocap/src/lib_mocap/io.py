"""
I/O utilities for captured skeleton sequences and generated code.
"""

import os
from typing import List, Sequence

import numpy as np

from .data import JOINT_COUNT, CapturedSkeleton


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def save_skeletons(path: str, skeletons: Sequence[CapturedSkeleton]) -> None:
    """
    Save a capture to a .npz file.

    Args:
        path: Output path.
        skeletons: Frames in capture order.

    The archive holds `positions` [T, 20, 3], `present` [T, 20] (which joints
    each frame carried) and `timestamps` [T] (NaN where unknown).
    """
    _ensure_parent(path)

    count = len(skeletons)
    positions = np.zeros((count, JOINT_COUNT, 3), dtype=np.float64)
    present = np.zeros((count, JOINT_COUNT), dtype=bool)
    timestamps = np.full(count, np.nan, dtype=np.float64)
    for t, skeleton in enumerate(skeletons):
        positions[t], present[t] = skeleton.to_array()
        if skeleton.timestamp is not None:
            timestamps[t] = skeleton.timestamp

    np.savez(path, positions=positions, present=present, timestamps=timestamps)


def load_skeletons(path: str) -> List[CapturedSkeleton]:
    """
    Load a capture written by `save_skeletons`.

    Returns:
        Frames in capture order.

    Raises:
        FileNotFoundError: `path` does not exist.
        ValueError: the archive does not have the expected arrays or shapes.
    """
    loaded = np.load(path, allow_pickle=False)
    if not isinstance(loaded, np.lib.npyio.NpzFile):
        raise ValueError(f"{path} is not an .npz archive")

    with loaded as archive:
        if "positions" not in archive:
            raise ValueError(f"{path} has no 'positions' array")
        positions = archive["positions"]
        present = (
            archive["present"]
            if "present" in archive
            else np.ones(positions.shape[:2], dtype=bool)
        )
        timestamps = (
            archive["timestamps"]
            if "timestamps" in archive
            else np.full(positions.shape[0], np.nan)
        )

    if positions.ndim != 3 or positions.shape[1:] != (JOINT_COUNT, 3):
        raise ValueError(
            f"{path}: expected positions of shape [T, {JOINT_COUNT}, 3], got {positions.shape}"
        )
    if present.shape != positions.shape[:2] or timestamps.shape != positions.shape[:1]:
        raise ValueError(f"{path}: 'present'/'timestamps' do not match 'positions'")

    skeletons = []
    for t in range(positions.shape[0]):
        timestamp = None if np.isnan(timestamps[t]) else float(timestamps[t])
        skeletons.append(
            CapturedSkeleton.from_array(positions[t], present[t], timestamp=timestamp)
        )
    return skeletons


def save_code(path: str, code: str) -> None:
    """Write generated Alice code to a text file."""
    _ensure_parent(path)

    with open(path, "w", encoding="utf-8") as f:
        f.write(code)

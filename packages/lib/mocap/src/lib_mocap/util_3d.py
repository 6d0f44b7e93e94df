"""matplotlib rendering of retargeted (final position) skeletons."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

import numpy as np
from matplotlib.artist import Artist

from .bones import BONE_TABLE, BoneDefinition
from .data import JointType


@dataclass
class SkeletonVisuals:
    """Container for matplotlib artists representing one skeleton."""

    points: Optional[Artist] = None
    segments: List[Artist] = field(default_factory=list)


def to_plot_coords(position: np.ndarray) -> np.ndarray:
    """Map (x, y-up, z-depth) to matplotlib's (X=x, Y=z, Z=y)."""

    return np.array([position[0], position[2], position[1]], dtype=np.float64)


def create_skeleton_3d(
    final_positions: Mapping[JointType, np.ndarray],
    *,
    ax,
    bones: Sequence[BoneDefinition] = BONE_TABLE,
    color: str = "tab:blue",
) -> SkeletonVisuals:
    """Draw every bone of `bones` between its resolved end points."""

    visuals = SkeletonVisuals()
    if not final_positions:
        return visuals

    coords = np.array([to_plot_coords(p) for p in final_positions.values()])
    visuals.points = ax.scatter(coords[:, 0], coords[:, 1], coords[:, 2], c=color, s=30)

    for bone in bones:
        if bone.joint_from not in final_positions or bone.joint_to not in final_positions:
            continue
        start = to_plot_coords(final_positions[bone.joint_from])
        end = to_plot_coords(final_positions[bone.joint_to])
        line = ax.plot(
            [start[0], end[0]], [start[1], end[1]], [start[2], end[2]], c=color, linewidth=2
        )[0]
        visuals.segments.append(line)
    return visuals


def dispose_skeleton_visuals(visuals: Optional[SkeletonVisuals]) -> None:
    if visuals is None:
        return
    if visuals.points is not None:
        visuals.points.remove()
        visuals.points = None
    for line in visuals.segments:
        line.remove()
    visuals.segments = []

"""Alice code generation from captured skeletons.

Alice bipeds are animated by pointing each limb at a helper object: for every
bone the helper `box` is moved to the bone's final position, then the parent
joint is told to `pointAt` it. Whole-body motion moves a separate `root`
object that the biped then snaps to, which keeps repeated playback from
drifting.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .bones import BONE_TABLE, EXCLUDED_BONES, BoneDefinition
from .config import GeneratorConfig
from .data import CapturedSkeleton
from .kinematics import BonePlacement, KinematicAccumulator

MOVE_ROOT_TEMPLATE = (
    "root.setPositionRelativeToVehicle(new Position(0, {y}, 0), Move.duration(0));"
)
MOVE_BIPED_TEMPLATE = "biped.moveTo(root, MoveTo.duration(0));\n"
POINT_AT_TEMPLATE = (
    "box.setPositionRelativeToVehicle(new Position({x}, {y}, {z}), Move.duration(0));"
    "biped.get{bone}().pointAt(box, PointAt.duration(0));\n"
)
ROLL_TEMPLATE = "biped.get{bone}().roll(RollDirection.LEFT, 0.5, Roll.duration(0));\n"


def format_float(value: float) -> str:
    """Shortest text that reads back as the same single-precision value.

    Positional notation, no trailing zeros ("1" rather than "1.0") and no
    negative zero.
    """

    single = np.float32(value)
    if single == 0.0:
        return "0"
    return np.format_float_positional(single, trim="-")


def point_at_code(placement: BonePlacement) -> str:
    """Statements that orient `placement.target_bone` toward its position."""

    x, y, z = (format_float(v) for v in placement.position)
    code = POINT_AT_TEMPLATE.format(x=x, y=y, z=z, bone=placement.target_bone)
    if placement.roll:
        code += ROLL_TEMPLATE.format(bone=placement.target_bone)
    return code


class AliceCodeGenerator:
    """Turns captured skeletons into Alice statements, one frame at a time.

    Call `init()` at the start of every recording, then `movement_code` and
    `joints_code` (or `frame_code`, which does both) once per frame, in
    capture order.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        bones: Sequence[BoneDefinition] = BONE_TABLE,
        excluded: frozenset[str] = EXCLUDED_BONES,
    ) -> None:
        self.accumulator = KinematicAccumulator(config, bones=bones, excluded=excluded)

    def init(self) -> None:
        self.accumulator.init()

    def movement_code(self, skeleton: CapturedSkeleton) -> str:
        """Statements moving the whole biped for this frame.

        Only the vertical component of the displacement is used, so the biped
        bobs in place instead of wandering off.
        """

        displacement = self.accumulator.compute_root_displacement(skeleton)
        return MOVE_ROOT_TEMPLATE.format(y=format_float(displacement[1])) + MOVE_BIPED_TEMPLATE

    def joints_code(self, skeleton: CapturedSkeleton) -> str:
        """Statements rotating every non-excluded joint for this frame."""

        placements = self.accumulator.compute_joint_positions(skeleton)
        return "".join(point_at_code(placement) for placement in placements)

    def frame_code(self, skeleton: CapturedSkeleton) -> str:
        """Movement and joint statements for one frame.

        The frame is checked for every joint first so a bad frame neither
        records a reference root nor touches final positions.
        """

        # joints_code would raise too, but only after movement_code ran
        self.accumulator.require_joints(skeleton)
        return self.movement_code(skeleton) + self.joints_code(skeleton)

"""Bone-length normalized forward accumulation of captured skeletons.

Captured skeletons have the proportions of whoever stands in front of the
camera. Alice bipeds have fixed proportions, so each captured bone only
contributes its direction: the direction is scaled to the canonical bone
length from `BONE_TABLE` and appended to the already resolved position of
its parent joint. Walking the table in order resolves the whole skeleton
in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from .bones import (
    BONE_TABLE,
    EXCLUDED_BONES,
    ROOT_JOINT,
    BoneDefinition,
    required_joints,
    validate_bone_table,
)
from .config import DEFAULT_CONFIG, GeneratorConfig
from .data import CapturedSkeleton, JointType
from .errors import MissingJointError

# Index of the depth axis in (x, y, z)
DEPTH_AXIS = 2


def normalize(vector: np.ndarray) -> np.ndarray:
    """Return a unit-length copy of `vector`.

    A vector of exactly zero length has no direction; it normalizes to the
    zero vector instead of raising.
    """

    norm = float(np.linalg.norm(vector))
    if norm == 0.0:
        return np.zeros(3, dtype=np.float64)
    return np.asarray(vector, dtype=np.float64) / norm


@dataclass(frozen=True, eq=False)
class BonePlacement:
    """Resolved placement of one emitted bone for the current frame.

    position: final position of `joint_to`, relative to the biped.
    offset: bone-length scaled offset from the parent's final position.
    roll: the child points backward (positive depth), so the parent limb has
            to be rolled half a turn to avoid a twisted joint.
    """

    target_bone: str
    joint_to: JointType
    position: np.ndarray
    offset: np.ndarray
    roll: bool


class KinematicAccumulator:
    """Per-session state for turning captured frames into Alice placements.

    Not thread-safe: one frame at a time per instance. The bone table itself
    is immutable and may be shared between instances.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        bones: Sequence[BoneDefinition] = BONE_TABLE,
        excluded: frozenset[str] = EXCLUDED_BONES,
        root: JointType = ROOT_JOINT,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.bones = validate_bone_table(bones, root)
        self.excluded = frozenset(excluded)
        self.root = root
        self.required = tuple(
            sorted(required_joints(self.bones, root), key=lambda joint: joint.value)
        )
        self._final_positions: Dict[JointType, np.ndarray] = {}
        self._reference_root: Optional[np.ndarray] = None
        self.session_active = False
        self._reset_final_positions()

    def init(self) -> None:
        """Start a new recording session.

        Forgets the reference root and puts every final position back to its
        initial value (root at the canonical height, everything else zero).
        """

        self._reference_root = None
        self._reset_final_positions()
        self.session_active = True

    def _reset_final_positions(self) -> None:
        self._final_positions = {
            bone.joint_to: np.zeros(3, dtype=np.float64) for bone in self.bones
        }
        self._final_positions[self.root] = np.array(
            [0.0, self.config.root_height, 0.0], dtype=np.float64
        )

    @property
    def reference_root(self) -> Optional[np.ndarray]:
        """Root position of the first frame of this session, if seen yet."""

        if self._reference_root is None:
            return None
        return self._reference_root.copy()

    def final_position(self, joint: JointType) -> np.ndarray:
        """Current final position of `joint` (a copy)."""

        return self._final_positions[joint].copy()

    def final_positions(self) -> Dict[JointType, np.ndarray]:
        """Snapshot of every final position."""

        return {joint: position.copy() for joint, position in self._final_positions.items()}

    def require_joints(self, skeleton: CapturedSkeleton) -> None:
        """Raise `MissingJointError` unless `skeleton` carries every joint needed."""

        missing = skeleton.missing(self.required)
        if missing:
            raise MissingJointError(missing)

    def compute_root_displacement(self, skeleton: CapturedSkeleton) -> np.ndarray:
        """Whole-body displacement for `skeleton` relative to the session start.

        The first frame after `init()` becomes the reference and yields zero.
        Later frames yield a vector of length `config.step_size` pointing from
        the reference root toward the current root (zero if they coincide).
        The real distance is discarded so noisy captures cannot fling the
        biped around.

        Raises:
                MissingJointError: the frame has no root joint.
        """

        if self.root not in skeleton:
            raise MissingJointError([self.root])

        current = np.asarray(skeleton[self.root], dtype=np.float64)
        if self._reference_root is None:
            self._reference_root = current.copy()
            return np.zeros(3, dtype=np.float64)

        return normalize(current - self._reference_root) * self.config.step_size

    def compute_joint_positions(self, skeleton: CapturedSkeleton) -> List[BonePlacement]:
        """Resolve final positions for `skeleton` and list the emitted bones.

        Bones are processed in table order; excluded bones update the final
        positions but are left out of the result.

        Raises:
                MissingJointError: the frame lacks a joint the table reads. No
                        final position is modified in that case.
        """

        self.require_joints(skeleton)

        placements: List[BonePlacement] = []
        for bone in self.bones:
            joint_from = np.asarray(skeleton[bone.joint_from], dtype=np.float64)
            joint_to = np.asarray(skeleton[bone.joint_to], dtype=np.float64)

            offset = normalize(joint_to - joint_from) * bone.length
            # parent resolved earlier in this pass (table order is validated)
            position = self._final_positions[bone.joint_from] + offset
            self._final_positions[bone.joint_to] = position

            if bone.target_bone in self.excluded:
                continue

            placements.append(
                BonePlacement(
                    target_bone=bone.target_bone,
                    joint_to=bone.joint_to,
                    position=position.copy(),
                    offset=offset,
                    roll=bool(offset[DEPTH_AXIS] > 0.0),
                )
            )
        return placements

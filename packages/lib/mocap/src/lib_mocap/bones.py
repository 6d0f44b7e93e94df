"""Bone topology of the Alice biped, expressed in capture joints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Sequence, Tuple

from .data import JointType
from .errors import BoneTableError


@dataclass(frozen=True)
class BoneDefinition:
    """One Alice bone and the capture joints that define its direction.

    target_bone: Alice joint name, used as `biped.get<target_bone>()`.
    joint_from: capture joint the bone starts at (its final position must be
            resolved by an earlier entry, or be the root).
    joint_to: capture joint the bone ends at.
    length: canonical bone length in Alice units.
    """

    target_bone: str
    joint_from: JointType
    joint_to: JointType
    length: float


ROOT_JOINT = JointType.HIP_CENTER


def validate_bone_table(
    bones: Sequence[BoneDefinition], root: JointType = ROOT_JOINT
) -> Tuple[BoneDefinition, ...]:
    """Check that `bones` is topologically ordered from `root`.

    Every `joint_from` must be the root or the `joint_to` of an earlier
    entry, and every length must be positive. Returns the table as a tuple.

    Raises:
            BoneTableError: an entry reads a joint that is not resolved yet, or
                    has a non-positive length.
    """

    resolved = {root}
    for index, bone in enumerate(bones):
        if bone.length <= 0.0:
            raise BoneTableError(
                f"Bone #{index} ({bone.target_bone}) has non-positive length {bone.length}."
            )
        if bone.joint_from not in resolved:
            raise BoneTableError(
                f"Bone #{index} ({bone.target_bone}) starts at {bone.joint_from.name}, "
                "which no earlier bone resolves."
            )
        resolved.add(bone.joint_to)
    return tuple(bones)


def required_joints(
    bones: Iterable[BoneDefinition], root: JointType = ROOT_JOINT
) -> FrozenSet[JointType]:
    """Every capture joint a frame must carry for `bones` (and root motion)."""

    joints = {root}
    for bone in bones:
        joints.add(bone.joint_from)
        joints.add(bone.joint_to)
    return frozenset(joints)


# Order matters: each entry only reads joints resolved above it.
BONE_TABLE: Tuple[BoneDefinition, ...] = validate_bone_table(
    [
        BoneDefinition("SpineBase", JointType.HIP_CENTER, JointType.SHOULDER_CENTER, 0.4375),
        BoneDefinition("Neck", JointType.SHOULDER_CENTER, JointType.HEAD, 0.0625),
        BoneDefinition("Neck", JointType.SHOULDER_CENTER, JointType.SHOULDER_LEFT, 0.125),
        BoneDefinition("Neck", JointType.SHOULDER_CENTER, JointType.SHOULDER_RIGHT, 0.125),
        BoneDefinition("LeftShoulder", JointType.SHOULDER_LEFT, JointType.ELBOW_LEFT, 0.25),
        BoneDefinition("RightShoulder", JointType.SHOULDER_RIGHT, JointType.ELBOW_RIGHT, 0.25),
        BoneDefinition("LeftElbow", JointType.ELBOW_LEFT, JointType.HAND_LEFT, 0.125),
        BoneDefinition("RightElbow", JointType.ELBOW_RIGHT, JointType.HAND_RIGHT, 0.125),
        BoneDefinition("Pelvis", JointType.HIP_CENTER, JointType.HIP_LEFT, 0.0875),
        BoneDefinition("Pelvis", JointType.HIP_CENTER, JointType.HIP_RIGHT, 0.0875),
        BoneDefinition("LeftHip", JointType.HIP_LEFT, JointType.KNEE_LEFT, 0.5),
        BoneDefinition("RightHip", JointType.HIP_RIGHT, JointType.KNEE_RIGHT, 0.5),
        BoneDefinition("LeftKnee", JointType.KNEE_LEFT, JointType.ANKLE_LEFT, 0.4375),
        BoneDefinition("RightKnee", JointType.KNEE_RIGHT, JointType.ANKLE_RIGHT, 0.4375),
        BoneDefinition("LeftAnkle", JointType.ANKLE_LEFT, JointType.FOOT_LEFT, 0.125),
        BoneDefinition("RightAnkle", JointType.ANKLE_RIGHT, JointType.FOOT_RIGHT, 0.125),
    ]
)

# Rotating these bones distorts the biped too much; they are still placed
# but no pointAt/roll statements are emitted for them.
EXCLUDED_BONES: FrozenSet[str] = frozenset({"Neck", "Pelvis", "LeftAnkle", "RightAnkle"})

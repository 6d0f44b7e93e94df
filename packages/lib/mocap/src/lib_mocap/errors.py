"""Exceptions raised by lib_mocap."""

from __future__ import annotations

from typing import Iterable

from .data import JointType


class MissingJointError(KeyError):
    """A frame lacks joints the bone table reads."""

    def __init__(self, joints: Iterable[JointType]) -> None:
        self.joints = tuple(joints)
        names = ", ".join(joint.name for joint in self.joints)
        super().__init__(f"Frame is missing required joints: {names}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0])


class BoneTableError(ValueError):
    """A bone table is not topologically ordered or has a bad length."""

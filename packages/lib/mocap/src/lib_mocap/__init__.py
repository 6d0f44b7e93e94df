from .alice import AliceCodeGenerator, format_float
from .bones import BONE_TABLE, EXCLUDED_BONES, ROOT_JOINT, BoneDefinition
from .config import DEFAULT_CONFIG, GeneratorConfig
from .data import CapturedSkeleton, JointType
from .errors import BoneTableError, MissingJointError
from .io import load_skeletons, save_code, save_skeletons
from .kinematics import BonePlacement, KinematicAccumulator, normalize

__all__ = [
    "AliceCodeGenerator",
    "format_float",
    "BONE_TABLE",
    "EXCLUDED_BONES",
    "ROOT_JOINT",
    "BoneDefinition",
    "DEFAULT_CONFIG",
    "GeneratorConfig",
    "CapturedSkeleton",
    "JointType",
    "BoneTableError",
    "MissingJointError",
    "load_skeletons",
    "save_code",
    "save_skeletons",
    "BonePlacement",
    "KinematicAccumulator",
    "normalize",
]

"""Configuration for Alice code generation."""

from dataclasses import dataclass

# Height of the biped's root joint in Alice units
ROOT_HEIGHT = 1.0

# Fixed whole-body displacement applied per frame once the root has moved
STEP_SIZE = 0.25


@dataclass(frozen=True)
class GeneratorConfig:
    """Tunables of the kinematic accumulator."""

    root_height: float = ROOT_HEIGHT
    step_size: float = STEP_SIZE

    def __post_init__(self) -> None:
        if self.step_size < 0.0:
            raise ValueError(f"step_size must be non-negative, got {self.step_size}")


DEFAULT_CONFIG = GeneratorConfig()

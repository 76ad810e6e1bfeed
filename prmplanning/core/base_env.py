"""Base environment class for planning queries."""

from abc import ABC, abstractmethod
import threading
from typing import Tuple
import numpy as np

DEFAULT_COLLISION_RESOLUTION = 0.01


class BaseEnvironment(ABC):
    """
    Abstract base class for planning environments.

    An environment is the robot model and validity oracle of a planning
    call. Planners hold ``mutex`` for the whole build and query sequence.
    """

    def __init__(self, collision_resolution: float = DEFAULT_COLLISION_RESOLUTION):
        if collision_resolution <= 0.0:
            raise ValueError("collision_resolution must be positive")
        self.collision_resolution = collision_resolution
        self.mutex = threading.RLock()

    @abstractmethod
    def get_active_dof(self) -> int:
        """Return the number of active degrees of freedom."""
        pass

    @abstractmethod
    def get_joint_limits(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return the (lower, upper) bounds of the active joints."""
        pass

    @abstractmethod
    def is_collision_free(self, configuration: np.ndarray) -> bool:
        """Check if a configuration is collision-free."""
        pass

    def segment_free(self, config1: np.ndarray, config2: np.ndarray) -> bool:
        """Check the straight-line interpolation between two configurations."""
        config1 = np.asarray(config1, dtype=np.float64)
        config2 = np.asarray(config2, dtype=np.float64)
        length = np.linalg.norm(config2 - config1)
        steps = max(1, int(np.ceil(length / self.collision_resolution)))
        for i in range(steps + 1):
            alpha = i / steps
            if not self.is_collision_free((1 - alpha) * config1 + alpha * config2):
                return False
        return True

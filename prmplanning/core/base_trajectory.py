"""Base trajectory sink class."""

from abc import ABC, abstractmethod
import numpy as np


class BaseTrajectory(ABC):
    """Abstract base class for consumers of planned paths."""

    @abstractmethod
    def add_point(self, configuration: np.ndarray):
        """Append the next configuration of the path."""
        pass

    @abstractmethod
    def clear(self):
        """Drop all recorded points."""
        pass

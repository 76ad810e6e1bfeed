"""Base configuration sampler class."""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np


class BaseSampler(ABC):
    """Abstract base class for configuration samplers."""

    @abstractmethod
    def sample(self) -> Optional[np.ndarray]:
        """
        Draw one valid configuration.

        Returns:
            The configuration, or None on a transient failure.
        """
        pass

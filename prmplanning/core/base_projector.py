"""Base constraint projector class."""

from abc import ABC, abstractmethod
import numpy as np


class BaseConstraintProjector(ABC):
    """Abstract base class for projecting configurations onto constraints."""

    @abstractmethod
    def project(self, from_config: np.ndarray, config: np.ndarray) -> bool:
        """
        Adjust ``config`` in place so that it satisfies the constraints.

        Returns:
            True if the projected configuration is acceptable, False otherwise.
        """
        pass

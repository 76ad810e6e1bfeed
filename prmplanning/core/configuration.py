"""Configuration helpers and the default distance metric."""

from typing import Optional, Sequence
import numpy as np


def as_configuration(values: Sequence[float], dof: Optional[int] = None) -> np.ndarray:
    """
    Convert values into an immutable configuration vector.

    Raises:
        ValueError: if ``dof`` is given and the dimension does not match.
    """
    config = np.array(values, dtype=np.float64).reshape(-1)
    if dof is not None and config.shape[0] != dof:
        raise ValueError(
            f"Configuration has {config.shape[0]} values, expected {dof} active DOF."
        )
    config.setflags(write=False)
    return config


def euclidean_distance(config1: np.ndarray, config2: np.ndarray) -> float:
    return float(np.linalg.norm(np.asarray(config1) - np.asarray(config2)))

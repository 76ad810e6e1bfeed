"""Helpers for post-processing planned paths."""

from typing import Callable, List, Optional
import numpy as np

from prmplanning.core.configuration import euclidean_distance


def path_cost(
    path: List[np.ndarray],
    distance_fn: Callable[[np.ndarray, np.ndarray], float] = euclidean_distance
) -> float:
    if len(path) < 2:
        return 0.0
    return sum(distance_fn(path[i], path[i + 1]) for i in range(len(path) - 1))


def smooth_path(
    path: List[np.ndarray],
    segment_free: Callable[[np.ndarray, np.ndarray], bool],
    max_iterations: int = 100,
    rng: Optional[np.random.Generator] = None
) -> List[np.ndarray]:
    """Randomly shortcut pairs of waypoints whose connecting segment is free."""
    if len(path) <= 2:
        return path
    if rng is None:
        rng = np.random.default_rng()

    smoothed = [np.array(config, dtype=np.float64) for config in path]
    for _ in range(max_iterations):
        if len(smoothed) <= 2:
            break
        i = int(rng.integers(0, len(smoothed) - 2))
        j = int(rng.integers(i + 2, len(smoothed)))
        if segment_free(smoothed[i], smoothed[j]):
            smoothed = smoothed[:i + 1] + smoothed[j:]
    return smoothed

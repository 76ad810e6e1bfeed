"""List-backed trajectory sink."""

from typing import Iterator, List, Optional
import numpy as np

from prmplanning.core.base_trajectory import BaseTrajectory


class Trajectory(BaseTrajectory):
    """Records path configurations in the order they are added."""

    @staticmethod
    def interpolate_linear_points(
        start: np.ndarray,
        end: np.ndarray,
        step_size: Optional[float] = None,
        steps: int = 10
    ) -> List[np.ndarray]:
        """
        Evenly spaced points from ``start`` to ``end``, both included.

        With ``step_size`` the number of steps is chosen so no step is longer
        than it; otherwise ``steps`` is used.
        """
        if step_size is not None:
            steps = max(1, int(np.ceil(np.linalg.norm(end - start) / step_size)))
        return [start + (end - start) * (i / steps) for i in range(steps + 1)]

    def __init__(self, points: Optional[List[np.ndarray]] = None):
        self.points: List[np.ndarray] = []
        for point in points or []:
            self.add_point(point)

    def add_point(self, configuration: np.ndarray):
        self.points.append(np.array(configuration, dtype=np.float64))

    def clear(self):
        self.points = []

    def get_points(self) -> List[np.ndarray]:
        return [point.copy() for point in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.points)

    def interpolate(
        self,
        steps_per_segment: int = 10,
        step_size: Optional[float] = None
    ) -> "Trajectory":
        """Return a densified copy with linearly interpolated waypoints."""
        if len(self.points) <= 1:
            return Trajectory(self.points)

        interpolated = [self.points[0].copy()]
        for start, end in zip(self.points[:-1], self.points[1:]):
            segment = self.interpolate_linear_points(start, end, step_size, steps_per_segment)
            interpolated.extend(segment[1:])
        return Trajectory(interpolated)

"""Base motion planner class."""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, List, Optional
import numpy as np

from prmplanning.core.base_env import BaseEnvironment
from prmplanning.core.base_projector import BaseConstraintProjector
from prmplanning.core.base_sampler import BaseSampler
from prmplanning.core.base_trajectory import BaseTrajectory
from prmplanning.core.configuration import as_configuration, euclidean_distance
from prmplanning.core.events import EventEmitter
from prmplanning.core.params import PlannerParameters
from prmplanning.samplers.random_sampler import RandomSampler
from prmplanning.trajectories.trajectory import Trajectory
from prmplanning.utils.path_utils import smooth_path


class PlannerStateError(RuntimeError):
    """Raised when a planner is used before it has been initialized."""


class BaseMotionPlanner(EventEmitter, ABC):
    """
    Abstract base class for motion planners.

    Concrete planners share only this capability contract: ``init_plan``
    prepares the planner for an environment and parameter set, and
    ``plan_path`` answers the query stored in the parameters.
    """

    def __init__(
        self,
        environment: BaseEnvironment,
        sampler: Optional[BaseSampler] = None,
        distance_fn: Optional[Callable[[np.ndarray, np.ndarray], float]] = None,
        projector: Optional[BaseConstraintProjector] = None,
    ):
        super().__init__()
        self.env = environment
        self.sampler = sampler if sampler is not None else RandomSampler(environment)
        self.distance = distance_fn if distance_fn is not None else euclidean_distance
        self.projector = projector
        self.parameters: Optional[PlannerParameters] = None

    @abstractmethod
    def init_plan(self, parameters: PlannerParameters) -> bool:
        """Prepare the planner. Returns True on success."""
        pass

    @abstractmethod
    def plan_path(self, trajectory: BaseTrajectory) -> bool:
        """
        Plan from ``parameters.start_config`` to ``parameters.goal_config``.

        On success the path is written to ``trajectory`` start first. On
        failure nothing is written.
        """
        pass

    def get_parameters(self) -> Optional[PlannerParameters]:
        return self.parameters

    def get_robot(self) -> BaseEnvironment:
        return self.env

    def plan(
        self,
        start_config: np.ndarray,
        goal_config: np.ndarray,
        max_iterations: Optional[int] = None
    ) -> Optional[List[np.ndarray]]:
        """
        Plan a collision-free path from start to goal.

        Initializes the planner on first use. Returns a list of
        configurations forming a path, or None if planning fails.
        """
        parameters = self.parameters if self.parameters is not None else PlannerParameters()
        if max_iterations is not None:
            parameters = replace(parameters, max_iterations=max_iterations)
        parameters = parameters.with_query(start_config, goal_config)

        if self.parameters is None:
            if not self.init_plan(parameters):
                return None
        else:
            self.parameters = parameters

        trajectory = Trajectory()
        if not self.plan_path(trajectory):
            return None
        return trajectory.get_points()

    def _require_parameters(self) -> PlannerParameters:
        if self.parameters is None:
            raise PlannerStateError(f"{type(self).__name__} used before init_plan")
        return self.parameters

    def _query_configs(self):
        parameters = self._require_parameters()
        if parameters.start_config is None or parameters.goal_config is None:
            raise PlannerStateError("start_config and goal_config must be set before planning")
        dof = self.env.get_active_dof()
        return (
            as_configuration(parameters.start_config, dof),
            as_configuration(parameters.goal_config, dof),
        )

    def is_path_collision_free(self, config1: np.ndarray, config2: np.ndarray) -> bool:
        """Check if a straight-line path between two configs is collision-free."""
        return self.env.segment_free(config1, config2)

    def smooth_path(
        self,
        path: List[np.ndarray],
        max_iterations: int = 100
    ) -> List[np.ndarray]:
        """Smooth a path by removing unnecessary waypoints."""
        return smooth_path(path, self.is_path_collision_free, max_iterations)

"""Core base classes and shared types for the planning package."""

from prmplanning.core.base_env import BaseEnvironment
from prmplanning.core.base_projector import BaseConstraintProjector
from prmplanning.core.base_sampler import BaseSampler
from prmplanning.core.base_trajectory import BaseTrajectory
from prmplanning.core.configuration import as_configuration, euclidean_distance
from prmplanning.core.events import EventEmitter, PlannerEvent, PlannerObserver
from prmplanning.core.params import PlannerParameters
from prmplanning.core.base_mp import BaseMotionPlanner, PlannerStateError

__all__ = [
    "BaseEnvironment",
    "BaseConstraintProjector",
    "BaseSampler",
    "BaseTrajectory",
    "as_configuration",
    "euclidean_distance",
    "EventEmitter",
    "PlannerEvent",
    "PlannerObserver",
    "PlannerParameters",
    "BaseMotionPlanner",
    "PlannerStateError",
]

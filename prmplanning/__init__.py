"""
prmplanning - Sampling-based roadmap and bidirectional tree motion planners.
"""

from prmplanning.core import BaseEnvironment, BaseMotionPlanner, PlannerParameters
from prmplanning.spatial import ExtendResult, IncrementalTree, RoadmapGraph
from prmplanning.planners import ClassicPRM, SBLPlanner
from prmplanning.samplers import RandomSampler
from prmplanning.trajectories import Trajectory
from prmplanning.environments import MujocoEnvironment

__version__ = "0.1.0"

__all__ = [
    "BaseEnvironment",
    "BaseMotionPlanner",
    "PlannerParameters",
    "ExtendResult",
    "IncrementalTree",
    "RoadmapGraph",
    "ClassicPRM",
    "SBLPlanner",
    "RandomSampler",
    "Trajectory",
    "MujocoEnvironment",
]

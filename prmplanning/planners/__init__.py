"""Motion planning implementations."""

from prmplanning.planners.classic_prm import ClassicPRM, PlannerState
from prmplanning.planners.sbl_planner import SBLPlanner

__all__ = ["ClassicPRM", "PlannerState", "SBLPlanner"]

"""Planner parameters shared by the roadmap and tree planners."""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional
import numpy as np

DEFAULT_MAX_NODES = 100
DEFAULT_NEIGHBOR_THRESHOLD = 5.0
DEFAULT_STEP_LENGTH = 0.04
DEFAULT_MAX_ITERATIONS = 5000


@dataclass(frozen=True)
class PlannerParameters:
    """
    Read-only planning parameters.

    Attributes:
        max_nodes: Number of roadmap samples to draw (soft node budget).
        neighbor_threshold: Maximum distance for a roadmap edge.
        step_length: Extension step of the incremental trees.
        max_iterations: Tree growth budget, None for unbounded growth.
        start_config: Start configuration of the current query.
        goal_config: Goal configuration of the current query.
        roadmap_dump_path: Optional file the built roadmap is written to.
    """
    max_nodes: int = DEFAULT_MAX_NODES
    neighbor_threshold: float = DEFAULT_NEIGHBOR_THRESHOLD
    step_length: float = DEFAULT_STEP_LENGTH
    max_iterations: Optional[int] = DEFAULT_MAX_ITERATIONS
    start_config: Optional[np.ndarray] = field(default=None, compare=False)
    goal_config: Optional[np.ndarray] = field(default=None, compare=False)
    roadmap_dump_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.max_nodes < 0:
            raise ValueError("max_nodes must be non-negative")
        if self.neighbor_threshold <= 0.0:
            raise ValueError("neighbor_threshold must be positive")
        if self.step_length <= 0.0:
            raise ValueError("step_length must be positive")
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError("max_iterations must be non-negative or None")
        for name in ("start_config", "goal_config"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, np.ndarray):
                object.__setattr__(self, name, np.array(value, dtype=np.float64))

    def with_query(self, start_config, goal_config) -> "PlannerParameters":
        """Return a copy with a new start/goal pair."""
        return replace(
            self,
            start_config=np.array(start_config, dtype=np.float64),
            goal_config=np.array(goal_config, dtype=np.float64),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlannerParameters":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown planner parameters: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, np.ndarray):
                value = value.tolist()
            result[f.name] = value
        return result

"""Append-only tree grown by straight-line extension, used by the SBL planner."""

from dataclasses import dataclass
import enum
from typing import Callable, List, Optional, Tuple

import numpy as np

from prmplanning.core.base_projector import BaseConstraintProjector
from prmplanning.core.configuration import as_configuration, euclidean_distance
from prmplanning.core.params import DEFAULT_STEP_LENGTH

CONNECT_TOLERANCE = 0.1
PROGRESS_TOLERANCE = 0.01


class ExtendResult(enum.Enum):
    """Outcome of a tree extension."""
    FAILED = 0
    REACHED = 1
    CONNECTED = 2


@dataclass(frozen=True)
class TreeContext:
    """
    Read-only settings a tree needs from its planner.

    Attributes:
        dof: Active degrees of freedom of every configuration in the tree.
        segment_free: Validity oracle for straight-line segments.
        step_length: Maximum distance covered by one extension step.
        distance_fn: Metric over configurations.
        projector: Optional constraint projector applied to each step.
    """
    dof: int
    segment_free: Callable[[np.ndarray, np.ndarray], bool]
    step_length: float = DEFAULT_STEP_LENGTH
    distance_fn: Callable[[np.ndarray, np.ndarray], float] = euclidean_distance
    projector: Optional[BaseConstraintProjector] = None


@dataclass(frozen=True)
class TreeNode:
    """Stores a configuration and the index of its parent (None for a root)."""
    parent: Optional[int]
    config: np.ndarray


class IncrementalTree:
    """Rooted tree of configurations stored in insertion order."""

    def __init__(self, context: TreeContext):
        self.context = context
        self.nodes: List[TreeNode] = []
        self.best_distance = 0.0

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def step_length(self) -> float:
        return self.context.step_length

    def add_node(self, parent: Optional[int], config: np.ndarray) -> int:
        if parent is not None and not 0 <= parent < len(self.nodes):
            raise IndexError(f"Parent index {parent} is not in the tree.")
        self.nodes.append(TreeNode(parent, as_configuration(config, self.context.dof)))
        return len(self.nodes) - 1

    def get_config(self, index: int) -> np.ndarray:
        if index < 0:
            raise IndexError(f"Tree index {index} is not in the tree.")
        return self.nodes[index].config

    def last_index(self) -> int:
        return len(self.nodes) - 1

    def nearest_node(self, target: np.ndarray) -> Optional[int]:
        """Index of the node closest to ``target``; updates ``best_distance``."""
        best_index = None
        best_distance = 0.0
        for index, node in enumerate(self.nodes):
            dist = self.context.distance_fn(target, node.config)
            if best_index is None or dist < best_distance:
                best_index = index
                best_distance = dist

        if best_index is not None:
            self.best_distance = best_distance
        return best_index

    def extend(
        self,
        target: np.ndarray,
        single_step: bool = False
    ) -> Tuple[ExtendResult, Optional[int]]:
        """
        Grow greedily from the nearest node toward ``target``.

        Returns the outcome and the index of the last node reached: the
        nearest node if nothing was added, otherwise the newest node.
        """
        target = np.asarray(target, dtype=np.float64)
        last = self.nearest_node(target)
        if last is None:
            return ExtendResult.FAILED, None

        step_length = self.context.step_length
        distance = self.context.distance_fn
        current = self.nodes[last].config
        stopped = ExtendResult.FAILED

        while True:
            dist = distance(target, current)
            if dist <= CONNECT_TOLERANCE * step_length:
                return ExtendResult.CONNECTED, last
            scale = step_length / dist if dist > step_length else 1.0
            candidate = current + (target - current) * scale

            if self.context.projector is not None:
                if not self.context.projector.project(current, candidate):
                    return stopped, last
                # a projection that undoes the step would loop forever
                if distance(current, candidate) <= PROGRESS_TOLERANCE * step_length:
                    return stopped, last

            if not self.context.segment_free(current, candidate):
                return stopped, last

            last = self.add_node(last, candidate)
            current = self.nodes[last].config
            stopped = ExtendResult.REACHED
            if single_step:
                return ExtendResult.CONNECTED, last

    def path_to_root(self, index: int) -> List[np.ndarray]:
        """Configurations from the root down to ``index``."""
        self.get_config(index)
        configs = []
        node_index = index
        for _ in range(len(self.nodes)):
            node = self.nodes[node_index]
            configs.append(node.config)
            if node.parent is None:
                configs.reverse()
                return configs
            node_index = node.parent
        raise RuntimeError(f"Parent chain of node {index} does not reach a root.")

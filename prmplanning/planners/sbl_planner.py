"""Bidirectional single-query tree planner (SBL / RRT-Connect style)."""

import itertools
import logging
import time
from typing import List, Optional

import numpy as np

from prmplanning.core.base_mp import BaseMotionPlanner
from prmplanning.core.base_trajectory import BaseTrajectory
from prmplanning.core.params import PlannerParameters
from prmplanning.spatial.incremental_tree import (
    CONNECT_TOLERANCE,
    ExtendResult,
    IncrementalTree,
    TreeContext,
)

logger = logging.getLogger(__name__)


class SBLPlanner(BaseMotionPlanner):
    """
    Grows one tree from the start and one from the goal until they meet.

    Every iteration the active tree is extended toward a random sample and
    the other tree toward the configuration the active tree reached. The
    roles swap after each iteration.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.start_tree: Optional[IncrementalTree] = None
        self.goal_tree: Optional[IncrementalTree] = None
        self.connected = False
        self.path: List[np.ndarray] = []

    def init_plan(self, parameters: PlannerParameters) -> bool:
        logger.info("Initializing SBL planner")
        with self.env.mutex:
            self.parameters = parameters
            self.reset()
        return True

    def reset(self):
        context = TreeContext(
            dof=self.env.get_active_dof(),
            segment_free=self.env.segment_free,
            step_length=self._require_parameters().step_length,
            distance_fn=self.distance,
            projector=self.projector,
        )
        self.start_tree = IncrementalTree(context)
        self.goal_tree = IncrementalTree(context)
        self.connected = False
        self.path = []

    def plan_path(self, trajectory: BaseTrajectory) -> bool:
        parameters = self._require_parameters()

        with self.env.mutex:
            start_time = time.time()
            start_config, goal_config = self._query_configs()
            self.reset()
            self.start_tree.add_node(None, start_config)
            self.goal_tree.add_node(None, goal_config)

            if not self.build_trees(parameters.max_iterations):
                logger.error("Trees did not connect")
                return False

            for config in self.path:
                trajectory.add_point(config)

        logger.debug(
            "Plan success, path=%d points in %.3fs",
            len(self.path), time.time() - start_time
        )
        return True

    def build_trees(self, max_iterations: Optional[int] = None) -> bool:
        """
        Alternate tree growth until the trees connect.

        ``max_iterations`` of None grows without bound.
        """
        # Always try the goal first
        result, index = self.start_tree.extend(self.goal_tree.get_config(0))
        if result == ExtendResult.CONNECTED:
            self._join(self.start_tree, index, self.goal_tree, 0)
            return True

        active, other = self.start_tree, self.goal_tree
        iterations = itertools.count() if max_iterations is None else range(max_iterations)
        for iteration in iterations:
            target = self.sampler.sample()
            if target is None:
                self.emit("sample_failed", iteration=iteration)
            else:
                active.extend(active.get_config(active.last_index()))
                result, active_index = active.extend(target)

                if result != ExtendResult.FAILED:
                    other.extend(other.get_config(other.last_index()))
                    result, other_index = other.extend(active.get_config(active_index))
                    if result == ExtendResult.CONNECTED:
                        self._join(active, active_index, other, other_index)
                        self.emit(
                            "trees_connected",
                            level=logging.INFO,
                            iteration=iteration,
                            nodes=len(self.start_tree) + len(self.goal_tree),
                        )
                        return True

            active, other = other, active

        self.emit("budget_exhausted", level=logging.WARNING, iterations=max_iterations)
        return False

    def _join(self, tree_a: IncrementalTree, index_a: int, tree_b: IncrementalTree, index_b: int):
        """
        Join the two root chains at the meeting nodes, start first.

        Meeting nodes within the connect tolerance are one configuration and
        appear once, unless skipping either copy would leave a blocked
        segment. A root is never dropped, so start and goal are kept exactly.
        """
        chain_a = tree_a.path_to_root(index_a)
        chain_b = tree_b.path_to_root(index_b)[::-1]
        tolerance = CONNECT_TOLERANCE * self._require_parameters().step_length
        if self.distance(chain_a[-1], chain_b[0]) <= tolerance:
            if len(chain_b) > 1 and self.env.segment_free(chain_a[-1], chain_b[1]):
                chain_b = chain_b[1:]
            elif len(chain_a) > 1 and self.env.segment_free(chain_a[-2], chain_b[0]):
                chain_a = chain_a[:-1]
        path = chain_a + chain_b
        if tree_a is self.goal_tree:
            path.reverse()
        self.path = [np.array(config) for config in path]
        self.connected = True

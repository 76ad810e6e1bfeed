"""Classic probabilistic roadmap (PRM) planner."""

import enum
import logging
import time
from typing import List, Optional

import numpy as np

from prmplanning.core.base_mp import BaseMotionPlanner
from prmplanning.core.base_trajectory import BaseTrajectory
from prmplanning.core.configuration import as_configuration
from prmplanning.core.params import PlannerParameters
from prmplanning.spatial.roadmap_graph import RoadmapGraph, RoadmapNode

logger = logging.getLogger(__name__)


class PlannerState(enum.Enum):
    """Progress of a roadmap planning call."""
    UNINITIALIZED = "uninitialized"
    ROADMAP_BUILT = "roadmap_built"
    START_ATTACHED = "start_attached"
    GOAL_ATTACHED = "goal_attached"
    PATH_FOUND = "path_found"
    NO_PATH = "no_path"


class ClassicPRM(BaseMotionPlanner):
    """
    Multi-query roadmap planner.

    ``init_plan`` samples ``max_nodes`` valid configurations and connects
    every pair within the neighbor threshold whose segment is free.
    ``plan_path`` attaches the start and goal to the roadmap and searches
    it, first with A* and then with Dijkstra.

    Example:
        >>> planner = ClassicPRM(env)
        >>> planner.init_plan(PlannerParameters(max_nodes=200, neighbor_threshold=1.0))
        >>> path = planner.plan(q_start, q_goal)
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.roadmap: Optional[RoadmapGraph] = None
        self.state = PlannerState.UNINITIALIZED
        self.start_node: Optional[RoadmapNode] = None
        self.goal_node: Optional[RoadmapNode] = None
        self.path_nodes: List[RoadmapNode] = []

    def init_plan(self, parameters: PlannerParameters) -> bool:
        logger.info("Initializing roadmap planner")
        with self.env.mutex:
            self.parameters = parameters
            self.roadmap = RoadmapGraph(
                parameters.max_nodes, parameters.neighbor_threshold, self.distance
            )
            self.state = PlannerState.UNINITIALIZED
            nodes = self.build_roadmap()
        logger.info("Roadmap planner initialized with %d nodes", nodes)
        return True

    def build_roadmap(self) -> int:
        """Sample the roadmap and connect collision-free neighbors."""
        parameters = self._require_parameters()
        dof = self.env.get_active_dof()

        samples = []
        while len(samples) < parameters.max_nodes:
            config = self.sampler.sample()
            if config is None:
                self.emit("sample_failed", attempts=len(samples))
                continue
            samples.append(as_configuration(config, dof))

        for config in samples:
            handle = self.roadmap.add_node(config)
            for neighbor in self.roadmap.find_neighbors(handle):
                if not self.env.segment_free(config, neighbor.config):
                    continue
                if not self.roadmap.add_edge(handle, neighbor.handle):
                    self.emit("edge_rejected", level=logging.WARNING, u=handle, v=neighbor.handle)

        self.state = PlannerState.ROADMAP_BUILT
        self.emit(
            "roadmap_built",
            level=logging.INFO,
            nodes=self.roadmap.node_count(),
            edges=self.roadmap.edge_count(),
        )
        if parameters.roadmap_dump_path is not None:
            self.roadmap.write_graph(parameters.roadmap_dump_path)
        return self.roadmap.node_count()

    def plan_path(self, trajectory: BaseTrajectory) -> bool:
        self._require_parameters()
        if self.roadmap is None:
            logger.error("Roadmap planner used before the roadmap was built")
            return False

        with self.env.mutex:
            start_time = time.time()
            start_config, goal_config = self._query_configs()
            self.path_nodes = []
            self.start_node = None
            self.goal_node = None

            try:
                self.start_node = self.attach_config(start_config, "start")
                if self.start_node is None:
                    logger.error("Start configuration not added to roadmap, planning aborted")
                    self.state = PlannerState.NO_PATH
                    return False
                self.state = PlannerState.START_ATTACHED

                self.goal_node = self.attach_config(goal_config, "goal")
                if self.goal_node is None:
                    logger.error("Goal configuration not added to roadmap, planning aborted")
                    self.state = PlannerState.NO_PATH
                    return False
                self.state = PlannerState.GOAL_ATTACHED

                if not self.find_path():
                    logger.error("No path found")
                    self.state = PlannerState.NO_PATH
                    return False
                self.state = PlannerState.PATH_FOUND

                for node in self.path_nodes:
                    trajectory.add_point(node.config)
            finally:
                self.detach_query_nodes()

        logger.debug(
            "Plan success, path=%d points in %.3fs",
            len(self.path_nodes), time.time() - start_time
        )
        return True

    def attach_config(self, config: np.ndarray, label: str) -> Optional[RoadmapNode]:
        """
        Insert ``config`` and connect it to the first reachable neighbor.

        Neighbors are tried in roadmap order and the first free segment wins,
        even when a closer neighbor comes later. Returns None when the
        configuration cannot be connected, in which case the inserted node
        is removed again.
        """
        handle = self.roadmap.add_node(config)
        node = self.roadmap.get_node(handle)
        neighbors = self.roadmap.find_neighbors(handle)
        if not neighbors:
            self.roadmap.remove_node(handle)
            self.emit("attach_failed", level=logging.WARNING, label=label, reason="too far from roadmap")
            return None

        attached = None
        for neighbor in neighbors:
            if not self.env.segment_free(neighbor.config, node.config):
                continue
            if self.roadmap.add_edge(neighbor.handle, handle):
                attached = neighbor
                break

        if attached is None:
            self.roadmap.remove_node(handle)
            self.emit("attach_failed", level=logging.WARNING, label=label, reason="no free connection")
            return None

        if handle > 2 * self.roadmap.node_count():
            self.roadmap.remove_node(handle)
            self.emit("attach_failed", level=logging.ERROR, label=label, reason="invalid handle")
            return None

        self.emit(f"{label}_attached", level=logging.INFO, handle=handle, neighbor=attached.handle)
        return node

    def detach_query_nodes(self):
        """Remove the start and goal nodes of the last query from the roadmap."""
        for node in (self.goal_node, self.start_node):
            if node is not None and self.roadmap.get_node(node.handle) is not None:
                self.roadmap.remove_node(node.handle)

    def find_path(self) -> bool:
        """Search the roadmap between the attached start and goal nodes."""
        start, goal = self.start_node.handle, self.goal_node.handle

        path = self.roadmap.find_path_heuristic(start, goal)
        if path is not None:
            self.emit("search_result", method="astar", found=True, length=len(path))
            self.path_nodes = path
            return True
        self.emit("search_result", method="astar", found=False)

        path = self.roadmap.find_path_uniform_cost(start, goal)
        if path is not None:
            self.emit("search_result", method="dijkstra", found=True, length=len(path))
            self.path_nodes = path
            return True

        self.emit("search_result", level=logging.INFO, method="dijkstra", found=False)
        return False

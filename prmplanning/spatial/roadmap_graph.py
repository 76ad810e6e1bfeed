"""Undirected roadmap graph used by the PRM planners."""

from dataclasses import dataclass
import heapq
import itertools
import logging
from typing import Callable, Dict, List, Optional

import networkx as nx
import numpy as np

from prmplanning.core.configuration import as_configuration, euclidean_distance
from prmplanning.core.params import DEFAULT_MAX_NODES, DEFAULT_NEIGHBOR_THRESHOLD

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoadmapNode:
    """A roadmap vertex: its handle and configuration."""
    handle: int
    config: np.ndarray


class RoadmapGraph:
    """
    Weighted undirected graph of sampled configurations.

    Nodes are keyed by integer handles assigned in insertion order. Edge
    weights are the metric distance between the endpoint configurations.
    The graph never calls a validity oracle: callers check segments before
    adding edges.

    Args:
        max_nodes: Node budget of the roadmap. Soft, start and goal nodes may
            exceed it.
        neighbor_threshold: Maximum distance between connected nodes.
        distance_fn: Metric over configurations.
    """

    def __init__(
        self,
        max_nodes: int = DEFAULT_MAX_NODES,
        neighbor_threshold: float = DEFAULT_NEIGHBOR_THRESHOLD,
        distance_fn: Callable[[np.ndarray, np.ndarray], float] = euclidean_distance,
    ):
        self.max_nodes = max_nodes
        self.neighbor_threshold = neighbor_threshold
        self.distance = distance_fn
        self.graph = nx.Graph()
        self._next_handle = 0

    def add_node(self, config: np.ndarray) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.graph.add_node(handle, config=as_configuration(config))
        return handle

    def add_edge(self, u: int, v: int) -> bool:
        """
        Connect two nodes, recording their distance as the weight.

        Returns False without touching the graph for self edges, existing
        edges, and pairs farther apart than the neighbor threshold.
        """
        if u == v or self.graph.has_edge(u, v):
            logger.debug("Edge (%s, %s) already exists", u, v)
            return False

        dist = self.distance(self._config(u), self._config(v))
        if dist > self.neighbor_threshold:
            return False

        self.graph.add_edge(u, v, weight=dist)
        return True

    def remove_node(self, handle: int):
        """
        Remove a node and its edges.

        Removing the most recently added node frees its handle for reuse, so
        temporary query nodes do not grow the handle range.
        """
        self._require(handle)
        self.graph.remove_node(handle)
        if handle == self._next_handle - 1:
            self._next_handle = handle

    def find_neighbors(self, handle: int) -> List[RoadmapNode]:
        """Nodes within the threshold of ``handle`` that are not yet connected to it."""
        if self.graph.number_of_nodes() <= 1:
            return []

        config = self._config(handle)
        neighbors = []
        for other, data in self.graph.nodes(data=True):
            if other == handle or self.graph.has_edge(handle, other):
                continue
            if self.distance(config, data["config"]) <= self.neighbor_threshold:
                neighbors.append(RoadmapNode(other, data["config"]))
        return neighbors

    def find_path_heuristic(self, start: int, goal: int) -> Optional[List[RoadmapNode]]:
        """
        A* search from ``start`` to ``goal``.

        The heuristic is the metric distance to the goal. Open nodes with
        equal priority are expanded in the order they were queued, and the
        search stops as soon as the goal is expanded.
        """
        self._require(start)
        goal_config = self._config(goal)

        def heuristic(node: int) -> float:
            return self.distance(self.graph.nodes[node]["config"], goal_config)

        counter = itertools.count()
        cost: Dict[int, float] = {start: 0.0}
        parents: Dict[int, int] = {start: start}
        closed = set()
        heap = [(heuristic(start), next(counter), start)]

        while heap:
            _, _, node = heapq.heappop(heap)
            if node in closed:
                continue
            if node == goal:
                return self._backtrack(parents, start, goal)
            closed.add(node)

            for neighbor, edge in self.graph[node].items():
                if neighbor in closed:
                    continue
                new_cost = cost[node] + edge["weight"]
                if new_cost < cost.get(neighbor, float("inf")):
                    cost[neighbor] = new_cost
                    parents[neighbor] = node
                    heapq.heappush(heap, (new_cost + heuristic(neighbor), next(counter), neighbor))

        return None

    def find_path_uniform_cost(self, start: int, goal: int) -> Optional[List[RoadmapNode]]:
        """
        Dijkstra search from ``start`` over the whole component.

        Every node starts as its own predecessor. If the chain from the goal
        stops at a self-predecessor other than ``start`` there is no path.
        """
        self._require(start)
        self._require(goal)

        predecessors = {node: node for node in self.graph.nodes}
        dist = {start: 0.0}
        counter = itertools.count()
        heap = [(0.0, next(counter), start)]
        visited = set()

        while heap:
            d, _, node = heapq.heappop(heap)
            if node in visited:
                continue
            visited.add(node)
            for neighbor, edge in self.graph[node].items():
                new_dist = d + edge["weight"]
                if new_dist < dist.get(neighbor, float("inf")):
                    dist[neighbor] = new_dist
                    predecessors[neighbor] = node
                    heapq.heappush(heap, (new_dist, next(counter), neighbor))

        child = goal
        while predecessors[child] != child:
            child = predecessors[child]
        if child != start:
            return None
        return self._backtrack(predecessors, start, goal)

    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    def edge_count(self) -> int:
        return self.graph.number_of_edges()

    def get_node(self, handle: int) -> Optional[RoadmapNode]:
        if handle not in self.graph:
            return None
        return RoadmapNode(handle, self.graph.nodes[handle]["config"])

    def has_edge(self, u: int, v: int) -> bool:
        return self.graph.has_edge(u, v)

    def edge_weight(self, u: int, v: int) -> float:
        return self.graph.edges[u, v]["weight"]

    def write_graph(self, path: str):
        """Write nodes, configurations and weighted edges as GML for offline inspection."""
        export = nx.Graph()
        for handle, data in self.graph.nodes(data=True):
            export.add_node(handle, config=[float(x) for x in data["config"]])
        for u, v, data in self.graph.edges(data=True):
            export.add_edge(u, v, weight=float(data["weight"]))
        nx.write_gml(export, path)

    def _require(self, handle: int):
        if handle not in self.graph:
            raise KeyError(f"Roadmap node {handle} does not exist.")

    def _config(self, handle: int) -> np.ndarray:
        self._require(handle)
        return self.graph.nodes[handle]["config"]

    def _backtrack(self, parents: Dict[int, int], start: int, goal: int) -> List[RoadmapNode]:
        path = [goal]
        node = goal
        while node != start:
            node = parents[node]
            path.append(node)
        path.reverse()
        return [self.get_node(handle) for handle in path]

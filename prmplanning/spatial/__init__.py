"""Spatial data structures: roadmap graph and incremental tree."""

from prmplanning.spatial.roadmap_graph import RoadmapGraph, RoadmapNode
from prmplanning.spatial.incremental_tree import (
    ExtendResult,
    IncrementalTree,
    TreeContext,
    TreeNode,
)

__all__ = [
    "RoadmapGraph",
    "RoadmapNode",
    "ExtendResult",
    "IncrementalTree",
    "TreeContext",
    "TreeNode",
]

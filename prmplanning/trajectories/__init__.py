"""Trajectory sinks for planned paths."""

from prmplanning.trajectories.trajectory import Trajectory

__all__ = ["Trajectory"]

"""Planning environments."""

from prmplanning.environments.mujoco_env import MujocoEnvironment

__all__ = ["MujocoEnvironment"]

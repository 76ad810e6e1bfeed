"""Shared fixtures: simple point-robot worlds and deterministic samplers."""
import itertools

import numpy as np
import pytest

from prmplanning.core.base_env import BaseEnvironment
from prmplanning.core.base_sampler import BaseSampler


class BoxWorld(BaseEnvironment):
    """Point robot inside an axis-aligned box with box-shaped obstacles."""

    def __init__(self, lower, upper, obstacles=(), collision_resolution=0.01):
        super().__init__(collision_resolution)
        self.lower = np.asarray(lower, dtype=np.float64)
        self.upper = np.asarray(upper, dtype=np.float64)
        self.obstacles = [
            (np.asarray(lo, dtype=np.float64), np.asarray(hi, dtype=np.float64))
            for lo, hi in obstacles
        ]

    def get_active_dof(self):
        return len(self.lower)

    def get_joint_limits(self):
        return self.lower.copy(), self.upper.copy()

    def is_collision_free(self, configuration):
        q = np.asarray(configuration, dtype=np.float64)
        if np.any(q < self.lower) or np.any(q > self.upper):
            return False
        for lo, hi in self.obstacles:
            if np.all(q >= lo) and np.all(q <= hi):
                return False
        return True


class SequenceSampler(BaseSampler):
    """Returns the given configurations in order, cycling; None for colliding ones."""

    def __init__(self, configs, environment=None):
        self.env = environment
        self.configs = itertools.cycle([np.asarray(c, dtype=np.float64) for c in configs])
        self.calls = 0

    def sample(self):
        self.calls += 1
        config = next(self.configs)
        if self.env is not None and not self.env.is_collision_free(config):
            return None
        return config.copy()


class FailingSampler(BaseSampler):
    """Never produces a configuration."""

    def __init__(self):
        self.calls = 0

    def sample(self):
        self.calls += 1
        return None


@pytest.fixture
def free_world():
    """Empty 10x10 square."""
    return BoxWorld([0.0, 0.0], [10.0, 10.0])


@pytest.fixture
def wall_world():
    """10x10 square with a wall at x=4..6 leaving a gap for y > 8."""
    return BoxWorld([0.0, 0.0], [10.0, 10.0], obstacles=[([4.0, 0.0], [6.0, 8.0])])


@pytest.fixture
def grid_configs():
    """Cell centers of a 10x10 unit grid."""
    return [[x + 0.5, y + 0.5] for x in range(10) for y in range(10)]


@pytest.fixture
def event_log():
    events = []

    def observer(event):
        events.append(event)

    observer.events = events
    return observer

"""Uniform random configuration sampler."""

from typing import Optional, Sequence
import numpy as np

from prmplanning.core.base_env import BaseEnvironment
from prmplanning.core.base_sampler import BaseSampler


class RandomSampler(BaseSampler):
    """Samples uniformly inside the joint limits and rejects colliding configurations."""

    def __init__(
        self,
        environment: BaseEnvironment,
        lower: Optional[Sequence[float]] = None,
        upper: Optional[Sequence[float]] = None,
        seed: Optional[int] = None
    ):
        self.env = environment
        if lower is None or upper is None:
            limits_low, limits_high = environment.get_joint_limits()
            lower = limits_low if lower is None else lower
            upper = limits_high if upper is None else upper
        self.lower = np.asarray(lower, dtype=np.float64)
        self.upper = np.asarray(upper, dtype=np.float64)
        if self.lower.shape != self.upper.shape:
            raise ValueError("Sampler bounds must have the same shape.")
        if np.any(self.lower > self.upper):
            raise ValueError("Sampler lower bounds exceed upper bounds.")
        self.rng = np.random.default_rng(seed)

    def sample_random_config(self) -> np.ndarray:
        return self.rng.uniform(self.lower, self.upper)

    def sample(self) -> Optional[np.ndarray]:
        config = self.sample_random_config()
        if not self.env.is_collision_free(config):
            return None
        return config

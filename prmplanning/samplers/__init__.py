"""Configuration samplers."""

from prmplanning.samplers.random_sampler import RandomSampler

__all__ = ["RandomSampler"]

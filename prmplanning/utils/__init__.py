"""Utility helpers."""

from prmplanning.utils.path_utils import path_cost, smooth_path

__all__ = ["path_cost", "smooth_path"]

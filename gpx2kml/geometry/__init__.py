"""Planar geometry helpers used to shrink tracks before rendering."""

from .simplification import (
    douglas_peucker_mask,
    perpendicular_distances,
    simplify,
    simplify_coordinates,
)

__all__ = [
    "douglas_peucker_mask",
    "perpendicular_distances",
    "simplify",
    "simplify_coordinates",
]

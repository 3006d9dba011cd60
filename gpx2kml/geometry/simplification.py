"""Douglas-Peucker polyline simplification for recorded tracks."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from ..models import TrackPoint

MetricArray = NDArray[np.float64]
KeepMask = NDArray[np.bool_]
Coordinate = Tuple[float, ...]


def simplify(points: Sequence[TrackPoint], tolerance: float) -> List[TrackPoint]:
    """Return the subsequence of ``points`` kept by Douglas-Peucker.

    Distances are measured on the (longitude, latitude) plane without any
    geodesic correction; elevation rides along on the kept points. The first
    and last points are always retained.
    """

    if len(points) <= 2:
        return list(points)
    planar = _as_planar_array((p.longitude, p.latitude) for p in points)
    mask = douglas_peucker_mask(planar, tolerance)
    return [point for point, keep in zip(points, mask) if keep]


def simplify_coordinates(
    coordinates: Iterable[Sequence[float]], tolerance: float
) -> List[Coordinate]:
    """Simplify plain ``(x, y[, z])`` tuples, using only x and y for distances."""

    coords = [tuple(float(v) for v in c) for c in coordinates]
    if len(coords) <= 2:
        return coords
    planar = _as_planar_array(c[:2] for c in coords)
    mask = douglas_peucker_mask(planar, tolerance)
    return [coord for coord, keep in zip(coords, mask) if keep]


def douglas_peucker_mask(points: MetricArray, tolerance: float) -> KeepMask:
    """Return a boolean mask flagging which points survive simplification.

    Spans are processed from an explicit stack rather than by recursion so very
    long tracks cannot hit the interpreter recursion limit. The split point of
    a span is the first interior point at the maximum distance, which gives
    exactly the result of the recursive formulation.
    """

    count = len(points)
    keep = np.zeros(count, dtype=bool)
    if count == 0:
        return keep
    keep[0] = True
    keep[-1] = True
    stack = [(0, count - 1)]
    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue
        distances = perpendicular_distances(
            points[first + 1 : last], points[first], points[last]
        )
        offset = int(np.argmax(distances))
        if distances[offset] <= tolerance:
            continue
        split = first + 1 + offset
        keep[split] = True
        stack.append((split, last))
        stack.append((first, split))
    return keep


def perpendicular_distances(
    points: MetricArray, start: MetricArray, end: MetricArray
) -> MetricArray:
    """Distance from each point to the segment joining ``start`` and ``end``.

    Projections are clamped to the segment ends, so a point beyond either end
    is measured to that endpoint rather than to the infinite line.
    """

    if len(points) == 0:
        return np.zeros(0, dtype=float)
    seg_vec = end - start
    seg_len_sq = float(np.dot(seg_vec, seg_vec))
    if seg_len_sq == 0:
        # Closed loop: the segment degenerates to a point.
        return np.linalg.norm(points - start, axis=1)
    t = (points - start) @ seg_vec / seg_len_sq
    t_clamped = np.clip(t, 0.0, 1.0)
    nearest = start + t_clamped[:, None] * seg_vec
    return np.linalg.norm(points - nearest, axis=1)


def _as_planar_array(points: Iterable[Sequence[float]]) -> MetricArray:
    """Convert an iterable of 2D coordinates into a float64 array."""

    array = np.asarray(list(points), dtype=float)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError("Expected a sequence of 2D coordinates")
    return array

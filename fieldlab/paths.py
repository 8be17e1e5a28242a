"""Polyline post-processing: Chaikin corner cutting and Douglas-Peucker simplification."""

import math
from typing import Sequence

from .geometry import Point, Polyline


def chaikin_smooth(points: Sequence[Point], closed: bool) -> Polyline:
    """One corner-cutting pass.

    Every processed edge is replaced by its 1/4 and 3/4 points. A closed path
    wraps the last vertex back to the first; an open path only processes its
    n - 1 edges, so its original endpoints are dropped.
    """
    if len(points) < 3:
        return list(points)

    n = len(points)
    count = n if closed else n - 1
    result = []
    for i in range(count):
        p0 = points[i]
        p1 = points[(i + 1) % n]
        result.append(Point(0.75 * p0.x + 0.25 * p1.x, 0.75 * p0.y + 0.25 * p1.y))
        result.append(Point(0.25 * p0.x + 0.75 * p1.x, 0.25 * p0.y + 0.75 * p1.y))
    return result


def smooth_path(points: Sequence[Point], iterations: int, closed: bool = False) -> Polyline:
    smoothed = list(points)
    for _ in range(int(iterations)):
        smoothed = chaikin_smooth(smoothed, closed)
    return smoothed


def perpendicular_distance(point: Point, start: Point, end: Point) -> float:
    """Distance from ``point`` to the segment start-end (not the infinite line)."""
    dx = end.x - start.x
    dy = end.y - start.y
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return math.hypot(point.x - start.x, point.y - start.y)

    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / len_sq
    t = max(0.0, min(1.0, t))
    proj_x = start.x + t * dx
    proj_y = start.y + t * dy
    return math.hypot(point.x - proj_x, point.y - proj_y)


def simplify_path(points: Sequence[Point], tolerance: float) -> Polyline:
    """Douglas-Peucker simplification; ties keep the lowest index."""
    if len(points) <= 2:
        return list(points)

    first = points[0]
    last = points[-1]
    max_dist = 0.0
    max_idx = 0
    for i in range(1, len(points) - 1):
        dist = perpendicular_distance(points[i], first, last)
        if dist > max_dist:
            max_dist = dist
            max_idx = i

    if max_dist > tolerance:
        left = simplify_path(points[:max_idx + 1], tolerance)
        right = simplify_path(points[max_idx:], tolerance)
        return left[:-1] + right

    return [first, last]

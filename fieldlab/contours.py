"""
contours.py
===========

Marching squares over a boolean grid and stitching of the resulting unit
segments into polylines.

Corner bits are tl=8, tr=4, br=2, bl=1. The two saddle states (5 and 10)
always resolve to the same pair of non-crossing segments.
"""

import logging
from collections import defaultdict
from typing import Dict, List, NamedTuple, Sequence

import numpy as np

from .geometry import Edge, Point, Polyline

logger = logging.getLogger(__name__)


def get_contour_lines(state: int, x: float, y: float, res: float) -> List[Edge]:
    """Return the 0-2 segments for one cell whose top-left corner is (x, y)."""
    half = res / 2
    top = (x + half, y)
    right = (x + res, y + half)
    bottom = (x + half, y + res)
    left = (x, y + half)

    if state in (1, 14):
        pairs = [(left, bottom)]
    elif state in (2, 13):
        pairs = [(bottom, right)]
    elif state in (3, 12):
        pairs = [(left, right)]
    elif state in (4, 11):
        pairs = [(top, right)]
    elif state == 5:
        pairs = [(left, top), (bottom, right)]
    elif state in (6, 9):
        pairs = [(top, bottom)]
    elif state in (7, 8):
        pairs = [(left, top)]
    elif state == 10:
        pairs = [(top, right), (left, bottom)]
    else:
        pairs = []
    return [Edge(a[0], a[1], b[0], b[1]) for a, b in pairs]


def cell_states(above: np.ndarray) -> np.ndarray:
    """4-bit state of every cell of a (rows, cols) boolean grid -> (rows-1, cols-1)."""
    g = np.asarray(above).astype(np.uint8)
    tl = g[:-1, :-1]
    tr = g[:-1, 1:]
    br = g[1:, 1:]
    bl = g[1:, :-1]
    return (tl << 3) | (tr << 2) | (br << 1) | bl


def trace_edges(above: np.ndarray, res: float) -> List[Edge]:
    """Run the lookup table over every cell of ``above`` in row-major order."""
    states = cell_states(above)
    if states.size == 0:
        return []
    edges = []
    rows, cols = np.nonzero((states != 0) & (states != 15))
    for gy, gx in zip(rows.tolist(), cols.tolist()):
        edges.extend(get_contour_lines(int(states[gy, gx]), gx * res, gy * res, res))
    return edges


# ---------------------------- Stitching -------------------------------------

class _Link(NamedTuple):
    idx: int
    other: str
    x: float
    y: float


def _key(x: float, y: float) -> str:
    return f"{x:.1f},{y:.1f}"


def connect_edges(edges: Sequence[Edge]) -> List[Polyline]:
    """Chain edges that share an endpoint (rounded to one decimal) into polylines.

    Each unused edge starts a chain that is extended forward from its end and
    then backward from its start, always taking the first unused neighbor.
    Rings come back to their own start key and end up with first == last.
    """
    if not edges:
        return []

    links: Dict[str, List[_Link]] = defaultdict(list)
    for i, e in enumerate(edges):
        k1 = _key(e.x1, e.y1)
        k2 = _key(e.x2, e.y2)
        links[k1].append(_Link(i, k2, e.x2, e.y2))
        links[k2].append(_Link(i, k1, e.x1, e.y1))

    used = set()
    paths = []
    for i, e in enumerate(edges):
        if i in used:
            continue
        used.add(i)
        path = [Point(e.x1, e.y1), Point(e.x2, e.y2)]

        current = _key(e.x2, e.y2)
        while True:
            nxt = next((n for n in links.get(current, ()) if n.idx not in used), None)
            if nxt is None:
                break
            used.add(nxt.idx)
            path.append(Point(nxt.x, nxt.y))
            current = nxt.other

        head = []
        current = _key(e.x1, e.y1)
        while True:
            nxt = next((n for n in links.get(current, ()) if n.idx not in used), None)
            if nxt is None:
                break
            used.add(nxt.idx)
            head.append(Point(nxt.x, nxt.y))
            current = nxt.other

        head.reverse()
        paths.append(head + path)

    logger.debug("stitched %d edges into %d polylines", len(edges), len(paths))
    return paths

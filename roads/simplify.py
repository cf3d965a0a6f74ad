# roads/simplify.py

import math
from typing import List, Sequence, Tuple

Point = Tuple[float, float]

# Maximum deviation (in projected metres) a dropped vertex may have
EPSILON = 3.0


def perpendicular_distance(p: Point, a: Point, b: Point) -> float:
    """
    Distance from p to the infinite line through a and b.
    Falls back to the euclidean distance to a when a == b.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length = math.hypot(dx, dy)
    if length == 0.0:
        return math.hypot(p[0] - a[0], p[1] - a[1])
    return abs(dx * (a[1] - p[1]) - dy * (a[0] - p[0])) / length


def simplify(points: Sequence[Point], epsilon: float = EPSILON) -> List[Point]:
    """
    Ramer-Douglas-Peucker simplification using an explicit worklist.

    The first and last vertices are always kept. A vertex survives when its
    distance to the chord of the interval it belongs to is >= epsilon.
    Ties pick the first index reaching the maximum distance.
    """
    n = len(points)
    if n <= 2:
        return list(points)

    keep = [False] * n
    keep[0] = keep[n - 1] = True

    stack = [(0, n - 1)]
    while stack:
        i, j = stack.pop()
        if j <= i + 1:
            continue

        best_ix = i + 1
        best_dist = -1.0
        for k in range(i + 1, j):
            d = perpendicular_distance(points[k], points[i], points[j])
            if d > best_dist:
                best_ix, best_dist = k, d

        if best_dist >= epsilon:
            keep[best_ix] = True
            stack.append((i, best_ix))
            stack.append((best_ix, j))

    return [p for p, kept in zip(points, keep) if kept]

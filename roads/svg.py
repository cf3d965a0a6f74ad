# roads/svg.py

import math
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from roads.errors import WriteError
from roads.simplify import simplify

Point = Tuple[float, float]
Bounds = Tuple[float, float, float, float]


def bounds(paths: Sequence[Sequence[Point]]) -> Optional[Bounds]:
    """(min_x, max_x, min_y, max_y) over all finite points, None if there are none."""
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for path in paths:
        for x, y in path:
            if not (math.isfinite(x) and math.isfinite(y)):
                continue
            min_x, max_x = min(min_x, x), max(max_x, x)
            min_y, max_y = min(min_y, y), max(max_y, y)

    if min_x > max_x or min_y > max_y:
        return None
    return min_x, max_x, min_y, max_y


def _finite(path: Sequence[Point]) -> List[Point]:
    return [(x, y) for x, y in path if math.isfinite(x) and math.isfinite(y)]


def _scale(size: Tuple[float, float], box: Bounds) -> float:
    w, h = size
    min_x, max_x, min_y, max_y = box
    factors = [
        extent_px / extent
        for extent_px, extent in ((w, max_x - min_x), (h, max_y - min_y))
        if extent > 0
    ]
    # A single point has no extent on either axis
    return min(factors) if factors else 1.0


def dump_svg(
    path: str,
    size: Tuple[float, float],
    stroke_width: float,
    background_color: str,
    paths: Sequence[Sequence[Point]],
) -> bool:
    """
    Write the polylines to an SVG file scaled to fit size=(width, height).

    Every path is simplified and flipped to screen orientation (y down)
    before the shared bounding box is computed. Returns False and writes
    nothing when there is no drawable point.
    """
    flipped: List[List[Point]] = [
        [(x, -y) for x, y in simplify(_finite(p))] for p in paths
    ]

    box = bounds(flipped)
    if box is None:
        logger.warning(f"No road geometry to draw, {path} not written")
        return False

    min_x, max_x, min_y, max_y = box
    sf = _scale(size, box)
    view_w = (max_x - min_x) * sf
    view_h = (max_y - min_y) * sf

    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(
                '<?xml version="1.0" encoding="UTF-8"?>\n'
                f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {view_w:.2f} {view_h:.2f}">\n'
                f'<rect x="0" y="0" width="{view_w:.2f}" height="{view_h:.2f}" '
                f'fill="{background_color}" stroke="none"/>\n'
                f'<g stroke="black" stroke-width="{stroke_width:g}" fill="none">\n'
            )
            n_written = 0
            for p in flipped:
                if not p:
                    continue
                points = " ".join(
                    f"{(x - min_x) * sf:.2f},{(y - min_y) * sf:.2f}" for x, y in p
                )
                f.write(f'<polyline points="{points}"/>\n')
                n_written += 1
            f.write("</g>\n</svg>\n")
    except OSError as e:
        raise WriteError(f"Cannot write {path}: {e}") from e

    logger.success(f"Wrote {n_written} polylines to {path}")
    return True

# roads/projection.py

import math
from typing import Tuple

# Spherical Mercator (EPSG:3857) sphere radius, in metres
EARTH_RADIUS = 6378137.0


def project(lat: float, lon: float) -> Tuple[float, float]:
    """
    Project a WGS84 coordinate to planar spherical Mercator metres.

    Undefined at the poles; callers must keep |lat| < 90.
    See https://wiki.openstreetmap.org/wiki/Mercator
    """
    x = math.radians(lon) * EARTH_RADIUS
    y = math.log(math.tan(math.radians(lat) / 2.0 + math.pi / 4.0)) * EARTH_RADIUS
    return x, y

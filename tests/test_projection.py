import pytest
from loguru import logger

from roads.models import LatLon
from roads.projection import EARTH_RADIUS, project


class TestProject:
    def test_origin(self):
        x, y = project(0.0, 0.0)
        assert x == pytest.approx(0.0)
        assert y == pytest.approx(0.0, abs=1e-6)

    def test_antimeridian(self):
        x, y = project(0.0, 180.0)
        assert x == pytest.approx(20037508.34, abs=1)
        assert y == pytest.approx(0.0, abs=1e-6)

    def test_45_north(self):
        x, y = project(45.0, 0.0)
        assert x == pytest.approx(0.0)
        assert y == pytest.approx(5621521.49, abs=1)

    def test_symmetry(self):
        x1, y1 = project(52.5, 13.4)
        x2, y2 = project(-52.5, -13.4)
        assert x1 == pytest.approx(-x2)
        assert y1 == pytest.approx(-y2)

    def test_monotone(self):
        logger.info("Testing projection is monotone along both axes")
        lats = [-89.9, -60, -1, 0, 1, 30, 60, 89.9]
        ys = [project(lat, 0.0)[1] for lat in lats]
        assert ys == sorted(ys) and len(set(ys)) == len(ys)

        lons = [-180, -90, -0.5, 0, 0.5, 90, 180]
        xs = [project(0.0, lon)[0] for lon in lons]
        assert xs == sorted(xs) and len(set(xs)) == len(xs)

    def test_x_is_arc_length_on_equator(self):
        x, _ = project(0.0, 1.0)
        assert x == pytest.approx(EARTH_RADIUS * 3.141592653589793 / 180)


class TestLatLon:
    def test_to_xy(self):
        assert LatLon(lat=45.0, lon=0.0).to_xy() == project(45.0, 0.0)

    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            LatLon(lat=91.0, lon=0.0)
        with pytest.raises(ValueError):
            LatLon(lat=0.0, lon=-181.0)

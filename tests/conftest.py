import sys
from typing import Callable, List

import pytest
from loguru import logger

from roads.models import PlaceEntry

# Configure loguru for tests
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    level="INFO",
)


class DummyResponse:
    def __init__(self, payload=None, status_code=200, text=None, url="http://test"):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else ""
        self.url = url
        self.reason = "OK" if status_code < 400 else "Error"

    def json(self):
        if self._payload is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class Deferred:
    """Spawner that queues background jobs until the test runs them."""

    def __init__(self):
        self.jobs: List[Callable[[], None]] = []

    def __call__(self, job: Callable[[], None]) -> None:
        self.jobs.append(job)

    def run_all(self) -> None:
        jobs, self.jobs = self.jobs, []
        for job in jobs:
            job()


@pytest.fixture
def deferred() -> Deferred:
    return Deferred()


def nominatim_item(**overrides):
    item = {
        "place_id": 298236,
        "licence": "Data © OpenStreetMap contributors, ODbL 1.0.",
        "osm_type": "relation",
        "osm_id": 62422,
        "display_name": "Berlin, Deutschland",
        "importance": 0.93,
        "boundingbox": ["52.3382448", "52.6755087", "13.0883450", "13.7611609"],
        "lat": "52.5170365",
        "lon": "13.3888599",
        "class": "boundary",
        "type": "administrative",
    }
    item.update(overrides)
    return item


@pytest.fixture
def berlin() -> PlaceEntry:
    return PlaceEntry.model_validate(nominatim_item())


@pytest.fixture
def munich_node() -> PlaceEntry:
    return PlaceEntry.model_validate(
        nominatim_item(
            osm_type="node",
            osm_id=240109189,
            display_name="München, Bayern, Deutschland",
            boundingbox=["48.1", "48.2", "11.5", "11.6"],
            type="city",
        )
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow")

"""
Nominatim search and Overpass road extraction.

Both calls are blocking and meant to run on a background worker. Every
failure is turned into a ``roads.errors`` exception whose message can be
shown to the user as is.
"""

from typing import Any, List, Tuple
from urllib.parse import quote, urlencode

import requests
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from roads import settings
from roads.errors import DecodeError, NetworkError, ServerError
from roads.models import OverpassResponse, PlaceEntry
from roads.utils import log_timing

Polyline = List[Tuple[float, float]]

# Overpass derives area ids from the OSM id of the outlining object
RELATION_AREA_OFFSET = 3_600_000_000
WAY_AREA_OFFSET = 2_400_000_000

_places_adapter = TypeAdapter(List[PlaceEntry])


def _headers(**extra: str) -> dict:
    headers = {"User-Agent": settings.USER_AGENT}
    headers.update(extra)
    return headers


def _check(response: requests.Response) -> None:
    if not 200 <= response.status_code < 300:
        logger.error(
            f"{response.url} answered {response.status_code}: {response.text[:200]}"
        )
        raise ServerError(response.url, response.status_code, response.reason)


def _json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(f"Invalid JSON from {response.url}: {e}") from e


# ---------- NOMINATIM ----------
@log_timing
def search(place: str) -> List[PlaceEntry]:
    """Geocode a free-form place name into candidate places."""
    url = f"{settings.NOMINATIM_URL}/{quote(place, safe='')}"
    logger.info(f"Searching Nominatim for '{place}'")
    try:
        response = requests.get(
            url,
            params={"format": "json"},
            headers=_headers(),
            timeout=settings.HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        raise NetworkError(f"Nominatim request failed: {e}") from e

    _check(response)
    try:
        places = _places_adapter.validate_python(_json(response))
    except ValidationError as e:
        raise DecodeError(f"Unexpected Nominatim response: {e}") from e

    logger.info(f"Nominatim returned {len(places)} places for '{place}'")
    return places


# ---------- OVERPASS ----------
def area_id(entry: PlaceEntry) -> int:
    """Overpass area id for relations and closed ways."""
    if entry.osm_type == "relation":
        return RELATION_AREA_OFFSET + entry.osm_id
    if entry.osm_type == "way":
        return WAY_AREA_OFFSET + entry.osm_id
    raise ValueError(f"No Overpass area for osm_type={entry.osm_type!r}")


def build_overpass_query(entry: PlaceEntry) -> str:
    """
    Overpass QL selecting every highway way of a place, with geometry.

    Relations and ways are resolved to their area; anything else (nodes)
    falls back to the Nominatim bounding box, reordered from
    [min-lat, max-lat, min-lon, max-lon] to south,west,north,east.
    """
    if entry.osm_type in ("relation", "way"):
        return (
            "[out:json][timeout:60];\n"
            f"area({area_id(entry)})->.a;\n"
            "way(area.a)[highway];\n"
            "out geom;"
        )

    bb = entry.boundingbox
    return (
        f"[out:json][timeout:60][bbox:{bb[0]},{bb[2]},{bb[1]},{bb[3]}];\n"
        "way[highway];\n"
        "out geom;"
    )


@log_timing
def fetch_roads(entry: PlaceEntry) -> List[Polyline]:
    """Fetch the highways of a place as projected polylines (metres)."""
    query = build_overpass_query(entry)
    logger.info(
        f"Fetching roads for {entry.display_name} ({entry.osm_id} - {entry.osm_type})"
    )
    logger.debug(f"Overpass query:\n{query}")
    try:
        response = requests.post(
            settings.OVERPASS_URL,
            data=urlencode({"data": query}),
            headers=_headers(**{"Content-Type": "application/osm3s+xml"}),
            timeout=settings.HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        raise NetworkError(f"Overpass request failed: {e}") from e

    _check(response)
    try:
        payload = OverpassResponse.model_validate(_json(response))
    except ValidationError as e:
        raise DecodeError(f"Unexpected Overpass response: {e}") from e

    paths = [[p.to_xy() for p in el.geometry] for el in payload.elements]
    logger.info(f"Overpass returned {len(paths)} ways")
    return paths

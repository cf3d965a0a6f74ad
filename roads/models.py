"""Pydantic models for the Nominatim and Overpass payloads."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from roads.projection import project


# ---------- NOMINATIM ----------
class PlaceEntry(BaseModel):
    """A single geocoder result describing a candidate place."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    place_id: int = Field(..., description="Stable Nominatim place identifier")
    osm_type: str = Field(..., description="relation, way, node, ...")
    osm_id: int = Field(..., description="OpenStreetMap object id")
    display_name: str = Field(..., description="Human readable name")
    importance: float = Field(..., description="Relevance score")
    boundingbox: List[str] = Field(
        ...,
        min_length=4,
        max_length=4,
        description="[min-lat, max-lat, min-lon, max-lon] as decimal strings",
    )
    category: str = Field(..., alias="type", description="Nominatim place type")


# ---------- OVERPASS ----------
class LatLon(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lon: float = Field(..., ge=-180, le=180, description="Longitude")

    def to_xy(self):
        return project(self.lat, self.lon)


class OverpassElement(BaseModel):
    id: int
    geometry: List[LatLon]


class OverpassResponse(BaseModel):
    elements: List[OverpassElement]

"""GeoJSON payloads carried by the trajectory and station channels."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field

from pysbahn.models._base import SbahnBaseModel


class GeoGeometry(SbahnBaseModel):
    """A bare GeoJSON geometry object."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: Literal[
        "Point",
        "MultiPoint",
        "LineString",
        "MultiLineString",
        "Polygon",
        "MultiPolygon",
        "GeometryCollection",
    ]
    coordinates: Any = None
    geometries: list[GeoGeometry] | None = None


class GeoFeature(SbahnBaseModel):
    """A single geometry with its property map."""

    type: Literal["Feature"] = "Feature"
    geometry: GeoGeometry | None = None
    properties: dict[str, Any] | None = None
    id: str | int | None = None


class GeoFeatureCollection(SbahnBaseModel):
    """Many features in one payload. Not decodable into vehicle records."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[GeoFeature] = Field(default_factory=list)


GeoJson = Annotated[GeoFeature | GeoFeatureCollection | GeoGeometry, Field(discriminator="type")]
"""Any of the three top-level GeoJSON object kinds, selected by ``type``."""

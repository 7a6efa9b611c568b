"""Data models for feed messages and decoded records."""

from pysbahn.models._base import SbahnBaseModel
from pysbahn.models.geojson import GeoFeature, GeoFeatureCollection, GeoGeometry, GeoJson
from pysbahn.models.messages import (
    KNOWN_SOURCES,
    Content,
    DeletedVehiclesContent,
    DeletedVehiclesSchematicContent,
    Envelope,
    ExtraGeom,
    ExtraGeomProperties,
    ExtraGeomsContent,
    HealthCheck,
    HealthcheckContent,
    NewsTicker,
    NewsTickerContent,
    NewsTickerMessage,
    StationContent,
    StationSchematicContent,
    TrajectoryContent,
    TrajectorySchematicContent,
    UnrecognizedContent,
    WebsocketContent,
    WebsocketStatus,
)
from pysbahn.models.trajectory import Coordinate, Line, Record, RideState, Train

__all__ = [
    "KNOWN_SOURCES",
    "Content",
    "Coordinate",
    "DeletedVehiclesContent",
    "DeletedVehiclesSchematicContent",
    "Envelope",
    "ExtraGeom",
    "ExtraGeomProperties",
    "ExtraGeomsContent",
    "GeoFeature",
    "GeoFeatureCollection",
    "GeoGeometry",
    "GeoJson",
    "HealthCheck",
    "HealthcheckContent",
    "Line",
    "NewsTicker",
    "NewsTickerContent",
    "NewsTickerMessage",
    "Record",
    "RideState",
    "SbahnBaseModel",
    "StationContent",
    "StationSchematicContent",
    "TrajectoryContent",
    "TrajectorySchematicContent",
    "Train",
    "UnrecognizedContent",
    "WebsocketContent",
    "WebsocketStatus",
]

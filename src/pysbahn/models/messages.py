"""Websocket message envelope and its content variants.

A frame on the wire looks like::

    {"source": "deleted_vehicles_schematic", "content": "sbm_140404727073712",
     "timestamp": 1697454536271.5, "client_reference": null}

``source`` selects the shape of ``content``. The variants form a closed
union: every known ``source`` maps to exactly one ``*Content`` model and
anything else lands in :class:`UnrecognizedContent` instead of failing,
so new upstream channels do not break log replay.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal

from pydantic import Discriminator, Field, Tag, model_validator

from pysbahn.models._base import SbahnBaseModel
from pysbahn.models.geojson import GeoJson

# ------------------------------------------------------------------
# Payload models
# ------------------------------------------------------------------


class WebsocketStatus(SbahnBaseModel):
    """Server status notice, e.g. ``{"status": "open"}``."""

    status: str


class HealthCheck(SbahnBaseModel):
    service: str
    healthy: bool
    tenant: str | None = None


class ExtraGeomProperties(SbahnBaseModel):
    ref: str


class ExtraGeom(SbahnBaseModel):
    type: str
    properties: ExtraGeomProperties


class NewsTickerMessage(SbahnBaseModel):
    title: str
    lines: list[str]
    content: str
    updated: str


class NewsTicker(SbahnBaseModel):
    """S-Bahn Munich incident ticker."""

    incident_program: bool | None = None
    messages: list[NewsTickerMessage]


# ------------------------------------------------------------------
# Content variants
# ------------------------------------------------------------------


class TrajectorySchematicContent(SbahnBaseModel):
    """Live vehicle position/state features (schematic network)."""

    source: Literal["trajectory_schematic"] = "trajectory_schematic"
    content: GeoJson


class TrajectoryContent(SbahnBaseModel):
    source: Literal["trajectory"] = "trajectory"
    content: GeoJson


class StationSchematicContent(SbahnBaseModel):
    source: Literal["station_schematic"] = "station_schematic"
    content: GeoJson


class StationContent(SbahnBaseModel):
    source: Literal["station"] = "station"
    content: GeoJson


class DeletedVehiclesSchematicContent(SbahnBaseModel):
    """Identifier of a vehicle removed from the schematic map."""

    source: Literal["deleted_vehicles_schematic"] = "deleted_vehicles_schematic"
    content: str | None = None


class DeletedVehiclesContent(SbahnBaseModel):
    source: Literal["deleted_vehicles"] = "deleted_vehicles"
    content: str | None = None


class WebsocketContent(SbahnBaseModel):
    """Either a status object or the bare ``PONG`` reply."""

    source: Literal["websocket"] = "websocket"
    content: WebsocketStatus | str


class ExtraGeomsContent(SbahnBaseModel):
    source: Literal["extra_geoms"] = "extra_geoms"
    content: ExtraGeom | None = None


class HealthcheckContent(SbahnBaseModel):
    source: Literal["healthcheck"] = "healthcheck"
    content: HealthCheck


class NewsTickerContent(SbahnBaseModel):
    source: Literal["sbm_newsticker"] = "sbm_newsticker"
    content: NewsTicker


class UnrecognizedContent(SbahnBaseModel):
    """Any ``source`` this library has no model for. ``content`` is kept as-is."""

    source: str
    content: Any = None


KNOWN_SOURCES: frozenset[str] = frozenset(
    {
        "trajectory_schematic",
        "trajectory",
        "station_schematic",
        "station",
        "deleted_vehicles_schematic",
        "deleted_vehicles",
        "websocket",
        "extra_geoms",
        "healthcheck",
        "sbm_newsticker",
    }
)

_UNRECOGNIZED = "unrecognized"


def _content_tag(value: Any) -> str:
    if isinstance(value, UnrecognizedContent):
        return _UNRECOGNIZED
    source = value.get("source") if isinstance(value, dict) else getattr(value, "source", None)
    return source if isinstance(source, str) and source in KNOWN_SOURCES else _UNRECOGNIZED


Content = Annotated[
    Annotated[TrajectorySchematicContent, Tag("trajectory_schematic")]
    | Annotated[TrajectoryContent, Tag("trajectory")]
    | Annotated[StationSchematicContent, Tag("station_schematic")]
    | Annotated[StationContent, Tag("station")]
    | Annotated[DeletedVehiclesSchematicContent, Tag("deleted_vehicles_schematic")]
    | Annotated[DeletedVehiclesContent, Tag("deleted_vehicles")]
    | Annotated[WebsocketContent, Tag("websocket")]
    | Annotated[ExtraGeomsContent, Tag("extra_geoms")]
    | Annotated[HealthcheckContent, Tag("healthcheck")]
    | Annotated[NewsTickerContent, Tag("sbm_newsticker")]
    | Annotated[UnrecognizedContent, Tag(_UNRECOGNIZED)],
    Discriminator(_content_tag),
]
"""Closed union of content variants, selected by ``source``."""


class Envelope(SbahnBaseModel):
    """One decoded websocket frame.

    On the wire ``source`` and ``content`` are siblings of ``timestamp``;
    they are nested into :attr:`content` during validation and flattened
    again by :meth:`to_wire`.
    """

    content: Content
    timestamp: float
    """Epoch milliseconds, may carry a fractional part."""
    client_reference: int | None = Field(default=None, ge=-128, le=127)

    @model_validator(mode="before")
    @classmethod
    def _nest_content(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "source" not in values:
            return values
        nested = {key: value for key, value in values.items() if key not in ("source", "content")}
        inner: dict[str, Any] = {"source": values["source"]}
        if "content" in values:
            inner["content"] = values["content"]
        nested["content"] = inner
        return nested

    @property
    def source(self) -> str:
        """The discriminator this envelope was received with."""
        return self.content.source

    @property
    def is_recognized(self) -> bool:
        return not isinstance(self.content, UnrecognizedContent)

    def to_wire(self) -> dict[str, Any]:
        """Return the flattened wire representation."""
        payload = self.content.content
        if isinstance(payload, SbahnBaseModel):
            payload = payload.model_dump(mode="json")
        return {
            "source": self.content.source,
            "content": payload,
            "timestamp": self.timestamp,
            "client_reference": self.client_reference,
        }

    def to_json(self) -> str:
        """Serialize to one raw log line."""
        return json.dumps(self.to_wire(), separators=(",", ":"))

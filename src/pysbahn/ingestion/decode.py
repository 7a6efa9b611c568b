"""Two-stage frame decoding.

Stage 1 (:func:`decode_envelope`) validates one raw log line into an
:class:`~pysbahn.models.Envelope`. Stage 2 projects a trajectory envelope
into a :class:`~pysbahn.models.Train` (statistics) or a
:class:`~pysbahn.models.Record` (replay). The two projections read the
same envelope independently, so a failure in one never blocks the other.

Every function either returns a complete value or raises; there are no
partial results.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from pysbahn.colors import Color
from pysbahn.exceptions import (
    ColorConversionError,
    FrameParseError,
    IncorrectTypeError,
    MissingItemsError,
    MissingPropertyError,
)
from pysbahn.ingestion.extract import INTEGER, OBJECT, STRING, flag, json_kind
from pysbahn.models.geojson import GeoFeature
from pysbahn.models.messages import Envelope, TrajectorySchematicContent
from pysbahn.models.trajectory import Coordinate, Line, Record, RideState, Train

_TRAJECTORY_SOURCE = "trajectory_schematic"


def decode_envelope(line: str) -> Envelope:
    """Parse one raw frame.

    Unknown ``source`` values decode to
    :class:`~pysbahn.models.UnrecognizedContent`. Malformed JSON or a
    known ``source`` with a payload of the wrong shape raises
    :class:`FrameParseError`.
    """
    try:
        return Envelope.model_validate_json(line)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.error_count() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = first.get("msg", "invalid frame")
        raise FrameParseError(
            f"unable to parse frame ({exc.error_count()} error(s)): {location or '<root>'}: {message}",
            line=line,
        ) from exc


def trajectory_properties(envelope: Envelope) -> dict[str, Any]:
    """Return the property map of a single trajectory feature."""
    content = envelope.content
    if not isinstance(content, TrajectorySchematicContent):
        raise IncorrectTypeError(_TRAJECTORY_SOURCE, envelope.source)
    feature = content.content
    if not isinstance(feature, GeoFeature):
        raise IncorrectTypeError("Feature", feature.type)
    if feature.properties is None:
        raise IncorrectTypeError("properties", "null")
    return feature.properties


def decode_coordinate(value: Any) -> Coordinate:
    """Decode ``[longitude, latitude]``."""
    if not isinstance(value, list):
        raise IncorrectTypeError("array", json_kind(value))
    if len(value) != 2:
        raise MissingItemsError(2, len(value))
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise IncorrectTypeError("number", json_kind(item))
    longitude, latitude = value
    return Coordinate(latitude=float(latitude), longitude=float(longitude))


def decode_line(value: Any) -> Line:
    if not isinstance(value, dict):
        raise IncorrectTypeError("object", json_kind(value))
    return Line(
        color=STRING.required(value, "color"),
        id=INTEGER.required(value, "id"),
        name=STRING.required(value, "name"),
        stroke=STRING.required(value, "stroke"),
        text_color=STRING.required(value, "text_color"),
    )


def decode_color(value: str) -> Color:
    """Parse a line color, reporting conversion failures as decode errors."""
    try:
        return Color.from_hex(value)
    except ColorConversionError as exc:
        raise IncorrectTypeError("color", str(exc)) from exc


def decode_train(envelope: Envelope) -> Train:
    """Project a trajectory envelope into the full statistics record."""
    properties = trajectory_properties(envelope)

    line = properties.get("line")
    raw_coordinates = properties.get("raw_coordinates")
    return Train(
        delay=STRING.optional(properties, "delay"),
        has_journey=flag(properties, "has_journey"),
        has_realtime=flag(properties, "has_realtime"),
        has_realtime_journey=flag(properties, "has_realtime_journey"),
        line=decode_line(line) if line is not None else None,
        operator_provides_realtime_journey=STRING.required(properties, "operator_provides_realtime_journey"),
        original_line=STRING.optional(properties, "original_line"),
        original_rake=STRING.optional(properties, "original_rake"),
        original_train_number=INTEGER.optional(properties, "original_train_number") or 0,
        position_correction=INTEGER.optional(properties, "position_correction") or 0,
        rake=STRING.optional(properties, "rake"),
        raw_coordinates=decode_coordinate(raw_coordinates) if raw_coordinates is not None else None,
        ride_state=STRING.optional(properties, "ride_state"),
        state=STRING.optional(properties, "state"),
        tenant=STRING.required(properties, "tenant"),
        train_id=STRING.required(properties, "train_id"),
        train_number=INTEGER.optional(properties, "train_number"),
        transmitting_vehicle=STRING.optional(properties, "transmitting_vehicle"),
        vehicle_number=STRING.optional(properties, "vehicle_number"),
    )


def decode_record(envelope: Envelope) -> Record:
    """Project a trajectory envelope into a replay sample.

    Unlike :func:`decode_train` this needs a position, a line with name and
    color, a state and both vehicle and train numbers, but not ``train_id``.
    """
    properties = trajectory_properties(envelope)

    if "raw_coordinates" not in properties:
        raise MissingPropertyError("raw_coordinates")
    line = OBJECT.required(properties, "line")
    return Record(
        timestamp=envelope.timestamp,
        position=decode_coordinate(properties["raw_coordinates"]),
        line=STRING.required(line, "name"),
        line_color=decode_color(STRING.required(line, "color")),
        ride_state=RideState.from_state(STRING.required(properties, "state")),
        vehicle_number=STRING.required(properties, "vehicle_number"),
        train_number=INTEGER.required(properties, "train_number"),
    )

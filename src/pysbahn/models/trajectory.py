"""Domain records decoded from trajectory features."""

from __future__ import annotations

from enum import StrEnum

from pysbahn.colors import Color
from pysbahn.models._base import SbahnBaseModel


class RideState(StrEnum):
    """Coarse movement state used for replay.

    The feed reports ``DRIVING`` while moving; every other ``state``
    value is treated as boarding.
    """

    DRIVING = "DRIVING"
    BOARDING = "BOARDING"

    @classmethod
    def from_state(cls, value: str) -> RideState:
        return cls.DRIVING if value == "DRIVING" else cls.BOARDING


class Coordinate(SbahnBaseModel):
    """WGS84 position. Upstream arrays are ordered ``[longitude, latitude]``."""

    latitude: float
    longitude: float


class Line(SbahnBaseModel):
    """Transit line metadata. Hashable, so it can be counted."""

    color: str
    id: int
    name: str
    stroke: str
    text_color: str


class Train(SbahnBaseModel):
    """Full property set of one trajectory feature, used for statistics."""

    delay: str | None = None
    has_journey: bool = False
    has_realtime: bool = False
    has_realtime_journey: bool = False
    line: Line | None = None
    operator_provides_realtime_journey: str
    original_line: str | None = None
    original_rake: str | None = None
    original_train_number: int = 0
    position_correction: int = 0
    rake: str | None = None
    raw_coordinates: Coordinate | None = None
    ride_state: str | None = None
    state: str | None = None
    tenant: str
    train_id: str
    train_number: int | None = None
    transmitting_vehicle: str | None = None
    vehicle_number: str | None = None


class Record(SbahnBaseModel):
    """Minimal positional sample of one vehicle, used for replay."""

    timestamp: float
    position: Coordinate
    line: str
    line_color: Color
    ride_state: RideState
    vehicle_number: str
    train_number: int

"""Per-vehicle timelines for frame-indexed replay.

Records are kept in arrival order and never reordered by their embedded
timestamp: frame ``i`` of a vehicle is simply the ``i``-th record that was
decoded for it. Nothing is ever evicted, which is fine for a bounded
offline run but not for a long-running process.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pysbahn.models.trajectory import Record

if TYPE_CHECKING:
    from pysbahn.replay import DrawSurface, ScreenProjection


@dataclass(slots=True)
class Vehicle:
    """Ordered, append-only timeline of one vehicle."""

    number: str
    records: list[Record] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: Record) -> Vehicle:
        return cls(number=record.vehicle_number, records=[record])

    def append(self, record: Record) -> None:
        if record.vehicle_number != self.number:
            raise ValueError(f"record for vehicle {record.vehicle_number!r} appended to {self.number!r}")
        self.records.append(record)

    def record_at(self, frame_index: int) -> Record | None:
        """Return the sample for *frame_index*, or ``None`` once the timeline has run out."""
        if 0 <= frame_index < len(self.records):
            return self.records[frame_index]
        return None

    def __len__(self) -> int:
        return len(self.records)


class VehicleHistory:
    """Mapping of vehicle number to :class:`Vehicle`."""

    def __init__(self) -> None:
        self._vehicles: dict[str, Vehicle] = {}

    def insert(self, record: Record) -> Vehicle:
        """Append *record* to its vehicle's timeline, creating the vehicle on first sight."""
        vehicle = self._vehicles.get(record.vehicle_number)
        if vehicle is None:
            vehicle = Vehicle.from_record(record)
            self._vehicles[record.vehicle_number] = vehicle
        else:
            vehicle.append(record)
        return vehicle

    def get(self, number: str) -> Vehicle | None:
        return self._vehicles.get(number)

    def __contains__(self, number: object) -> bool:
        return number in self._vehicles

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(self._vehicles.values())

    def __len__(self) -> int:
        return len(self._vehicles)

    @property
    def record_count(self) -> int:
        return sum(len(vehicle) for vehicle in self._vehicles.values())

    def longest_timeline(self) -> int:
        """Length of the longest vehicle timeline, ``0`` when empty."""
        return max((len(vehicle) for vehicle in self._vehicles.values()), default=0)

    def frame(self, frame_index: int) -> list[Record]:
        """Samples of every vehicle that still has one at *frame_index*.

        No interpolation: vehicles with shorter timelines are skipped.
        """
        records: list[Record] = []
        for vehicle in self._vehicles.values():
            record = vehicle.record_at(frame_index)
            if record is not None:
                records.append(record)
        return records

    def render(self, frame_index: int, surface: DrawSurface, projection: ScreenProjection, radius: float) -> int:
        """Draw every vehicle's sample for *frame_index*. Returns the number drawn."""
        records = self.frame(frame_index)
        for record in records:
            surface.draw_circle(projection.project(record.position), radius, record.line_color)
        return len(records)

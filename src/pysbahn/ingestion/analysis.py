"""Offline analysis pass over a raw frame log.

Reads the log line by line, decodes every frame and feeds trajectory
features into the statistics counters and the vehicle history. Failures
are handled at the granularity of a single line or record: the offending
item is logged and counted, and the scan continues.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pysbahn._redact import redact_frame
from pysbahn.exceptions import DecodeError, FrameParseError
from pysbahn.ingestion.decode import decode_envelope, decode_record, decode_train
from pysbahn.models.messages import (
    DeletedVehiclesContent,
    DeletedVehiclesSchematicContent,
    Envelope,
    ExtraGeomsContent,
    HealthcheckContent,
    NewsTickerContent,
    StationContent,
    StationSchematicContent,
    TrajectoryContent,
    TrajectorySchematicContent,
    UnrecognizedContent,
    WebsocketContent,
)
from pysbahn.rawlog import read_frames
from pysbahn.state.aggregate import CategoricalCounter, TrainStatistics
from pysbahn.state.history import VehicleHistory

_logger = logging.getLogger(__name__)

_IGNORED_CONTENT = (
    TrajectoryContent,
    StationSchematicContent,
    StationContent,
    DeletedVehiclesSchematicContent,
    DeletedVehiclesContent,
    WebsocketContent,
    ExtraGeomsContent,
    HealthcheckContent,
    NewsTickerContent,
)


@dataclass
class AnalysisResult:
    """Everything one pass over a raw log produced."""

    statistics: TrainStatistics = field(default_factory=TrainStatistics)
    history: VehicleHistory = field(default_factory=VehicleHistory)
    sources: CategoricalCounter[str] = field(default_factory=CategoricalCounter)
    lines_read: int = 0
    lines_skipped: int = 0
    train_errors: int = 0
    record_errors: int = 0

    def summary(self) -> str:
        return (
            f"lines read: {self.lines_read}, skipped: {self.lines_skipped}, "
            f"train errors: {self.train_errors}, record errors: {self.record_errors}, "
            f"vehicles: {len(self.history)}, records: {self.history.record_count}"
        )


def analyze_envelope(envelope: Envelope, result: AnalysisResult) -> None:
    """Route one decoded envelope into *result*.

    Only schematic trajectory features are projected; every other known
    variant is ignored explicitly and unknown sources are only counted.
    """
    content = envelope.content
    result.sources.add(envelope.source)

    if isinstance(content, TrajectorySchematicContent):
        try:
            result.statistics.add(decode_train(envelope))
        except DecodeError as exc:
            result.train_errors += 1
            _logger.warning("Skipping train statistics for frame at %s: %s", envelope.timestamp, exc)
        try:
            result.history.insert(decode_record(envelope))
        except DecodeError as exc:
            result.record_errors += 1
            _logger.debug("Skipping replay record for frame at %s: %s", envelope.timestamp, exc)
    elif isinstance(content, _IGNORED_CONTENT):
        pass
    elif isinstance(content, UnrecognizedContent):
        _logger.debug("Ignoring frame with unrecognized source=%s", content.source)
    else:
        raise TypeError(f"unhandled content variant {type(content).__name__}")


def analyze_lines(lines: Iterable[str], result: AnalysisResult | None = None) -> AnalysisResult:
    """Analyze already-loaded frames. Line numbers in logs start at 1."""
    result = result if result is not None else AnalysisResult()
    for line_number, line in enumerate(lines, start=1):
        if line:
            _analyze_frame(line_number, line, result)
    return result


def analyze_log(path: str | Path, result: AnalysisResult | None = None) -> AnalysisResult:
    """Run the offline pass over the raw log at *path*.

    Raises :class:`~pysbahn.exceptions.RawLogError` if the log cannot be
    opened; every other failure is recovered per line.
    """
    result = result if result is not None else AnalysisResult()
    for line_number, frame in read_frames(path):
        _analyze_frame(line_number, frame, result)
    _logger.info("Analysis of %s finished: %s", path, result.summary())
    return result


def _analyze_frame(line_number: int, frame: str, result: AnalysisResult) -> None:
    result.lines_read += 1
    try:
        envelope = decode_envelope(frame)
    except FrameParseError as exc:
        result.lines_skipped += 1
        _logger.warning("Skipping line %d: %s", line_number, exc)
        _logger.debug("Skipped frame: %s", redact_frame(frame, max_length=256))
        return
    analyze_envelope(envelope, result)

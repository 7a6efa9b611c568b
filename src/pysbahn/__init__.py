"""pysbahn - S-Bahn Munich live map feed recorder and replay tools."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysbahn")
except PackageNotFoundError:
    __version__ = "0+local"
from pysbahn.colors import Color
from pysbahn.config import FeedConfig, ReplayConfig
from pysbahn.exceptions import (
    ColorConversionError,
    ColorParseError,
    DecodeError,
    FeedConnectionError,
    FrameParseError,
    IncorrectTypeError,
    IncorrectValueTypeError,
    MissingItemsError,
    MissingPropertyError,
    RawLogError,
    SbahnConfigError,
    SbahnError,
    WrongColorPrefixError,
)
from pysbahn.feed import FeedSession, build_subscribe_commands
from pysbahn.ingestion.analysis import AnalysisResult, analyze_log
from pysbahn.ingestion.decode import decode_envelope, decode_record, decode_train
from pysbahn.models import Coordinate, Envelope, Line, Record, RideState, Train
from pysbahn.rawlog import RawLog, read_frames
from pysbahn.replay import DrawSurface, Replay, ScreenProjection, map_range
from pysbahn.state import CategoricalCounter, TrainStatistics, Vehicle, VehicleHistory

__all__ = [
    "__version__",
    "AnalysisResult",
    "CategoricalCounter",
    "Color",
    "ColorConversionError",
    "ColorParseError",
    "Coordinate",
    "DecodeError",
    "DrawSurface",
    "Envelope",
    "FeedConfig",
    "FeedConnectionError",
    "FeedSession",
    "FrameParseError",
    "IncorrectTypeError",
    "IncorrectValueTypeError",
    "Line",
    "MissingItemsError",
    "MissingPropertyError",
    "RawLog",
    "RawLogError",
    "Record",
    "Replay",
    "ReplayConfig",
    "RideState",
    "SbahnConfigError",
    "SbahnError",
    "ScreenProjection",
    "Train",
    "TrainStatistics",
    "Vehicle",
    "VehicleHistory",
    "WrongColorPrefixError",
    "analyze_log",
    "build_subscribe_commands",
    "decode_envelope",
    "decode_record",
    "decode_train",
    "map_range",
    "read_frames",
]

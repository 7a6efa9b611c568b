"""In-memory state built up during an analysis pass."""

from pysbahn.state.aggregate import CategoricalCounter, TrainStatistics
from pysbahn.state.history import Vehicle, VehicleHistory

__all__ = ["CategoricalCounter", "TrainStatistics", "Vehicle", "VehicleHistory"]

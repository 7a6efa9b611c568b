"""Frequency counts over optional categorical fields.

Diagnostics only: the counts are reported after an analysis pass and
never drive control flow.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pysbahn.models.trajectory import Line, Train

K = TypeVar("K", bound=Hashable)

NO_VALUE_LABEL = "<no value>"


class CategoricalCounter(Generic[K]):
    """Occurrence count per observed value. ``None`` is one shared bucket."""

    def __init__(self, values: Iterable[K | None] = ()) -> None:
        self._counts: Counter[K | None] = Counter()
        for value in values:
            self.add(value)

    def add(self, value: K | None) -> int:
        """Count one occurrence of *value* and return its new count."""
        self._counts[value] += 1
        return self._counts[value]

    def __getitem__(self, value: K | None) -> int:
        return self._counts[value]

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[K | None]:
        return iter(self._counts)

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def as_dict(self) -> dict[K | None, int]:
        return dict(self._counts)

    def most_common(self, n: int | None = None) -> list[tuple[K | None, int]]:
        return self._counts.most_common(n)

    def __repr__(self) -> str:
        return f"CategoricalCounter({dict(self._counts)!r})"


def _label(value: object) -> str:
    if value is None:
        return NO_VALUE_LABEL
    if isinstance(value, Line):
        return f"{value.name} (id={value.id}, color={value.color})"
    return str(value)


@dataclass
class TrainStatistics:
    """Counters collected from every successfully decoded :class:`Train`."""

    trains: int = 0
    delays: CategoricalCounter[str] = field(default_factory=CategoricalCounter)
    states: CategoricalCounter[str] = field(default_factory=CategoricalCounter)
    ride_states: CategoricalCounter[str] = field(default_factory=CategoricalCounter)
    original_lines: CategoricalCounter[str] = field(default_factory=CategoricalCounter)
    lines: CategoricalCounter[Line] = field(default_factory=CategoricalCounter)

    def add(self, train: Train) -> None:
        self.trains += 1
        self.delays.add(train.delay)
        self.states.add(train.state)
        self.ride_states.add(train.ride_state)
        self.original_lines.add(train.original_line)
        self.lines.add(train.line)

    def report(self) -> str:
        """Render the counters as plain text, most frequent first."""
        sections = [f"trains: {self.trains}"]
        for title, counter in (
            ("delays", self.delays),
            ("states", self.states),
            ("ride_states", self.ride_states),
            ("original_lines", self.original_lines),
            ("lines", self.lines),
        ):
            sections.append(f"{title}:")
            for value, count in counter.most_common():
                sections.append(f"  {_label(value)}: {count}")
        return "\n".join(sections)

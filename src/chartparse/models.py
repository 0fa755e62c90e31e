from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class NoteEvent:
    """A fretted note starting at tick ``position``, held for ``length`` ticks."""

    position: int
    fret: int
    length: int


@dataclass(frozen=True)
class SpecialEvent:
    """A non-fret phrase (star power, solo marker, ...) shaped like a note."""

    position: int
    key: int
    length: int


@dataclass(frozen=True)
class BpmEvent:
    position: int
    bpm: int  # stored as written, e.g. 120000 for 120 BPM


@dataclass(frozen=True)
class TimeSigEvent:
    position: int
    numerator: int
    denominator: int = 2  # written as a power of two in chart files


@dataclass(frozen=True)
class Event:
    """A generic marker whose payload is an opaque token."""

    position: int
    data: str


@dataclass(frozen=True)
class KeyValue:
    """A metadata line, e.g. ``Resolution = 192``."""

    key: str
    value: str


@dataclass(frozen=True)
class Section:
    """A named, bracket-delimited block of a chart.

    Event lists are tuples and ``metadata`` is a read-only mapping, so a
    section cannot change once built.  Lists and dicts passed in are copied.
    """

    name: str  # e.g. "Song", "SyncTrack", "ExpertSingle"
    note_events: tuple[NoteEvent, ...] = ()
    special_events: tuple[SpecialEvent, ...] = ()
    bpm_events: tuple[BpmEvent, ...] = ()
    ts_events: tuple[TimeSigEvent, ...] = ()
    generic_events: tuple[Event, ...] = ()
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("note_events", "special_events", "bpm_events", "ts_events", "generic_events"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True)
class Chart:
    """A parsed chart document: its sections in source order."""

    sections: tuple[Section, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "sections", tuple(self.sections))

    @property
    def section_names(self) -> list[str]:
        return [section.name for section in self.sections]

    def section(self, name: str) -> Section | None:
        """Return the first section called *name*, or ``None``."""
        for section in self.sections:
            if section.name == name:
                return section
        return None

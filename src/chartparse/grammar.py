"""Per-kind grammars for chart event lines.

Each grammar matches a whole line, anchored at both ends, and returns a
plain immutable event value:

  note            ``INT = N INT INT``     -> NoteEvent
  special         ``INT = S INT INT``     -> SpecialEvent
  tempo           ``INT = B INT``         -> BpmEvent
  time signature  ``INT = TS INT [INT]``  -> TimeSigEvent (denominator 2 if absent)
  generic         ``INT = E TOKEN``       -> Event

Whitespace between tokens is optional and may be of any length, so
``100 = N 3 0``, ``100=N 3 0`` and ``100  =  N  3  0`` all parse the same way.
Integers take an optional sign and must fit in 32 bits.
"""

import re
from typing import Callable

from .exceptions import (
    BadBpmEventError,
    BadEventError,
    BadNoteEventError,
    BadSpecialEventError,
    BadTimeSigEventError,
    EventGrammarError,
)
from .models import BpmEvent, Event, NoteEvent, SpecialEvent, TimeSigEvent

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

_WS = r"[ \t\r\f\v]*"
# A signed integer that cannot be split by backtracking ("30" is never 3, 0)
_INT = r"([+-]?[0-9]+)(?![0-9])"


def _event_re(marker: str, *fields: str, tail: str = _WS) -> re.Pattern[str]:
    pattern = _WS + _INT + _WS + "=" + _WS + marker
    for f in fields:
        pattern += _WS + f
    return re.compile(pattern + tail, re.ASCII)


NOTE_EVENT_RE = _event_re("N", _INT, _INT)
SPECIAL_EVENT_RE = _event_re("S", _INT, _INT)
BPM_EVENT_RE = _event_re("B", _INT)
TS_EVENT_RE = _event_re("TS", _INT, f"(?:{_INT})?")
# The payload runs up to the next space; tabs inside it are kept
GENERIC_EVENT_RE = _event_re("E", r"([^ ]*)", tail=" *")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def to_int32(text: str) -> int | None:
    """Convert *text* to an int if it is in 32-bit range, else ``None``."""
    if len(text.lstrip("+-").lstrip("0")) > 10:
        return None
    value = int(text)
    if INT32_MIN <= value <= INT32_MAX:
        return value
    return None


def _match_ints(
    pattern: re.Pattern[str],
    line: str,
    error: type[EventGrammarError],
    line_number: int | None,
) -> list[int | None]:
    m = pattern.fullmatch(line)
    if not m:
        raise error(line, line_number)
    values = []
    for group in m.groups():
        if group is None:  # optional field left out
            values.append(None)
            continue
        value = to_int32(group)
        if value is None:
            raise error(line, line_number)
        values.append(value)
    return values


# ---------------------------------------------------------------------------
# Grammars
# ---------------------------------------------------------------------------


def parse_note_event(line: str, line_number: int | None = None) -> NoteEvent:
    position, fret, length = _match_ints(NOTE_EVENT_RE, line, BadNoteEventError, line_number)
    return NoteEvent(position, fret, length)


def parse_special_event(line: str, line_number: int | None = None) -> SpecialEvent:
    position, key, length = _match_ints(
        SPECIAL_EVENT_RE, line, BadSpecialEventError, line_number
    )
    return SpecialEvent(position, key, length)


def parse_bpm_event(line: str, line_number: int | None = None) -> BpmEvent:
    position, bpm = _match_ints(BPM_EVENT_RE, line, BadBpmEventError, line_number)
    return BpmEvent(position, bpm)


def parse_ts_event(line: str, line_number: int | None = None) -> TimeSigEvent:
    position, numerator, denominator = _match_ints(
        TS_EVENT_RE, line, BadTimeSigEventError, line_number
    )
    if denominator is None:
        return TimeSigEvent(position, numerator)
    return TimeSigEvent(position, numerator, denominator)


def parse_generic_event(line: str, line_number: int | None = None) -> Event:
    m = GENERIC_EVENT_RE.fullmatch(line)
    if not m:
        raise BadEventError(line, line_number)
    position = to_int32(m.group(1))
    if position is None:
        raise BadEventError(line, line_number)
    return Event(position, m.group(2))


# Kind marker (third token of an event line) -> grammar
EVENT_GRAMMARS: dict[str, Callable[[str, int | None], object]] = {
    "N": parse_note_event,
    "S": parse_special_event,
    "B": parse_bpm_event,
    "TS": parse_ts_event,
    "E": parse_generic_event,
}

"""Chart parser: line classification, section scanning and chart assembly.

A chart document is a sequence of sections::

    [Song]
    {
      Resolution = 192
    }
    [ExpertSingle]
    {
      768 = N 0 0
      768 = S 2 1536
      960 = E solo
    }

Algorithm
---------
1. A section starts with a ``[Name]`` header line, followed by a line that
   is exactly ``{``.
2. Every following line up to one that is exactly ``}`` is classified by
   :func:`classify_line`: numeric-keyed lines are decoded by the grammar for
   their kind marker, anything else is a ``key = value`` metadata pair.
3. Sections are read until the buffer is exhausted.

The first malformed construct raises a :class:`ChartParseError` subclass and
the whole parse is abandoned.
"""

import logging
import re

from .exceptions import (
    EmptyHeaderError,
    IncompleteLineError,
    MissingBraceOpenError,
    UnexpectedEofError,
)
from .grammar import EVENT_GRAMMARS, to_int32
from .lines import LineReader
from .models import (
    BpmEvent,
    Chart,
    Event,
    KeyValue,
    NoteEvent,
    Section,
    SpecialEvent,
    TimeSigEvent,
)

logger = logging.getLogger(__name__)

# Position token of an event line: digits with an optional minus sign only
_POSITION_RE = re.compile(r"-?[0-9]+", re.ASCII)
# Event line written without spaces around "=": "100=N"
_COMPACT_RE = re.compile(r"(-?[0-9]+)=(.+)", re.ASCII)

BodyLine = NoteEvent | SpecialEvent | BpmEvent | TimeSigEvent | Event | KeyValue

# Event type -> Section attribute that collects it
_EVENT_LISTS = {
    NoteEvent: "note_events",
    SpecialEvent: "special_events",
    BpmEvent: "bpm_events",
    TimeSigEvent: "ts_events",
    Event: "generic_events",
}


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------


def _is_int(token: str) -> bool:
    return bool(_POSITION_RE.fullmatch(token)) and to_int32(token) is not None


def _split_fields(line: str, line_number: int | None) -> list[str]:
    """Split *line* on single spaces, expanding a compact ``100=N`` first token."""
    tokens = line.split(" ")
    m = _COMPACT_RE.fullmatch(tokens[0])
    if m and _is_int(m.group(1)):
        if len(tokens) < 2:
            raise IncompleteLineError(f"No fields after event kind: {line!r}", line_number)
        return [m.group(1), "=", m.group(2), *tokens[1:]]
    if len(tokens) < 3:
        raise IncompleteLineError(f"Expected at least 3 fields: {line!r}", line_number)
    return tokens


def classify_line(line: str, line_number: int | None = None) -> BodyLine | None:
    """Decode a single section body line.

    Args:
        line:        The body line, without its terminator.
        line_number: Source line number, used in error messages only.

    Returns:
        An event (:class:`NoteEvent`, :class:`SpecialEvent`, :class:`BpmEvent`,
        :class:`TimeSigEvent` or :class:`Event`) for a numeric-keyed line with
        a known kind marker, a :class:`KeyValue` for a metadata line, or
        ``None`` for a numeric-keyed line whose kind marker is unknown.

    Raises:
        IncompleteLineError: the line has fewer than three space-separated
            tokens, or is a compact ``100=N`` line with nothing after the kind.
        EventGrammarError: the kind marker is known but the line does not match
            that kind's grammar.
    """
    tokens = _split_fields(line, line_number)

    if not _is_int(tokens[0]):
        # "Name = Some Song" -> key "Name", value "SomeSong"
        return KeyValue(tokens[0], "".join(tokens[2:]))

    grammar = EVENT_GRAMMARS.get(tokens[2])
    if grammar is None:
        logger.debug("Dropping line %s with unknown event kind %r", line_number, tokens[2])
        return None
    return grammar(line, line_number)


# ---------------------------------------------------------------------------
# Section scanner
# ---------------------------------------------------------------------------


def read_section(reader: LineReader) -> Section:
    """Read one complete section from *reader* and return it.

    The reader is left positioned at the line after the closing ``}``.
    """
    header = reader.next_line()
    if len(header) < 2:
        raise EmptyHeaderError(f"Section header too short: {header!r}", reader.line_number)
    name = header[1:-1]

    if reader.next_line() != "{":
        raise MissingBraceOpenError(f"Section [{name}] does not open with {{", reader.line_number)

    events: dict[str, list] = {attr: [] for attr in _EVENT_LISTS.values()}
    metadata: dict[str, str] = {}
    while True:
        try:
            line = reader.next_line()
        except UnexpectedEofError as exc:
            raise UnexpectedEofError(
                f"Section [{name}] is not closed with }}", exc.line_number
            ) from exc
        if line == "}":
            break

        value = classify_line(line, reader.line_number)
        if value is None:
            continue
        if isinstance(value, KeyValue):
            metadata[value.key] = value.value
        else:
            events[_EVENT_LISTS[type(value)]].append(value)

    section = Section(name=name, metadata=metadata, **events)
    logger.debug(
        "Read section [%s]: %d notes, %d specials, %d bpm, %d ts, %d events, %d metadata",
        section.name,
        len(section.note_events),
        len(section.special_events),
        len(section.bpm_events),
        len(section.ts_events),
        len(section.generic_events),
        len(section.metadata),
    )
    return section


# ---------------------------------------------------------------------------
# Chart assembler
# ---------------------------------------------------------------------------


def parse_chart(text: str) -> Chart:
    """Parse the full text of a chart document into a :class:`Chart`.

    An empty document gives a chart with no sections.

    Raises:
        ChartParseError: on the first malformed construct.
    """
    reader = LineReader(text)
    sections = []
    while not reader.at_end():
        sections.append(read_section(reader))
    return Chart(sections=sections)

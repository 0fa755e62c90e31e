class ChartParseError(Exception):
    """Base exception for chartparse.

    Every malformed construct in a chart raises a subclass of this error and
    aborts the whole parse.
    """

    def __init__(self, reason: str, line_number: int | None = None):
        self.reason = reason
        self.line_number = line_number
        if line_number is None:
            super().__init__(reason)
        else:
            super().__init__(f"line {line_number}: {reason}")


class UnexpectedEofError(ChartParseError):
    """Raised when a line is required but the buffer is exhausted."""


class EmptyHeaderError(ChartParseError):
    """Raised when a section header is too short to strip its brackets."""


class MissingBraceOpenError(ChartParseError):
    """Raised when the line after a section header is not ``{``."""


class IncompleteLineError(ChartParseError):
    """Raised when a section body line has fewer than three tokens."""


class EventGrammarError(ChartParseError):
    """Raised when a recognised event line does not match its grammar."""

    kind = "event"

    def __init__(self, line: str, line_number: int | None = None):
        self.line = line
        super().__init__(f"Bad {self.kind} event: {line!r}", line_number)


class BadNoteEventError(EventGrammarError):
    kind = "note"


class BadSpecialEventError(EventGrammarError):
    kind = "special"


class BadBpmEventError(EventGrammarError):
    kind = "bpm"


class BadTimeSigEventError(EventGrammarError):
    kind = "time signature"


class BadEventError(EventGrammarError):
    kind = "generic"

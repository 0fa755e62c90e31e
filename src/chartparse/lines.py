"""Line reader for chart text.

A chart is read one logical line at a time.  A line ends at ``\\n`` (a
``\\r`` immediately before it belongs to the terminator).  After each
terminator, any run of whitespace is skipped, so blank lines and
indentation between lines never reach the section scanner.
"""

from .exceptions import UnexpectedEofError

WHITESPACE = " \f\n\r\t\v"


def skip_whitespace(text: str) -> str:
    """Return *text* without its leading run of whitespace."""
    return text.lstrip(WHITESPACE)


class LineReader:
    """Forward-only cursor over a chart buffer.

    The buffer is never copied or modified; the reader only advances an
    offset into it and slices out each line it returns.
    """

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self.line_number = 0  # 1-based number of the last line returned
        self._skipped_lines = 0  # blank lines passed since that line

    def at_end(self) -> bool:
        return self._pos >= len(self._text)

    def next_line(self) -> str:
        """Return the next line and advance past it.

        Raises UnexpectedEofError if the buffer is already exhausted.
        """
        if self.at_end():
            raise UnexpectedEofError("No lines left", self.line_number or None)

        text = self._text
        start = self._pos
        self.line_number += 1 + self._skipped_lines
        self._skipped_lines = 0
        newline = text.find("\n", start)

        if newline == -1:
            # Unterminated last line: take everything that is left
            self._pos = len(text)
            return text[start:]

        end = newline
        if end > start and text[end - 1] == "\r":
            end -= 1
        line = text[start:end]
        self._skip_whitespace(newline + 1)
        return line

    def _skip_whitespace(self, pos: int) -> None:
        text = self._text
        end = pos
        while end < len(text) and text[end] in WHITESPACE:
            end += 1
        # Counted when the next line is read
        self._skipped_lines = text.count("\n", pos, end)
        self._pos = end

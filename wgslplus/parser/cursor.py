"""Index-based cursors used by the hand-written parsers."""

from __future__ import annotations
from typing import Optional


class CharCursor:
    """Peekable cursor over an immutable string.

    Lookahead is done with `peek(offset)` and `startswith`, neither of
    which moves the cursor.
    """

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    def peek(self, offset: int = 0) -> Optional[str]:
        index = self.pos + offset
        if index < len(self.text):
            return self.text[index]
        return None

    def advance(self, count: int = 1) -> str:
        taken = self.text[self.pos:self.pos + count]
        self.pos += len(taken)
        return taken

    def startswith(self, token: str) -> bool:
        return self.text.startswith(token, self.pos)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def rest(self) -> str:
        return self.text[self.pos:]


class LineCursor:
    """Cursor over a list of source lines."""

    def __init__(self, lines: list[str]):
        self.lines = lines
        self.pos = 0

    def next_line(self) -> Optional[str]:
        if self.pos >= len(self.lines):
            return None
        line = self.lines[self.pos]
        self.pos += 1
        return line

"""
Lexer (tokenizer) for nginx-style configuration syntax.

The lexer does not know about keywords or values. It only classifies
delimiter characters; each token carries the delimiter together with all
text accumulated since the previous delimiter. The parser decides what that
text means.

Delimiters:
- Space and tab (whitespace)
- Newline
- ``;`` statement terminator
- ``{`` and ``}`` block start and end
- ``#`` comment start
- ``\\`` escape: the next character loses its delimiting power
- ``\\r`` is dropped
"""

import io
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Mapping, TextIO


class Indicator(Enum):
    """Classification of a delimiter character."""

    WHITESPACE = auto()            # space, tab
    NEWLINE = auto()               # \n
    STATEMENT_TERMINATOR = auto()  # ;
    BLOCK_START = auto()           # {
    BLOCK_END = auto()             # }
    COMMENT = auto()               # #
    END_OF_INPUT = auto()          # end of the character stream
    ESCAPE = auto()                # \
    IGNORE = auto()                # \r


CHARACTER_MAP: Mapping[str, Indicator] = {
    " ": Indicator.WHITESPACE,
    "\t": Indicator.WHITESPACE,
    "\n": Indicator.NEWLINE,
    "\r": Indicator.IGNORE,
    ";": Indicator.STATEMENT_TERMINATOR,
    "{": Indicator.BLOCK_START,
    "}": Indicator.BLOCK_END,
    "#": Indicator.COMMENT,
    "\\": Indicator.ESCAPE,
}

END_OF_INPUT_CHAR = "\0"


@dataclass(frozen=True)
class Token:
    """
    A delimiter and the text accumulated in front of it.

    Attributes:
        start: Offset of the first character after the previous delimiter
        end: Offset of the delimiter (input length for END_OF_INPUT)
        before: Text accumulated since the previous delimiter
        value: The delimiter character, NUL for END_OF_INPUT
        type: Classification of the delimiter
    """

    start: int
    end: int
    before: str
    value: str
    type: Indicator

    def __str__(self) -> str:
        return f"{self.start}-{self.end} [{self.type.name}::{ord(self.value)}] {self.before}"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.before!r}, {self.start}:{self.end})"

    @property
    def is_blank(self) -> bool:
        """True if nothing but whitespace preceded the delimiter."""
        return not self.before.strip()


class Lexer:
    """
    Tokenizer for nginx-style configuration syntax.

    Reads the source one character at a time. The token stream is lazy and
    can only be consumed once; it always ends with exactly one
    END_OF_INPUT token.

    Example:
        lexer = Lexer(io.StringIO("worker_processes 1;"))
        for token in lexer:
            print(token)
    """

    def __init__(self, reader: TextIO, character_map: Mapping[str, Indicator] | None = None):
        self.reader = reader
        self.character_map = CHARACTER_MAP if character_map is None else character_map

    def tokenize(self) -> Iterator[Token]:
        """Generate all tokens from the source."""
        index = -1
        start = 0
        buffer: list[str] = []
        last_was_escape = False

        while True:
            char = self.reader.read(1)
            index += 1

            if not char:
                yield Token(start, index, "".join(buffer), END_OF_INPUT_CHAR, Indicator.END_OF_INPUT)
                return

            indicator = self.character_map.get(char)
            if indicator is None:
                buffer.append(char)
                last_was_escape = False
                continue

            if indicator is Indicator.IGNORE:
                continue

            if last_was_escape:
                buffer.append(char)
                last_was_escape = False
                continue

            if indicator is Indicator.ESCAPE:
                # The marker stays in the text, only its power is consumed
                buffer.append(char)
                last_was_escape = True
                continue

            yield Token(start, index, "".join(buffer), char, indicator)
            start = index + 1
            buffer.clear()

    def __iter__(self) -> Iterator[Token]:
        """Allow iteration over tokens."""
        return self.tokenize()


def tokenize(source: str) -> list[Token]:
    """Convenience function to tokenize a source string."""
    return list(Lexer(io.StringIO(source)))

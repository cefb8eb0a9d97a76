"""
Recursive descent parser for nginx-style configuration syntax.

Consumes the token stream produced by the lexer and builds a statement
tree. The token iterator is the only parser state; it is passed explicitly
through every call so nested blocks continue reading from the position the
enclosing call reached.

Grammar (informal):
    statements  := statement*
    statement   := comment | directive | block
    comment     := '#' text NEWLINE
    directive   := keyword arguments ';'
    block       := keyword arguments '{' statements '}'

The parser is purely syntactic. Keywords and arguments are kept as text and
never validated.
"""

import io
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, Iterable, Iterator, Mapping, TextIO

from ..const import DEFAULT_READ_ENCODING, LINE_SEPARATOR
from ..logging import Loggers
from .errors import ParseError
from .lexer import Indicator, Lexer, Token
from .statements import Block, Comment, Directive, Statement


logger = Loggers.parser()

# Token types that may end the search for the start of a statement
BOUNDARY_TYPES = frozenset(
    {
        Indicator.COMMENT,
        Indicator.STATEMENT_TERMINATOR,
        Indicator.BLOCK_START,
        Indicator.BLOCK_END,
    }
)

# Separators that only count once text has been accumulated in front of them
SEPARATOR_TYPES = frozenset({Indicator.WHITESPACE, Indicator.NEWLINE})


def _next_boundary(tokens: Iterator[Token]) -> Token | None:
    """
    Skip to the token that starts the next statement.

    Blank separators are skipped. END_OF_INPUT is always returned; None
    means the iterator was already exhausted.
    """
    for token in tokens:
        if token.type is Indicator.END_OF_INPUT or token.type in BOUNDARY_TYPES:
            return token
        if token.type in SEPARATOR_TYPES and not token.is_blank:
            return token
    return None


def _take_until(tokens: Iterator[Token], *types: Indicator) -> list[Token]:
    """Collect tokens up to and including one of the given types or END_OF_INPUT."""
    taken: list[Token] = []
    for token in tokens:
        taken.append(token)
        if token.type is Indicator.END_OF_INPUT or token.type in types:
            break
    return taken


def _concat(tokens: list[Token]) -> str:
    """Join the text of tokens with their delimiters, except the final delimiter."""
    parts: list[str] = []
    for index, token in enumerate(tokens):
        parts.append(token.before)
        if index < len(tokens) - 1:
            parts.append(token.value)
    return "".join(parts)


def _strip_arguments(text: str) -> str:
    """Strip surrounding whitespace, keeping a trailing whitespace character that was escaped."""
    stripped = text.strip()
    trailing = len(stripped) - len(stripped.rstrip("\\"))
    if trailing % 2 == 1:
        # The final marker escaped the whitespace that follows it
        start = len(text) - len(text.lstrip())
        stripped = text[start : start + len(stripped) + 1]
    return stripped


def _take_arguments(tokens: Iterator[Token]) -> list[Token]:
    """Collect the argument tokens of a directive or block header."""
    taken: list[Token] = []
    for token in tokens:
        if token.type is Indicator.COMMENT:
            raise ParseError("Unterminated statement before comment", token)
        taken.append(token)
        if token.type in (
            Indicator.STATEMENT_TERMINATOR,
            Indicator.BLOCK_START,
            Indicator.END_OF_INPUT,
        ):
            break
    return taken


def parse_statement(tokens: Iterator[Token], in_block: bool) -> tuple[Statement | None, bool]:
    """
    Parse the next statement from the token stream.

    Args:
        tokens: Shared token cursor
        in_block: True while parsing the body of a block

    Returns:
        (statement, block_ended). statement is None when the input is
        exhausted or when the enclosing block was closed, in which case
        block_ended is True.

    Raises:
        ParseError: If the input is malformed
    """
    token = _next_boundary(tokens)
    if token is None:
        return None, False

    if token.type is Indicator.COMMENT:
        if not token.is_blank:
            raise ParseError("Unterminated statement before comment", token)
        taken = _take_until(tokens, Indicator.NEWLINE)
        if in_block and taken and taken[-1].type is Indicator.END_OF_INPUT:
            raise ParseError("Unterminated block before end of input", taken[-1])
        return Comment(_concat(taken)), False

    if token.type is Indicator.STATEMENT_TERMINATOR:
        return Directive(token.before, ""), False

    if token.type is Indicator.END_OF_INPUT:
        if not token.is_blank:
            raise ParseError("Unterminated statement before end of input", token)
        if in_block:
            raise ParseError("Unterminated block before end of input", token)
        return None, False

    if token.type is Indicator.BLOCK_START:
        return parse_block_body(tokens, token.before, ""), False

    if token.type is Indicator.BLOCK_END:
        if in_block:
            return None, True
        raise ParseError("Unexpected block end", token)

    keyword = token.before
    taken = _take_arguments(tokens)
    if not taken:
        raise ParseError("Unexpected end of input - no arguments for statement", token)

    last = taken[-1]
    if last.type not in (Indicator.STATEMENT_TERMINATOR, Indicator.BLOCK_START):
        raise ParseError("Unterminated statement before end of input", last)

    arguments = _strip_arguments(_concat(taken))
    if last.type is Indicator.BLOCK_START:
        return parse_block_body(tokens, keyword, arguments), False

    return Directive(keyword, arguments), False


def parse_block_body(tokens: Iterator[Token], keyword: str, arguments: str) -> Block:
    """
    Parse the statements of a block up to its closing brace.

    The opening brace has already been consumed.

    Raises:
        ParseError: If the block is not closed before the input ends
    """
    block = Block(keyword, arguments)

    while True:
        statement, block_ended = parse_statement(tokens, True)
        if statement is not None:
            block.statements.append(statement)
        elif block_ended:
            return block
        else:
            raise ParseError(f"Unterminated block '{keyword}' before end of input")


def parse_statements(tokens: Iterator[Token]) -> Iterator[Statement]:
    """Parse top-level statements until the input is exhausted."""
    while True:
        statement, _ = parse_statement(tokens, False)
        if statement is None:
            return
        yield statement


class NginxParser:
    """
    Parser bound to a single configuration source.

    The parser owns its reader and closes it once parse() finishes, fails,
    or the parser is used as a context manager and exits.

    Usage:
        with NginxParser.from_file("/etc/nginx/nginx.conf") as parser:
            statements = list(parser.parse())
    """

    def __init__(
        self,
        reader: TextIO,
        name: str = "<string>",
        character_map: Mapping[str, Indicator] | None = None,
    ):
        self.reader = reader
        self.name = name
        self.character_map = character_map

    def __enter__(self) -> "NginxParser":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self.reader.closed

    def close(self) -> None:
        """Release the underlying reader."""
        if not self.reader.closed:
            self.reader.close()

    def tokens(self) -> Iterator[Token]:
        """Lazily tokenize the source."""
        return Lexer(self.reader, self.character_map).tokenize()

    def parse(self) -> Iterator[Statement]:
        """
        Parse all statements of the source.

        Statements are produced lazily; the reader is closed when the
        generator is exhausted or a ParseError propagates.
        """
        logger.debug(f"Parsing {self.name}")
        count = 0
        try:
            for statement in parse_statements(self.tokens()):
                count += 1
                yield statement
        except ParseError as e:
            logger.debug(f"Failed to parse {self.name}: {e}")
            raise
        finally:
            self.close()
        logger.debug(f"Parsed {count} top-level statements from {self.name}")

    @classmethod
    def from_file(cls, path: str | Path, encoding: str | None = None) -> "NginxParser":
        """
        Create a parser reading a configuration file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        logger.debug(f"Reading configuration file {path}")
        reader = open(path, encoding=encoding or DEFAULT_READ_ENCODING, newline="")
        return cls(reader, name=str(path))

    @classmethod
    def from_stream(cls, stream: BinaryIO, encoding: str | None = None) -> "NginxParser":
        """Create a parser decoding a readable byte stream."""
        name = str(getattr(stream, "name", "<stream>"))
        logger.debug(f"Reading configuration stream {name}")
        reader = io.TextIOWrapper(stream, encoding=encoding or DEFAULT_READ_ENCODING, newline="")
        return cls(reader, name=name)

    @classmethod
    def from_bytes(cls, data: bytes, encoding: str | None = None) -> "NginxParser":
        """Create a parser for an in-memory byte buffer."""
        return cls.from_stream(io.BytesIO(data), encoding)

    @classmethod
    def from_string(cls, source: str) -> "NginxParser":
        """Create a parser for literal configuration text."""
        logger.debug(f"Reading configuration text ({len(source)} characters)")
        return cls(io.StringIO(source))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "NginxParser":
        """Create a parser for a sequence of lines joined with newlines."""
        return cls.from_string(LINE_SEPARATOR.join(lines))


def parse_config(source: str) -> list[Statement]:
    """
    Convenience function to parse a configuration string.

    Args:
        source: Configuration source text

    Returns:
        Top-level statements in source order
    """
    with NginxParser.from_string(source) as parser:
        return list(parser.parse())


def parse_config_file(path: str | Path, encoding: str | None = None) -> list[Statement]:
    """
    Parse a configuration file.

    Args:
        path: Path to the configuration file
        encoding: Text encoding, UTF-8 (with optional BOM) by default

    Returns:
        Top-level statements in source order
    """
    with NginxParser.from_file(path, encoding) as parser:
        return list(parser.parse())

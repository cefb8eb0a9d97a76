"""
Tests for the configuration lexer.
"""

import io

from nginx_commander.parser.lexer import (
    CHARACTER_MAP,
    END_OF_INPUT_CHAR,
    Indicator,
    Lexer,
    Token,
    tokenize,
)


def test_directive_tokens() -> None:
    tokens = tokenize("worker_processes 1;")

    assert tokens == [
        Token(0, 16, "worker_processes", " ", Indicator.WHITESPACE),
        Token(17, 18, "1", ";", Indicator.STATEMENT_TERMINATOR),
        Token(19, 19, "", END_OF_INPUT_CHAR, Indicator.END_OF_INPUT),
    ]


def test_empty_input_yields_single_end_token() -> None:
    tokens = tokenize("")

    assert tokens == [Token(0, 0, "", END_OF_INPUT_CHAR, Indicator.END_OF_INPUT)]


def test_unterminated_text_ends_up_in_end_token() -> None:
    tokens = tokenize("listen")

    assert len(tokens) == 1
    assert tokens[0].type is Indicator.END_OF_INPUT
    assert tokens[0].before == "listen"


def test_default_classification() -> None:
    """Every delimiter of the default table produces its indicator."""
    tokens = tokenize("a b\tc\nd;e{f}g#h")

    assert [t.type for t in tokens] == [
        Indicator.WHITESPACE,
        Indicator.WHITESPACE,
        Indicator.NEWLINE,
        Indicator.STATEMENT_TERMINATOR,
        Indicator.BLOCK_START,
        Indicator.BLOCK_END,
        Indicator.COMMENT,
        Indicator.END_OF_INPUT,
    ]
    assert [t.before for t in tokens] == ["a", "b", "c", "d", "e", "f", "g", "h"]


def test_carriage_return_is_dropped_but_counted() -> None:
    tokens = tokenize("a\r\nb")

    assert tokens[0] == Token(0, 2, "a", "\n", Indicator.NEWLINE)
    assert tokens[1] == Token(3, 4, "b", END_OF_INPUT_CHAR, Indicator.END_OF_INPUT)


def test_escaped_delimiter_keeps_marker() -> None:
    tokens = tokenize("a\\;b;")

    assert tokens[0] == Token(0, 4, "a\\;b", ";", Indicator.STATEMENT_TERMINATOR)
    assert tokens[1].type is Indicator.END_OF_INPUT


def test_escaped_backslash() -> None:
    tokens = tokenize("a\\\\b;")

    assert tokens[0].before == "a\\\\b"
    assert tokens[0].type is Indicator.STATEMENT_TERMINATOR


def test_escape_survives_ignored_character() -> None:
    """An ignored character between escape and delimiter does not clear the escape."""
    tokens = tokenize("a\\\r;")

    assert len(tokens) == 1
    assert tokens[0].before == "a\\;"
    assert tokens[0].type is Indicator.END_OF_INPUT


def test_escape_cleared_by_plain_character() -> None:
    tokens = tokenize("\\ab;")

    assert tokens[0].before == "\\ab"
    assert tokens[0].type is Indicator.STATEMENT_TERMINATOR


def test_tokens_are_lazy() -> None:
    reader = io.StringIO("a;b;c;")
    tokens = Lexer(reader).tokenize()

    first = next(tokens)

    assert first.before == "a"
    assert reader.tell() == 2


def test_custom_character_map() -> None:
    character_map = dict(CHARACTER_MAP)
    character_map["|"] = Indicator.STATEMENT_TERMINATOR

    tokens = list(Lexer(io.StringIO("a|b"), character_map))

    assert tokens[0] == Token(0, 1, "a", "|", Indicator.STATEMENT_TERMINATOR)


def test_token_str_includes_diagnostics() -> None:
    token = Token(4, 4, "", "#", Indicator.COMMENT)

    assert str(token) == "4-4 [COMMENT::35] "


def test_is_blank() -> None:
    assert Token(0, 1, "  ", " ", Indicator.WHITESPACE).is_blank
    assert not Token(0, 1, "x", " ", Indicator.WHITESPACE).is_blank

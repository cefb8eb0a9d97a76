"""
Tests for the text renderers.
"""

import pytest

from nginx_commander.parser import (
    Block,
    Comment,
    Directive,
    parse_config,
    pretty_print,
    serialize,
)


TREE = [
    Comment(" c"),
    Directive("user", "nginx"),
    Directive("ip_hash", ""),
    Block("http", "", [
        Directive("sendfile", "on"),
        Block("server", "", [Directive("listen", "80")]),
    ]),
]


def test_serialize() -> None:
    assert serialize(TREE) == (
        "# c\n"
        "user nginx;\n"
        "ip_hash;\n"
        "\n"
        "http {\n"
        "\tsendfile on;\n"
        "\n"
        "\tserver {\n"
        "\t\tlisten 80;\n"
        "\t}\n"
        "}\n"
    )


def test_serialize_custom_indent() -> None:
    text = serialize([Block("events", "", [Directive("worker_connections", "1024")])], indent="  ")

    assert text == "\nevents {\n  worker_connections 1024;\n}\n"


def test_serialize_empty_block() -> None:
    assert serialize([Block("events", "", [])]) == "\nevents {\n\n}\n"


def test_serialize_block_arguments() -> None:
    text = serialize([Block("location", "= /health", [Directive("return", "200")])])

    assert text == "\nlocation = /health {\n\treturn 200;\n}\n"


def test_serialize_starting_level() -> None:
    assert serialize([Directive("a", "1")], level=2) == "\t\ta 1;\n"


def test_serialize_nothing() -> None:
    assert serialize([]) == ""


def test_pretty_print() -> None:
    text = pretty_print([Comment(" c"), Block("http", "", [Directive("sendfile", "on")])])

    assert text == (
        "[CMT]  c\n"
        '[BLK] `http` - ""\n'
        '\t[DIR] `sendfile` - "on"\n'
        "\n"
    )


def test_pretty_print_custom_indent() -> None:
    text = pretty_print([Block("a", "x", [Block("b", "", [])])], indent="..")

    assert text == '[BLK] `a` - "x"\n..[BLK] `b` - ""\n\n\n'


@pytest.mark.parametrize(
    "tree",
    [
        TREE,
        [Directive("", "")],
        [Block("a", "", [Block("b", "", [Block("c", "", [])])])],
        [Block("upstream", "backend", [Comment(" pool"), Directive("server", "10.0.0.1:8080 weight=5")])],
        [Directive("log_format", "main '$remote_addr'\n    '$status'")],
        [Directive("return", "200 x\\;y"), Comment("")],
        [Directive("a", "b\\ ")],
        [Block("location", "/a\\ ", [Directive("root", "\\\t")])],
    ],
)
def test_serialize_parses_back(tree: list) -> None:
    assert parse_config(serialize(tree)) == tree


def test_sample_config_survives_round_trip(sample_config: str) -> None:
    statements = parse_config(sample_config)

    assert parse_config(serialize(statements)) == statements
    assert parse_config(serialize(statements, indent="    ")) == statements

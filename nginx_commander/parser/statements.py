"""
Statement tree for nginx-style configuration.

A configuration is an ordered list of statements. Each statement is one of
exactly three records:

    worker_processes 1;        -> Directive(keyword="worker_processes", arguments="1")
    http { ... }               -> Block(keyword="http", arguments="", statements=[...])
    # managed by ansible       -> Comment(text=" managed by ansible")

``Statement`` is a closed union of these records rather than a class
hierarchy; consumers dispatch with ``isinstance`` and finish with
``assert_never`` so a missing branch is caught by the type checker.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Union


@dataclass
class Directive:
    """A keyword with its argument text, terminated by ``;``."""

    keyword: str
    arguments: str = ""


@dataclass
class Comment:
    """
    A comment running from ``#`` to the end of the line.

    The text excludes the ``#`` marker and the line break but keeps any
    leading whitespace, so ``# hello`` has the text ``" hello"``.
    """

    text: str


@dataclass
class Block:
    """
    A keyword with argument text and a nested, ordered list of statements.

    Examples:
        http { ... }              -> Block("http", "", [...])
        location /api/ { ... }    -> Block("location", "/api/", [...])
    """

    keyword: str
    arguments: str = ""
    statements: list["Statement"] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Block({self.keyword!r}, {self.arguments!r}, statements={len(self.statements)})"

    def get_directive(self, keyword: str) -> Directive | None:
        """Get first direct child directive with given keyword."""
        for statement in self.statements:
            if isinstance(statement, Directive) and statement.keyword == keyword:
                return statement
        return None

    def get_directives(self, keyword: str) -> list[Directive]:
        """Get all direct child directives with given keyword."""
        return [s for s in self.statements if isinstance(s, Directive) and s.keyword == keyword]

    def get_block(self, keyword: str) -> "Block | None":
        """Get first nested block with given keyword."""
        for statement in self.statements:
            if isinstance(statement, Block) and statement.keyword == keyword:
                return statement
        return None

    def get_blocks(self, keyword: str) -> list["Block"]:
        """Get all nested blocks with given keyword."""
        return [s for s in self.statements if isinstance(s, Block) and s.keyword == keyword]

    @property
    def comments(self) -> list[Comment]:
        return [s for s in self.statements if isinstance(s, Comment)]


Statement = Union[Directive, Block, Comment]


def iter_statements(statements: Iterable[Statement]) -> Iterator[Statement]:
    """
    Walk a statement tree depth first, parents before their children.

    Useful for whole-tree queries:
        listens = [s for s in iter_statements(tree)
                   if isinstance(s, Directive) and s.keyword == "listen"]
    """
    for statement in statements:
        yield statement
        if isinstance(statement, Block):
            yield from iter_statements(statement.statements)

"""
Render statement trees as text.

- serialize(): canonical nginx configuration text that parses back into
  the same tree
- pretty_print(): tagged, indented view of the tree for debugging
"""

from typing import Iterable, assert_never

from ..const import DEFAULT_INDENT, LINE_SEPARATOR
from .statements import Block, Comment, Directive, Statement


def _header(keyword: str, arguments: str) -> str:
    if not arguments.strip():
        return keyword
    return f"{keyword} {arguments}"


def serialize(statements: Iterable[Statement], level: int = 0, indent: str = DEFAULT_INDENT) -> str:
    """
    Serialize statements as configuration text.

    Every block is preceded by an empty line and its children are indented
    one level deeper.

    Args:
        statements: Statements to serialize
        level: Nesting depth of the statements
        indent: Indentation unit repeated once per level

    Returns:
        Configuration text, one statement per line
    """
    pad = indent * level
    lines: list[str] = []

    for statement in statements:
        if isinstance(statement, Comment):
            lines.append(f"{pad}#{statement.text}{LINE_SEPARATOR}")
        elif isinstance(statement, Directive):
            lines.append(f"{pad}{_header(statement.keyword, statement.arguments)};{LINE_SEPARATOR}")
        elif isinstance(statement, Block):
            body = serialize(statement.statements, level + 1, indent).rstrip()
            lines.append(LINE_SEPARATOR)
            lines.append(f"{pad}{_header(statement.keyword, statement.arguments)} {{{LINE_SEPARATOR}")
            lines.append(f"{body}{LINE_SEPARATOR}")
            lines.append(f"{pad}}}{LINE_SEPARATOR}")
        else:
            assert_never(statement)

    return "".join(lines)


def pretty_print(statements: Iterable[Statement], level: int = 0, indent: str = DEFAULT_INDENT) -> str:
    """
    Render statements as a tagged debug listing.

    Example:
        [BLK] `http` - ""
            [DIR] `sendfile` - "on"
            [CMT]  gzip disabled
    """
    pad = indent * level
    lines: list[str] = []

    for statement in statements:
        if isinstance(statement, Comment):
            lines.append(f"{pad}[CMT] {statement.text}{LINE_SEPARATOR}")
        elif isinstance(statement, Directive):
            lines.append(f'{pad}[DIR] `{statement.keyword}` - "{statement.arguments}"{LINE_SEPARATOR}')
        elif isinstance(statement, Block):
            lines.append(f'{pad}[BLK] `{statement.keyword}` - "{statement.arguments}"{LINE_SEPARATOR}')
            lines.append(f"{pretty_print(statement.statements, level + 1, indent)}{LINE_SEPARATOR}")
        else:
            assert_never(statement)

    return "".join(lines)

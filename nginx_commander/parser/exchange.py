"""
Flat exchange records for moving statement trees across process boundaries.

Every statement becomes the same record shape:

    {"keyword": "listen", "arguments": "80", "statements": [], "type": "directive"}

Comments carry their text in ``arguments`` and an empty ``keyword``. The
conversion is lossless in both directions.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, assert_never

from ..logging import Loggers
from .errors import ConversionError
from .statements import Block, Comment, Directive, Statement


logger = Loggers.exchange()


class StatementType(Enum):
    """Discriminant of an exchange record."""

    DIRECTIVE = "directive"
    BLOCK = "block"
    COMMENT = "comment"


def _text_field(data: Mapping[str, Any], name: str) -> str:
    value = data.get(name, "")
    if not isinstance(value, str):
        raise ConversionError(f"Exchange record '{name}' must be a string, got {type(value).__name__}")
    return value


@dataclass
class ExchangeStatement:
    """A statement in its flat, transport-friendly form."""

    keyword: str
    arguments: str
    statements: list["ExchangeStatement"] = field(default_factory=list)
    type: StatementType = StatementType.DIRECTIVE

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dict."""
        return {
            "keyword": self.keyword,
            "arguments": self.arguments,
            "statements": [s.to_dict() for s in self.statements],
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ExchangeStatement":
        """
        Create a record from its dict form.

        Raises:
            ConversionError: If the record is not a mapping, its type is unknown,
                or its keyword or arguments are not strings
        """
        if not isinstance(data, Mapping):
            raise ConversionError(f"Exchange record must be an object, got {type(data).__name__}")

        try:
            kind = StatementType(data.get("type"))
        except ValueError:
            raise ConversionError(f"Unknown statement type: {data.get('type')!r}") from None

        children = data.get("statements") or []
        if not isinstance(children, list):
            raise ConversionError("Exchange record 'statements' must be a list")

        return cls(
            keyword=_text_field(data, "keyword"),
            arguments=_text_field(data, "arguments"),
            statements=[cls.from_dict(child) for child in children],
            type=kind,
        )

    def to_statement(self) -> Statement:
        """
        Convert to a tree statement, dispatching on the record type.

        Raises:
            ConversionError: If the record type is not one of the known kinds
        """
        if self.type is StatementType.DIRECTIVE:
            return Directive(self.keyword, self.arguments)
        if self.type is StatementType.BLOCK:
            return Block(self.keyword, self.arguments, [s.to_statement() for s in self.statements])
        if self.type is StatementType.COMMENT:
            return Comment(self.arguments)
        raise ConversionError(f"Unknown statement type: {self.type!r}")

    @classmethod
    def from_statement(cls, statement: Statement) -> "ExchangeStatement":
        """Convert a tree statement into a record."""
        if isinstance(statement, Directive):
            return cls(statement.keyword, statement.arguments, [], StatementType.DIRECTIVE)
        if isinstance(statement, Block):
            return cls(
                statement.keyword,
                statement.arguments,
                [cls.from_statement(s) for s in statement.statements],
                StatementType.BLOCK,
            )
        if isinstance(statement, Comment):
            return cls("", statement.text, [], StatementType.COMMENT)
        assert_never(statement)


def to_exchange(statements: Iterable[Statement]) -> list[ExchangeStatement]:
    """Convert a statement tree into exchange records."""
    return [ExchangeStatement.from_statement(s) for s in statements]


def from_exchange(records: Iterable[ExchangeStatement | Mapping[str, Any]]) -> list[Statement]:
    """
    Convert exchange records back into a statement tree.

    Records may be ExchangeStatement instances or their dict form.

    Raises:
        ConversionError: If a record has an unknown type
    """
    statements: list[Statement] = []
    for record in records:
        if not isinstance(record, ExchangeStatement):
            record = ExchangeStatement.from_dict(record)
        statements.append(record.to_statement())
    return statements


def to_json(statements: Iterable[Statement], indent: int | None = None) -> str:
    """Encode a statement tree as a JSON array of exchange records."""
    records = [record.to_dict() for record in to_exchange(statements)]
    logger.debug(f"Encoding {len(records)} exchange records")
    return json.dumps(records, indent=indent, ensure_ascii=False)


def from_json(text: str) -> list[Statement]:
    """
    Decode a JSON array of exchange records into a statement tree.

    Raises:
        ConversionError: If the payload is not valid JSON, not an array, or
            contains an unknown record type
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConversionError(f"Invalid exchange payload: {e}") from e

    if not isinstance(payload, list):
        raise ConversionError(f"Exchange payload must be an array, got {type(payload).__name__}")

    logger.debug(f"Decoding {len(payload)} exchange records")
    return from_exchange(payload)

"""
Nginx Commander - parse nginx-style configuration into a statement tree and
render it back as configuration text, a debug view or exchange records.
"""

from .const import APP_VERSION
from .parser import (
    Block,
    Comment,
    ConversionError,
    Directive,
    ExchangeStatement,
    NginxCommanderError,
    NginxParser,
    ParseError,
    Statement,
    StatementType,
    from_exchange,
    from_json,
    parse_config,
    parse_config_file,
    pretty_print,
    serialize,
    to_exchange,
    to_json,
)

__version__ = APP_VERSION

__all__ = [
    "__version__",
    "Block",
    "Comment",
    "ConversionError",
    "Directive",
    "ExchangeStatement",
    "NginxCommanderError",
    "NginxParser",
    "ParseError",
    "Statement",
    "StatementType",
    "from_exchange",
    "from_json",
    "parse_config",
    "parse_config_file",
    "pretty_print",
    "serialize",
    "to_exchange",
    "to_json",
]

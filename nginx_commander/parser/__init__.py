"""
Configuration parsing module with nginx-style syntax support.
"""

from .errors import ConversionError, NginxCommanderError, ParseError
from .exchange import (
    ExchangeStatement,
    StatementType,
    from_exchange,
    from_json,
    to_exchange,
    to_json,
)
from .lexer import CHARACTER_MAP, Indicator, Lexer, Token, tokenize
from .parser import NginxParser, parse_config, parse_config_file
from .render import pretty_print, serialize
from .statements import Block, Comment, Directive, Statement, iter_statements

__all__ = [
    "CHARACTER_MAP",
    "Block",
    "Comment",
    "ConversionError",
    "Directive",
    "ExchangeStatement",
    "Indicator",
    "Lexer",
    "NginxCommanderError",
    "NginxParser",
    "ParseError",
    "Statement",
    "StatementType",
    "Token",
    "from_exchange",
    "from_json",
    "iter_statements",
    "parse_config",
    "parse_config_file",
    "pretty_print",
    "serialize",
    "to_exchange",
    "to_json",
    "tokenize",
]

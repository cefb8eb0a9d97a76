"""
Exceptions raised while parsing and converting configuration.
"""

from .lexer import Token


class NginxCommanderError(Exception):
    """Base class for all errors raised by this package."""


class ParseError(NginxCommanderError):
    """
    Exception raised for malformed input.

    A parse error aborts the whole parse; there is no partial result. The
    offending token is kept for diagnostics and its offsets, delimiter code
    and indicator are included in the message.
    """

    def __init__(self, message: str, token: Token | None = None):
        self.reason = message
        self.token = token
        if token:
            super().__init__(f"{message} Token: {token}")
        else:
            super().__init__(message)


class ConversionError(NginxCommanderError):
    """Exception raised when an exchange record cannot be converted."""

from __future__ import annotations


class StonksError(Exception):
    """Base class for errors raised by stonks."""


class RowParseError(StonksError, ValueError):
    """A single transaction row could not be turned into a Trade."""

    def __init__(self, message: str, line_no: int | None = None) -> None:
        super().__init__(message)
        self.line_no = line_no


class FileAccessError(StonksError, OSError):
    """The transactions file is missing or unreadable."""


class ConfigLoadError(StonksError):
    """The configuration file is missing or invalid; defaults apply."""


class DivisionUndefined(StonksError, ArithmeticError):
    """Average cost was requested on a fully closed position."""

from __future__ import annotations


class MatchingError(Exception):
    """Base class for errors raised by the matching domain."""


class InvalidItemError(MatchingError, ValueError):
    """Raised when a record cannot be turned into an Item (missing id/type, unknown type)."""


class DateParseError(MatchingError, ValueError):
    """Raised by parse_item_date when a value is not a calendar date."""

"""
Exceptions raised while parsing playlists.

Every error derives from PlaylistError, itself a ValueError, so callers that
only care about "invalid content" can catch ValueError.
"""

from __future__ import annotations


class PlaylistError(ValueError):
    """Base class for all playlist parsing errors."""


class LexError(PlaylistError):
    def __init__(self, text: str, line: int, column: int):
        self.text = text
        self.line = line
        self.column = column
        super().__init__(text, line, column)

    def __str__(self):
        return "Unrecognized input on line %d, column %d: %r" % (self.line, self.column, self.text)


class InvalidEncoding(PlaylistError):
    def __str__(self):
        return "Playlist content is not valid UTF-8"


class FieldError(PlaylistError):
    """An error attributed to a single playlist field."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(field)

    def __str__(self):
        return "Invalid field: %s" % self.field


class MissingValue(FieldError):
    def __str__(self):
        return "Missing or invalid value for %s" % self.field


class InvalidEnumeration(FieldError):
    def __init__(self, field: str, value):
        self.value = value
        super().__init__(field)
        self.args = (field, value)

    def __str__(self):
        return "Invalid value for %s: %r is not a known member" % (self.field, self.value)


class InvalidValue(FieldError):
    def __init__(self, field: str, value):
        self.value = value
        super().__init__(field)
        self.args = (field, value)

    def __str__(self):
        return "Value out of range for %s: %r" % (self.field, self.value)


class _TokenError(PlaylistError):
    message = "Unexpected token"

    def __init__(self, token):
        self.token = token
        super().__init__(token)

    def __str__(self):
        return "%s: %s" % (self.message, self.token)


class InvalidVariantStream(_TokenError):
    message = "Invalid variant stream"


class InvalidFrameStream(_TokenError):
    message = "Invalid frame stream"


class UnexpectedToken(_TokenError):
    message = "Unexpected token"


def check_unsigned(field: str, value: int, bits: int) -> int:
    """Return ``value`` if it fits an unsigned integer of ``bits`` bits."""
    if not 0 <= value < 1 << bits:
        raise InvalidValue(field, value)
    return value

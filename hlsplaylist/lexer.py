"""
Lexical scanner for Extended M3U8 playlists.

The scanner turns a complete text buffer into a flat stream of classified
tokens, in source order, skipping whitespace and comment lines. Literal
values (numbers, byte ranges, resolutions, enumerations) are converted while
scanning, so parsers never reinterpret raw text.

Tokens are produced lazily by :func:`tokenize` and consumed through a
:class:`TokenCursor`, which gives the parsers bounded lookahead without
rescanning.
"""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from hlsplaylist import protocol
from hlsplaylist.errors import InvalidEncoding, LexError, MissingValue
from hlsplaylist.model import ByteRange, EncryptionMethod, PlaylistType, Resolution


class TokenKind(Enum):
    # structural tags
    EXTM3U = auto()
    ENDLIST = auto()
    TARGET_DURATION = auto()
    VERSION = auto()
    MEDIA_SEQUENCE = auto()
    KEY = auto()
    ALLOW_CACHE = auto()
    PLAYLIST_TYPE = auto()
    I_FRAMES_ONLY = auto()
    SEGMENT_INFO = auto()
    BYTE_RANGE_TAG = auto()
    STREAM_INF = auto()
    I_FRAME_STREAM_INF = auto()
    UNKNOWN_TAG = auto()

    # attribute keywords
    METHOD = auto()
    URI_ATTRIBUTE = auto()
    PROGRAM_ID = auto()
    BANDWIDTH = auto()
    RESOLUTION = auto()
    FRAME_RATE = auto()
    CODECS = auto()
    UNKNOWN_ATTRIBUTE = auto()

    # punctuation
    EQUALS = auto()
    COMMA = auto()
    COLON = auto()

    # literals
    FLOAT = auto()
    INTEGER = auto()
    STRING = auto()
    METHOD_VALUE = auto()
    BOOLEAN = auto()
    BYTE_RANGE = auto()
    PLAYLIST_TYPE_VALUE = auto()
    RESOLUTION_VALUE = auto()
    URI = auto()
    ENUMERATED = auto()


PUNCTUATION = frozenset((TokenKind.EQUALS, TokenKind.COMMA, TokenKind.COLON))


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any = None

    def __str__(self):
        if self.value is None:
            return self.kind.name
        return "%s(%r)" % (self.kind.name, self.value)


TAGS = {
    protocol.extm3u: TokenKind.EXTM3U,
    protocol.ext_x_endlist: TokenKind.ENDLIST,
    protocol.ext_x_targetduration: TokenKind.TARGET_DURATION,
    protocol.ext_x_version: TokenKind.VERSION,
    protocol.ext_x_media_sequence: TokenKind.MEDIA_SEQUENCE,
    protocol.ext_x_key: TokenKind.KEY,
    protocol.ext_x_allow_cache: TokenKind.ALLOW_CACHE,
    protocol.ext_x_playlist_type: TokenKind.PLAYLIST_TYPE,
    protocol.ext_x_i_frames_only: TokenKind.I_FRAMES_ONLY,
    protocol.extinf: TokenKind.SEGMENT_INFO,
    protocol.ext_x_byterange: TokenKind.BYTE_RANGE_TAG,
    protocol.ext_x_stream_inf: TokenKind.STREAM_INF,
    protocol.ext_x_i_frame_stream_inf: TokenKind.I_FRAME_STREAM_INF,
}

ATTRIBUTES = {
    protocol.attr_method: TokenKind.METHOD,
    protocol.attr_uri: TokenKind.URI_ATTRIBUTE,
    protocol.attr_program_id: TokenKind.PROGRAM_ID,
    protocol.attr_bandwidth: TokenKind.BANDWIDTH,
    protocol.attr_resolution: TokenKind.RESOLUTION,
    protocol.attr_frame_rate: TokenKind.FRAME_RATE,
    protocol.attr_codecs: TokenKind.CODECS,
}

_BOUNDARY = r"(?![^\s,])"

_whitespace_re = re.compile(r"[ \t\r\n\f\ufeff]+")
_token_re = re.compile(
    rf"""
        (?P<comment>\#(?!EXT)[^\r\n]*)
        |(?P<tag>\#EXT[^:\s]*)
        |(?P<attribute>[A-Z0-9-]+)(?==)
        |(?P<uri>https?://\S+)
        |(?P<method>AES-128|SAMPLE-AES|NONE){_BOUNDARY}
        |(?P<boolean>YES|NO){_BOUNDARY}
        |(?P<playlist_type>VOD|EVENT){_BOUNDARY}
        |(?P<byte_range>(?P<length>\d+)@(?P<offset>\d+)){_BOUNDARY}
        |(?P<resolution>(?P<width>\d+)x(?P<height>\d+)){_BOUNDARY}
        |(?P<float>\d+\.\d+){_BOUNDARY}
        |(?P<integer>\d+){_BOUNDARY}
        |"(?P<string>[^"]*)"
        |(?P<enumerated>[A-Z][A-Z0-9_-]*){_BOUNDARY}
        |(?P<equals>=)
        |(?P<comma>,)
        |(?P<colon>:)
    """,
    re.VERBOSE,
)
# a line that is neither a tag nor a comment is a URI
_uri_line_re = re.compile(r"[^#\s]\S*")
_rest_of_line_re = re.compile(r"[^\r\n]*")
_unknown_attribute_value_re = re.compile(r'="(?P<quoted>[^"]*)"|=(?P<raw>[^,\s]*)')
_error_slice_re = re.compile(r"[^\s,]+|.", re.DOTALL)


def _decode(content: str | bytes) -> str:
    if isinstance(content, str):
        return content
    try:
        return bytes(content).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncoding() from exc


def _lex_error(content: str, pos: int) -> LexError:
    text = _error_slice_re.match(content, pos).group()
    line = content.count("\n", 0, pos) + 1
    column = pos - content.rfind("\n", 0, pos)
    return LexError(text, line, column)


def tokenize(content: str | bytes) -> Iterator[Token]:
    """
    Scan playlist content into tokens.

    Tokens are produced on demand. A LexError is raised, at the point the
    stream reaches it, for the first slice of input no rule recognizes.
    """
    content = _decode(content)
    pos = 0
    end = len(content)

    while True:
        at_line_start = pos == 0
        match = _whitespace_re.match(content, pos)
        if match:
            pos = match.end()
            at_line_start = at_line_start or "\n" in match.group() or "\r" in match.group()
        if pos >= end:
            return

        match = at_line_start and _uri_line_re.match(content, pos)
        if match:
            pos = match.end()
            yield Token(TokenKind.URI, match.group())
            continue

        match = _token_re.match(content, pos)
        if match is None:
            raise _lex_error(content, pos)
        pos = match.end()
        rule = match.lastgroup

        if rule == "comment":
            continue

        if rule == "tag":
            name = match.group("tag")
            kind = TAGS.get(name)
            if kind is not None:
                yield Token(kind, name)
                continue
            # unknown tags are carried whole, so their bodies never need lexing
            rest = _rest_of_line_re.match(content, pos)
            pos = rest.end()
            yield Token(TokenKind.UNKNOWN_TAG, name + rest.group())
            continue

        if rule == "attribute":
            name = match.group("attribute")
            kind = ATTRIBUTES.get(name)
            if kind is not None:
                yield Token(kind, name)
                continue
            value = _unknown_attribute_value_re.match(content, pos)
            pos = value.end()
            raw = value.group("quoted") if value.group("quoted") is not None else value.group("raw")
            yield Token(TokenKind.UNKNOWN_ATTRIBUTE, (name, raw))
            continue

        if rule == "uri":
            yield Token(TokenKind.URI, match.group(rule))
        elif rule == "method":
            yield Token(TokenKind.METHOD_VALUE, EncryptionMethod(match.group(rule)))
        elif rule == "boolean":
            yield Token(TokenKind.BOOLEAN, match.group(rule) == "YES")
        elif rule == "playlist_type":
            yield Token(TokenKind.PLAYLIST_TYPE_VALUE, PlaylistType(match.group(rule)))
        elif rule == "byte_range":
            yield Token(
                TokenKind.BYTE_RANGE,
                ByteRange(int(match.group("length")), int(match.group("offset"))),
            )
        elif rule == "resolution":
            yield Token(
                TokenKind.RESOLUTION_VALUE,
                Resolution(int(match.group("width")), int(match.group("height"))),
            )
        elif rule == "float":
            yield Token(TokenKind.FLOAT, float(match.group(rule)))
        elif rule == "integer":
            yield Token(TokenKind.INTEGER, int(match.group(rule)))
        elif rule == "string":
            yield Token(TokenKind.STRING, match.group(rule))
        elif rule == "enumerated":
            yield Token(TokenKind.ENUMERATED, match.group(rule))
        elif rule == "equals":
            yield Token(TokenKind.EQUALS)
        elif rule == "comma":
            yield Token(TokenKind.COMMA)
        else:
            yield Token(TokenKind.COLON)


class TokenCursor:
    """
    Forward-only cursor over a token stream with bounded lookahead.

    Tokens that have been peeked at are buffered, so lookahead never rescans
    the input.
    """

    def __init__(self, tokens: Iterable[Token]):
        self._tokens = iter(tokens)
        self._buffer: deque[Token] = deque()

    def __iter__(self):
        return self

    def __next__(self) -> Token:
        if self._buffer:
            return self._buffer.popleft()
        return next(self._tokens)

    def peek(self, n: int = 0) -> Token | None:
        """Return the token ``n`` positions ahead without consuming anything."""
        while len(self._buffer) <= n:
            token = next(self._tokens, None)
            if token is None:
                return None
            self._buffer.append(token)
        return self._buffer[n]

    def nth(self, n: int) -> Token | None:
        """Skip ``n`` tokens, then consume and return the next one."""
        for _ in range(n):
            if next(self, None) is None:
                return None
        return next(self, None)

    def expect(self, n: int, kinds: TokenKind | tuple[TokenKind, ...], field: str) -> Token:
        """
        Like :meth:`nth`, but the token must be of one of ``kinds``.

        Raises MissingValue naming ``field`` on end of input or a token of
        another kind.
        """
        if isinstance(kinds, TokenKind):
            kinds = (kinds,)
        token = self.nth(n)
        if token is None or token.kind not in kinds:
            raise MissingValue(field)
        return token

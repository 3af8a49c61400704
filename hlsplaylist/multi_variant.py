"""
Parser for Multi-Variant Playlists, which list the alternative renditions of
some content together with its I-frame streams.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from hlsplaylist.errors import (
    InvalidFrameStream,
    InvalidValue,
    InvalidVariantStream,
    MissingValue,
    UnexpectedToken,
    check_unsigned,
)
from hlsplaylist.lexer import PUNCTUATION, Token, TokenCursor, TokenKind, tokenize
from hlsplaylist.model import FrameStream, MultiVariantPlaylist, Resolution, VariantStream


log = logging.getLogger(__name__)


def _bandwidth(cursor: TokenCursor) -> int:
    value = cursor.expect(1, TokenKind.INTEGER, "bandwidth").value
    return check_unsigned("bandwidth", value, 32)


def _resolution(cursor: TokenCursor) -> Resolution:
    value = cursor.expect(1, TokenKind.RESOLUTION_VALUE, "resolution").value
    check_unsigned("resolution width", value.width, 16)
    check_unsigned("resolution height", value.height, 16)
    return value


def _codecs(cursor: TokenCursor) -> str:
    return cursor.expect(1, TokenKind.STRING, "codecs").value


class MultiVariantParser:
    """
    Single-pass parser building a MultiVariantPlaylist from a token stream.

    Only #EXT-X-STREAM-INF and #EXT-X-I-FRAME-STREAM-INF open a sub-parse of
    their attribute list; every other token at document level is skipped.
    Unknown attributes inside either attribute list are logged and skipped,
    or raise UnexpectedToken when ``strict`` is set.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def parse(self, content: str | bytes) -> MultiVariantPlaylist:
        return self.parse_tokens(tokenize(content))

    def parse_tokens(self, tokens: Iterable[Token]) -> MultiVariantPlaylist:
        playlist = MultiVariantPlaylist()
        cursor = TokenCursor(tokens)

        for token in cursor:
            if token.kind is TokenKind.STREAM_INF:
                playlist.variant_streams.append(self._parse_variant_stream(cursor))
            elif token.kind is TokenKind.I_FRAME_STREAM_INF:
                playlist.frame_streams.append(self._parse_frame_stream(cursor))
            elif token.kind is TokenKind.UNKNOWN_TAG:
                if self.strict:
                    raise UnexpectedToken(token)
                log.debug("Ignoring unknown tag: %s", token.value)

        return playlist

    def _unknown_attribute(self, token: Token, tag: str):
        if self.strict:
            raise UnexpectedToken(token)
        name, value = token.value
        log.warning("Ignoring unknown %s attribute: %s=%s", tag, name, value)

    def _parse_variant_stream(self, cursor: TokenCursor) -> VariantStream:
        program_id = None
        bandwidth = None
        resolution = None
        frame_rate = None
        codecs = None

        for token in cursor:
            kind = token.kind
            if kind in PUNCTUATION:
                continue

            if kind is TokenKind.PROGRAM_ID:
                value = cursor.nth(1)
                if value is not None and value.kind is TokenKind.INTEGER:
                    try:
                        program_id = check_unsigned("program id", value.value, 8)
                    except InvalidValue:
                        log.debug("Ignoring out of range program id: %d", value.value)
            elif kind is TokenKind.BANDWIDTH:
                bandwidth = _bandwidth(cursor)
            elif kind is TokenKind.RESOLUTION:
                resolution = _resolution(cursor)
            elif kind is TokenKind.FRAME_RATE:
                frame_rate = float(
                    cursor.expect(1, (TokenKind.FLOAT, TokenKind.INTEGER), "frame rate").value
                )
            elif kind is TokenKind.CODECS:
                codecs = _codecs(cursor)
            elif kind is TokenKind.UNKNOWN_ATTRIBUTE:
                self._unknown_attribute(token, "variant stream")
            elif kind is TokenKind.URI:
                if bandwidth is None:
                    raise MissingValue("bandwidth")
                if resolution is None:
                    raise MissingValue("resolution")
                return VariantStream(
                    bandwidth=bandwidth,
                    resolution=resolution,
                    uri=token.value,
                    program_id=program_id,
                    frame_rate=frame_rate,
                    codecs=codecs,
                )
            else:
                raise InvalidVariantStream(token)

        raise MissingValue("variant stream uri")

    def _parse_frame_stream(self, cursor: TokenCursor) -> FrameStream:
        bandwidth = None
        resolution = None
        codecs = None

        for token in cursor:
            kind = token.kind
            if kind in PUNCTUATION:
                continue

            if kind is TokenKind.BANDWIDTH:
                bandwidth = _bandwidth(cursor)
            elif kind is TokenKind.RESOLUTION:
                resolution = _resolution(cursor)
            elif kind is TokenKind.CODECS:
                codecs = _codecs(cursor)
            elif kind is TokenKind.UNKNOWN_ATTRIBUTE:
                self._unknown_attribute(token, "frame stream")
            elif kind is TokenKind.URI_ATTRIBUTE:
                uri = cursor.expect(1, TokenKind.STRING, "frame stream uri").value
                if bandwidth is None:
                    raise MissingValue("bandwidth")
                if resolution is None:
                    raise MissingValue("resolution")
                if codecs is None:
                    raise MissingValue("codecs")
                return FrameStream(bandwidth=bandwidth, resolution=resolution, codecs=codecs, uri=uri)
            else:
                raise InvalidFrameStream(token)

        raise MissingValue("frame stream uri")


def parse_multi_variant_playlist(content: str | bytes, strict: bool = False) -> MultiVariantPlaylist:
    """
    Given the text of a multi-variant playlist, returns a MultiVariantPlaylist.
    Raises a PlaylistError (a ValueError) on the first invalid stream.
    """
    return MultiVariantParser(strict=strict).parse(content)

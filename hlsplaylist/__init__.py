"""
Typed parsing of HTTP Live Streaming (HLS) playlists.

A playlist is scanned into tokens by :mod:`hlsplaylist.lexer` and assembled
by one of two single-pass parsers: one for media playlists (a list of
segments) and one for multi-variant playlists (a list of renditions).
"""

from __future__ import annotations

import logging

from hlsplaylist.convert import to_dict
from hlsplaylist.errors import (
    FieldError,
    InvalidEncoding,
    InvalidEnumeration,
    InvalidFrameStream,
    InvalidValue,
    InvalidVariantStream,
    LexError,
    MissingValue,
    PlaylistError,
    UnexpectedToken,
)
from hlsplaylist.lexer import Token, TokenKind, tokenize
from hlsplaylist.media_playlist import MediaPlaylistParser, parse_media_playlist
from hlsplaylist.model import (
    ByteRange,
    EncryptionMethod,
    FrameStream,
    Key,
    MediaPlaylist,
    MediaSegment,
    MultiVariantPlaylist,
    PlaylistType,
    Resolution,
    VariantStream,
)
from hlsplaylist.multi_variant import MultiVariantParser, parse_multi_variant_playlist

__version__ = "0.1.0"

__all__ = (
    "ByteRange",
    "EncryptionMethod",
    "FieldError",
    "FrameStream",
    "InvalidEncoding",
    "InvalidEnumeration",
    "InvalidFrameStream",
    "InvalidValue",
    "InvalidVariantStream",
    "Key",
    "LexError",
    "MediaPlaylist",
    "MediaPlaylistParser",
    "MediaSegment",
    "MissingValue",
    "MultiVariantParser",
    "MultiVariantPlaylist",
    "PlaylistError",
    "PlaylistType",
    "Resolution",
    "Token",
    "TokenKind",
    "UnexpectedToken",
    "VariantStream",
    "parse",
    "parse_media_playlist",
    "parse_multi_variant_playlist",
    "to_dict",
    "tokenize",
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

_VARIANT_TAGS = (TokenKind.STREAM_INF, TokenKind.I_FRAME_STREAM_INF)


def parse(content: str | bytes, strict: bool = False) -> MediaPlaylist | MultiVariantPlaylist:
    """
    Parse a playlist of either kind.

    A playlist containing #EXT-X-STREAM-INF or #EXT-X-I-FRAME-STREAM-INF is
    parsed as a multi-variant playlist, anything else as a media playlist.
    Scanning stops at #EXT-X-ENDLIST, so trailing input is never lexed.
    """
    tokens = []
    for token in tokenize(content):
        tokens.append(token)
        if token.kind is TokenKind.ENDLIST:
            break
    if any(token.kind in _VARIANT_TAGS for token in tokens):
        return MultiVariantParser(strict=strict).parse_tokens(tokens)
    return MediaPlaylistParser(strict=strict).parse_tokens(tokens)

"""
Parser for Media Playlists: the ordered list of segments of one rendition.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from hlsplaylist.errors import InvalidEnumeration, MissingValue, UnexpectedToken, check_unsigned
from hlsplaylist.lexer import Token, TokenCursor, TokenKind, tokenize
from hlsplaylist.model import Key, MediaPlaylist, MediaSegment


log = logging.getLogger(__name__)


def enumeration_value(token: Token | None, kind: TokenKind, field: str):
    """
    Return the value of an enumeration token.

    A bare enumerated string or a quoted string in place of a known member
    is an InvalidEnumeration, anything else a MissingValue.
    """
    if token is None:
        raise MissingValue(field)
    if token.kind is kind:
        return token.value
    if token.kind in (TokenKind.ENUMERATED, TokenKind.STRING):
        raise InvalidEnumeration(field, token.value)
    raise MissingValue(field)


def _peek_byte_range(cursor: TokenCursor) -> Token | None:
    """Return the byte range three tokens ahead, without looking past #EXT-X-ENDLIST."""
    for n in range(4):
        token = cursor.peek(n)
        if token is None or token.kind is TokenKind.ENDLIST:
            return None
    return token if token.kind is TokenKind.BYTE_RANGE else None


class MediaPlaylistParser:
    """
    Single-pass parser building a MediaPlaylist from a token stream.

    Each recognized tag consumes a bounded number of the tokens that follow
    it. Tokens that do not start a known tag are skipped, which keeps
    documents using newer tags parseable. With ``strict`` set, unknown tags
    raise UnexpectedToken instead.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def parse(self, content: str | bytes) -> MediaPlaylist:
        return self.parse_tokens(tokenize(content))

    def parse_tokens(self, tokens: Iterable[Token]) -> MediaPlaylist:
        playlist = MediaPlaylist()
        cursor = TokenCursor(tokens)

        for token in cursor:
            if token.kind is TokenKind.ENDLIST:
                break
            handler = self._TAGS.get(token.kind)
            if handler is None:
                self._ignore(token)
                continue
            handler(self, cursor, playlist)

        return playlist

    def _ignore(self, token: Token):
        if token.kind is TokenKind.UNKNOWN_TAG:
            if self.strict:
                raise UnexpectedToken(token)
            log.debug("Ignoring unknown tag: %s", token.value)

    def _parse_version(self, cursor: TokenCursor, playlist: MediaPlaylist):
        value = cursor.expect(1, TokenKind.INTEGER, "version").value
        playlist.version = check_unsigned("version", value, 8)

    def _parse_media_sequence(self, cursor: TokenCursor, playlist: MediaPlaylist):
        value = cursor.expect(1, TokenKind.INTEGER, "media sequence").value
        playlist.media_sequence = check_unsigned("media sequence", value, 32)

    def _parse_target_duration(self, cursor: TokenCursor, playlist: MediaPlaylist):
        value = cursor.expect(1, TokenKind.INTEGER, "target duration").value
        playlist.target_duration = check_unsigned("target duration", value, 32)

    def _parse_allow_cache(self, cursor: TokenCursor, playlist: MediaPlaylist):
        playlist.allow_cache = cursor.expect(1, TokenKind.BOOLEAN, "allow cache").value

    def _parse_playlist_type(self, cursor: TokenCursor, playlist: MediaPlaylist):
        playlist.playlist_type = enumeration_value(
            cursor.nth(1), TokenKind.PLAYLIST_TYPE_VALUE, "playlist type"
        )

    def _parse_i_frames_only(self, cursor: TokenCursor, playlist: MediaPlaylist):
        playlist.iframes_only = True

    def _parse_key(self, cursor: TokenCursor, playlist: MediaPlaylist):
        # :METHOD=<method>,URI="<uri>"
        method = enumeration_value(cursor.nth(3), TokenKind.METHOD_VALUE, "key method")
        uri = cursor.expect(3, TokenKind.STRING, "key uri").value
        playlist.key = Key(method=method, uri=uri)

    def _parse_segment_info(self, cursor: TokenCursor, playlist: MediaPlaylist):
        duration = cursor.expect(1, (TokenKind.FLOAT, TokenKind.INTEGER), "segment duration").value

        # ,#EXT-X-BYTERANGE:<length>@<offset>
        byte_range = None
        consumed_byte_range = False
        candidate = _peek_byte_range(cursor)
        if candidate is not None:
            cursor.nth(3)
            consumed_byte_range = True
            if playlist.iframes_only:
                byte_range = candidate.value
            else:
                log.debug("Dropping byte range %s outside of an I-frames-only playlist", candidate.value)

        url = cursor.expect(0 if consumed_byte_range else 1, TokenKind.URI, "segment uri").value
        playlist.segments.append(MediaSegment(duration=float(duration), url=url, byte_range=byte_range))

    _TAGS = {
        TokenKind.VERSION: _parse_version,
        TokenKind.MEDIA_SEQUENCE: _parse_media_sequence,
        TokenKind.TARGET_DURATION: _parse_target_duration,
        TokenKind.ALLOW_CACHE: _parse_allow_cache,
        TokenKind.PLAYLIST_TYPE: _parse_playlist_type,
        TokenKind.I_FRAMES_ONLY: _parse_i_frames_only,
        TokenKind.KEY: _parse_key,
        TokenKind.SEGMENT_INFO: _parse_segment_info,
    }


def parse_media_playlist(content: str | bytes, strict: bool = False) -> MediaPlaylist:
    """
    Given the text of a media playlist, returns a MediaPlaylist.
    Raises a PlaylistError (a ValueError) on the first invalid field.
    """
    return MediaPlaylistParser(strict=strict).parse(content)

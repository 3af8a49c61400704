"""
Typed structures produced by the playlist parsers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class PlaylistType(Enum):
    VOD = "VOD"
    EVENT = "EVENT"


class EncryptionMethod(Enum):
    AES_128 = "AES-128"
    SAMPLE_AES = "SAMPLE-AES"
    NONE = "NONE"


class ByteRange(NamedTuple):
    """A sub-range of a resource, written ``<length>@<offset>``."""

    length: int
    offset: int


class Resolution(NamedTuple):
    width: int
    height: int

    def __str__(self):
        return "%dx%d" % (self.width, self.height)


@dataclass
class Key:
    """Encryption key applying to the segments of a media playlist."""

    method: EncryptionMethod
    uri: str


@dataclass
class MediaSegment:
    duration: float
    """Playback duration in fractional seconds, from #EXTINF."""

    url: str

    byte_range: ByteRange | None = None
    """Only captured for I-frame playlists."""


@dataclass
class MediaPlaylist:
    """An ordered list of media segments composing one rendition."""

    version: int = 0
    media_sequence: int = 0
    key: Key | None = None
    allow_cache: bool = True
    target_duration: int = 0
    playlist_type: PlaylistType = PlaylistType.EVENT
    iframes_only: bool = False
    segments: list[MediaSegment] = field(default_factory=list)


@dataclass
class VariantStream:
    """One alternative encoding listed by #EXT-X-STREAM-INF."""

    bandwidth: int
    """Peak bitrate in bits per second."""

    resolution: Resolution
    uri: str
    program_id: int | None = None
    frame_rate: float | None = None
    codecs: str | None = None


@dataclass
class FrameStream:
    """A keyframe-only stream listed by #EXT-X-I-FRAME-STREAM-INF."""

    bandwidth: int
    resolution: Resolution
    codecs: str
    uri: str


@dataclass
class MultiVariantPlaylist:
    variant_streams: list[VariantStream] = field(default_factory=list)
    frame_streams: list[FrameStream] = field(default_factory=list)

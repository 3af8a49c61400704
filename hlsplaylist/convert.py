"""
Conversion of parsed playlists into plain Python dictionaries.

The dictionaries only hold str, int, float, bool, list and dict values, so
they can be handed directly to json.dumps. Optional values that were not
present in the playlist are left out.
"""

from __future__ import annotations

from hlsplaylist.model import (
    FrameStream,
    Key,
    MediaPlaylist,
    MediaSegment,
    MultiVariantPlaylist,
    VariantStream,
)


def _convert_key(key: Key | None) -> dict | None:
    """Convert a Key to a Python dict, or return None if there is no key."""
    if key is None:
        return None
    return {"method": key.method.value, "uri": key.uri}


def _convert_segment(segment: MediaSegment) -> dict:
    """Convert a MediaSegment to a Python dict."""
    result = {
        "duration": segment.duration,
        "uri": segment.url,
    }

    if segment.byte_range is not None:
        result["byterange"] = {
            "length": segment.byte_range.length,
            "offset": segment.byte_range.offset,
        }

    return result


def _convert_variant_stream(stream: VariantStream) -> dict:
    """Convert a VariantStream to a Python dict."""
    stream_info = {
        "bandwidth": stream.bandwidth,
        "resolution": str(stream.resolution),
    }

    if stream.program_id is not None:
        stream_info["program_id"] = stream.program_id

    if stream.frame_rate is not None:
        stream_info["frame_rate"] = stream.frame_rate

    if stream.codecs is not None:
        stream_info["codecs"] = stream.codecs

    return {
        "uri": stream.uri,
        "stream_info": stream_info,
    }


def _convert_frame_stream(stream: FrameStream) -> dict:
    """Convert a FrameStream to a Python dict."""
    return {
        "uri": stream.uri,
        "iframe_stream_info": {
            "bandwidth": stream.bandwidth,
            "resolution": str(stream.resolution),
            "codecs": stream.codecs,
        },
    }


def media_playlist_to_dict(playlist: MediaPlaylist) -> dict:
    data = {
        "version": playlist.version,
        "media_sequence": playlist.media_sequence,
        "allow_cache": playlist.allow_cache,
        "targetduration": playlist.target_duration,
        "playlist_type": playlist.playlist_type.value,
        "is_i_frames_only": playlist.iframes_only,
        "segments": [_convert_segment(segment) for segment in playlist.segments],
    }

    key = _convert_key(playlist.key)
    if key is not None:
        data["key"] = key

    return data


def multi_variant_to_dict(playlist: MultiVariantPlaylist) -> dict:
    return {
        "playlists": [_convert_variant_stream(stream) for stream in playlist.variant_streams],
        "iframe_playlists": [_convert_frame_stream(stream) for stream in playlist.frame_streams],
    }


def to_dict(playlist: MediaPlaylist | MultiVariantPlaylist) -> dict:
    """
    Convert either kind of parsed playlist into a dictionary.

    Raises:
        TypeError: If ``playlist`` is not a parsed playlist.
    """
    if isinstance(playlist, MediaPlaylist):
        return media_playlist_to_dict(playlist)
    if isinstance(playlist, MultiVariantPlaylist):
        return multi_variant_to_dict(playlist)
    raise TypeError("Expected a MediaPlaylist or MultiVariantPlaylist, got %s" % type(playlist).__name__)

"""Literal tag and attribute names of the Extended M3U8 format."""

extm3u = "#EXTM3U"
extinf = "#EXTINF"
ext_x_endlist = "#EXT-X-ENDLIST"
ext_x_targetduration = "#EXT-X-TARGETDURATION"
ext_x_version = "#EXT-X-VERSION"
ext_x_media_sequence = "#EXT-X-MEDIA-SEQUENCE"
ext_x_key = "#EXT-X-KEY"
ext_x_allow_cache = "#EXT-X-ALLOW-CACHE"
ext_x_playlist_type = "#EXT-X-PLAYLIST-TYPE"
ext_x_i_frames_only = "#EXT-X-I-FRAMES-ONLY"
ext_x_byterange = "#EXT-X-BYTERANGE"
ext_x_stream_inf = "#EXT-X-STREAM-INF"
ext_x_i_frame_stream_inf = "#EXT-X-I-FRAME-STREAM-INF"

attr_method = "METHOD"
attr_uri = "URI"
attr_program_id = "PROGRAM-ID"
attr_bandwidth = "BANDWIDTH"
attr_resolution = "RESOLUTION"
attr_frame_rate = "FRAME-RATE"
attr_codecs = "CODECS"

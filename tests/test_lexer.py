import pytest

from hlsplaylist.errors import InvalidEncoding, LexError, MissingValue
from hlsplaylist.lexer import Token, TokenCursor, TokenKind, tokenize
from hlsplaylist.model import ByteRange, EncryptionMethod, PlaylistType, Resolution


def kinds(content):
    return [token.kind for token in tokenize(content)]


def test_key_line_tokens():
    tokens = list(tokenize('#EXT-X-KEY:METHOD=AES-128,URI="https://example.com/mon.key"'))

    assert tokens == [
        Token(TokenKind.KEY, "#EXT-X-KEY"),
        Token(TokenKind.COLON),
        Token(TokenKind.METHOD, "METHOD"),
        Token(TokenKind.EQUALS),
        Token(TokenKind.METHOD_VALUE, EncryptionMethod.AES_128),
        Token(TokenKind.COMMA),
        Token(TokenKind.URI_ATTRIBUTE, "URI"),
        Token(TokenKind.EQUALS),
        Token(TokenKind.STRING, "https://example.com/mon.key"),
    ]


def test_segment_lines_tokens():
    assert kinds("#EXTINF:6.006,\nhttps://example.com/segment1.ts\n") == [
        TokenKind.SEGMENT_INFO,
        TokenKind.COLON,
        TokenKind.FLOAT,
        TokenKind.COMMA,
        TokenKind.URI,
    ]


@pytest.mark.parametrize(
    "text, kind, value",
    [
        ("17", TokenKind.INTEGER, 17),
        ("4.588", TokenKind.FLOAT, 4.588),
        ('"avc1.4d401e,mp4a.40.2"', TokenKind.STRING, "avc1.4d401e,mp4a.40.2"),
        ("SAMPLE-AES", TokenKind.METHOD_VALUE, EncryptionMethod.SAMPLE_AES),
        ("NONE", TokenKind.METHOD_VALUE, EncryptionMethod.NONE),
        ("YES", TokenKind.BOOLEAN, True),
        ("NO", TokenKind.BOOLEAN, False),
        ("1316@376", TokenKind.BYTE_RANGE, ByteRange(1316, 376)),
        ("EVENT", TokenKind.PLAYLIST_TYPE_VALUE, PlaylistType.EVENT),
        ("1920x1080", TokenKind.RESOLUTION_VALUE, Resolution(1920, 1080)),
        ("FOO", TokenKind.ENUMERATED, "FOO"),
    ],
)
def test_literal_values_are_converted_while_scanning(text, kind, value):
    # a leading colon keeps the literal off the start of the line
    tokens = list(tokenize(":" + text))

    assert tokens == [Token(TokenKind.COLON), Token(kind, value)]


def test_composite_literals_need_a_token_boundary():
    assert kinds(":EVENTS") == [TokenKind.COLON, TokenKind.ENUMERATED]
    assert kinds(":NOPE") == [TokenKind.COLON, TokenKind.ENUMERATED]


def test_absolute_uri_inside_a_line():
    tokens = list(tokenize("#EXTINF:10.0, https://example.com/a.ts"))

    assert tokens[-1] == Token(TokenKind.URI, "https://example.com/a.ts")


def test_relative_uri_lines():
    tokens = list(tokenize("#EXTM3U\n720p/index.m3u8\r\nsegment0.ts\n"))

    assert tokens == [
        Token(TokenKind.EXTM3U, "#EXTM3U"),
        Token(TokenKind.URI, "720p/index.m3u8"),
        Token(TokenKind.URI, "segment0.ts"),
    ]


def test_indented_uri_lines():
    tokens = list(tokenize("  720p/index.m3u8\n\tsegment0.ts\r\n \t low/index.m3u8"))

    assert tokens == [
        Token(TokenKind.URI, "720p/index.m3u8"),
        Token(TokenKind.URI, "segment0.ts"),
        Token(TokenKind.URI, "low/index.m3u8"),
    ]


def test_uri_rule_only_applies_at_line_start():
    with pytest.raises(LexError):
        list(tokenize("#EXT-X-VERSION:3 segment0.ts"))


def test_comments_and_whitespace_are_skipped():
    assert kinds("  \t#EXTM3U\f\n# a comment line\n\n#EXT-X-ENDLIST\n") == [
        TokenKind.EXTM3U,
        TokenKind.ENDLIST,
    ]


def test_unknown_tag_swallows_its_line():
    tokens = list(tokenize("#EXT-X-PROGRAM-DATE-TIME:2010-02-19T14:54:23.031+08:00\n#EXT-X-ENDLIST"))

    assert tokens == [
        Token(TokenKind.UNKNOWN_TAG, "#EXT-X-PROGRAM-DATE-TIME:2010-02-19T14:54:23.031+08:00"),
        Token(TokenKind.ENDLIST, "#EXT-X-ENDLIST"),
    ]


def test_known_tag_prefix_is_not_matched():
    assert kinds("#EXT-X-KEYFORMAT:identity") == [TokenKind.UNKNOWN_TAG]


def test_unknown_attributes_carry_name_and_raw_value():
    tokens = list(tokenize(':AVERAGE-BANDWIDTH=2218327,AUDIO="aac",BANDWIDTH=1'))

    assert tokens == [
        Token(TokenKind.COLON),
        Token(TokenKind.UNKNOWN_ATTRIBUTE, ("AVERAGE-BANDWIDTH", "2218327")),
        Token(TokenKind.COMMA),
        Token(TokenKind.UNKNOWN_ATTRIBUTE, ("AUDIO", "aac")),
        Token(TokenKind.COMMA),
        Token(TokenKind.BANDWIDTH, "BANDWIDTH"),
        Token(TokenKind.EQUALS),
        Token(TokenKind.INTEGER, 1),
    ]


def test_lex_error_reports_slice_and_position():
    with pytest.raises(LexError) as excinfo:
        list(tokenize("#EXTM3U\n#EXT-X-VERSION:abc\n"))

    assert excinfo.value.text == "abc"
    assert excinfo.value.line == 2
    assert excinfo.value.column == 16


def test_tokens_are_produced_lazily():
    tokens = tokenize("#EXTM3U\n#EXT-X-VERSION:@@@")

    assert next(tokens).kind is TokenKind.EXTM3U
    assert next(tokens).kind is TokenKind.VERSION
    assert next(tokens).kind is TokenKind.COLON
    with pytest.raises(LexError):
        next(tokens)


def test_bytes_are_decoded_as_utf8():
    assert kinds("#EXTM3U\n#EXT-X-ENDLIST".encode("utf-8")) == [TokenKind.EXTM3U, TokenKind.ENDLIST]


def test_invalid_utf8_is_an_encoding_error():
    with pytest.raises(InvalidEncoding) as excinfo:
        list(tokenize(b"#EXTM3U\n\xff\xfe"))

    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


class TestTokenCursor:
    def cursor(self):
        return TokenCursor(tokenize("#EXT-X-VERSION:3\n#EXT-X-ENDLIST"))

    def test_peek_does_not_consume(self):
        cursor = self.cursor()

        assert cursor.peek(2) == Token(TokenKind.INTEGER, 3)
        assert cursor.peek() == Token(TokenKind.VERSION, "#EXT-X-VERSION")
        assert next(cursor) == Token(TokenKind.VERSION, "#EXT-X-VERSION")

    def test_nth_skips_tokens(self):
        cursor = self.cursor()

        assert cursor.nth(2) == Token(TokenKind.INTEGER, 3)
        assert cursor.nth(0) == Token(TokenKind.ENDLIST, "#EXT-X-ENDLIST")
        assert cursor.nth(0) is None

    def test_peek_and_nth_past_the_end(self):
        cursor = self.cursor()

        assert cursor.peek(10) is None
        assert cursor.nth(10) is None
        assert list(cursor) == []

    def test_expect_returns_matching_token(self):
        assert self.cursor().expect(2, TokenKind.INTEGER, "version").value == 3

    def test_expect_names_field_on_wrong_kind(self):
        with pytest.raises(MissingValue) as excinfo:
            self.cursor().expect(1, TokenKind.INTEGER, "version")

        assert excinfo.value.field == "version"

    def test_expect_names_field_at_end_of_stream(self):
        with pytest.raises(MissingValue) as excinfo:
            self.cursor().expect(5, (TokenKind.INTEGER, TokenKind.FLOAT), "version")

        assert excinfo.value.field == "version"

"""Tests for base64 transcoding."""

import base64

from chunkfetch.core import encode


class TestEncode:
    def test_empty_body(self):
        assert encode(b"") == ""

    def test_known_value(self):
        assert encode(b"Hello, World!") == "SGVsbG8sIFdvcmxkIQ=="

    def test_binary_bytes_preserved(self):
        """Invalid UTF-8 is treated as opaque bytes."""
        raw = bytes(range(256))
        assert base64.b64decode(encode(raw)) == raw

    def test_no_line_wrapping(self):
        text = encode(b"x" * 4096)
        assert "\n" not in text
        assert len(text) == 5464

    def test_returns_str(self):
        assert isinstance(encode(b"\xff\xfe"), str)

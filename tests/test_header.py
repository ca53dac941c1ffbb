"""Tests for MDX header parsing."""

import logging
import struct
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from mdxconv.formats.mdx.header import read_header, strip_title
from mdxconv.formats.mdx.options import DecoderOptions
from mdxconv.formats.mdx.stream import ByteStream
from mdxconv.utils.validation import MDXFormatError, ShortReadError


def parse(data: bytes, options: DecoderOptions = DecoderOptions()):
    with ByteStream.from_bytes(data) as stream:
        return read_header(stream, options)


class TestTitle:
    """Test cases for title and PCM name lines."""

    def test_title_line_break_removed(self, mdx_builder):
        """Test that the trailing CR LF before 0x1A is dropped."""
        mdx = parse(mdx_builder([b"\xf1\x00"], title=b"Hello"))

        assert mdx.title == "Hello"
        assert mdx.title_bytes == b"Hello"

    def test_title_cut_at_last_carriage_return(self):
        """Test that inner carriage returns survive."""
        assert strip_title(b"A\rB\r\n") == b"A\rB"
        assert strip_title(b"line1\r\nline2\r\n") == b"line1\r\nline2"

    def test_title_without_carriage_return(self):
        """Test that a title without CR is kept whole."""
        assert strip_title(b"NoBreak") == b"NoBreak"
        assert strip_title(b"") == b""

    def test_title_encoding(self, mdx_builder):
        """Test Shift-JIS title decoding."""
        mdx = parse(mdx_builder([b"\xf1\x00"], title=b"\x83e\x83X\x83g"))

        assert mdx.title == "テスト"

    def test_title_custom_encoding(self, mdx_builder):
        """Test decoding with a different codec."""
        data = mdx_builder([b"\xf1\x00"], title=b"Caf\xe9")
        mdx = parse(data, DecoderOptions(encoding="latin-1"))

        assert mdx.title == "Café"

    def test_title_at_length_limit(self):
        """Test that a title of exactly max_title_length bytes is accepted."""
        data = b"x" * 16 + b"\x1a\x00" + struct.pack(">HH", 4, 4)

        mdx = parse(data, DecoderOptions(max_title_length=16))

        assert mdx.title == "x" * 16

    def test_title_one_past_length_limit(self):
        """Test that the terminator does not count toward the limit."""
        data = b"x" * 17 + b"\x1a\x00" + struct.pack(">HH", 4, 4)

        with pytest.raises(MDXFormatError, match="within 16 bytes"):
            parse(data, DecoderOptions(max_title_length=16))

    def test_pcm_file_name(self, mdx_builder):
        """Test PCM file name line."""
        mdx = parse(mdx_builder([b"\xf1\x00"], pcm=b"drums.pdx"))

        assert mdx.pcm_file_name == "drums.pdx"

    def test_empty_pcm_file_name(self, mdx_builder):
        """Test that an empty PCM name is allowed."""
        assert parse(mdx_builder([b"\xf1\x00"])).pcm_file_name == ""

    def test_file_base_follows_text(self, mdx_builder):
        """Test that file_base is the position after both lines."""
        mdx = parse(mdx_builder([b"\xf1\x00"], title=b"Song", pcm=b"a.pdx"))

        # "Song" + CR LF 1A + "a.pdx" + 00
        assert mdx.file_base == 4 + 3 + 5 + 1

    def test_missing_title_terminator(self):
        """Test that a title without 0x1A is rejected."""
        with pytest.raises(MDXFormatError):
            parse(b"No terminator here")

    def test_title_too_long(self):
        """Test the title length limit."""
        data = b"x" * 64 + b"\x1a\x00" + struct.pack(">HH", 4, 4)

        with pytest.raises(MDXFormatError, match="within 16 bytes"):
            parse(data, DecoderOptions(max_title_length=16))


class TestOffsetTable:
    """Test cases for the voice and channel offset table."""

    @pytest.mark.parametrize("count", range(1, 17))
    def test_channel_count_inferred(self, mdx_builder, count):
        """Test that the first offset determines the channel count."""
        mdx = parse(mdx_builder([b"\xf1\x00"] * count))

        assert mdx.num_channels == count
        assert mdx.channel_offsets[0] == 2 * (count + 1)

    def test_offsets_relative_to_file_base(self, mdx_builder):
        """Test absolute channel and voice positions."""
        mdx = parse(mdx_builder([b"\x05\xf1\x00", b"\xf1\x00"]))

        assert mdx.channel_offsets == (6, 9)
        assert mdx.voice_table_offset == 11
        assert mdx.channel_start(0) == mdx.file_base + 6
        assert mdx.channel_end(0) == mdx.file_base + 9
        assert mdx.channel_end(1) is None
        assert mdx.voice_table_start == mdx.file_base + 11

    def test_channel_count_clamped(self, caplog):
        """Test that more than 16 implied channels are clamped."""
        offsets = [42] + [42] * 19
        data = b"T\x1a\x00" + struct.pack(">21H", 42, *offsets)

        with caplog.at_level(logging.WARNING):
            mdx = parse(data)

        assert mdx.num_channels == 16
        assert "clamping" in caplog.text

    def test_clamped_table_reads_16_offsets(self):
        """Test that only 16 channel offsets are consumed."""
        offsets = [40] + list(range(100, 115))
        data = b"T\x1a\x00" + struct.pack(">17H", 0, *offsets)

        mdx = parse(data)

        assert mdx.channel_offsets == tuple(offsets)

    @pytest.mark.parametrize("first", [0, 1, 2, 3])
    def test_no_channels_rejected(self, first):
        """Test that a table without room for a channel is rejected."""
        data = b"T\x1a\x00" + struct.pack(">HH", 0, first)

        with pytest.raises(MDXFormatError, match="no channels"):
            parse(data)

    def test_short_voice_offset(self):
        """Test EOF inside the voice table offset."""
        with pytest.raises(ShortReadError) as exc_info:
            parse(b"T\x1a\x00\x00")

        assert exc_info.value.field == "voice table offset"
        assert exc_info.value.wanted == 2
        assert exc_info.value.got == 1

    def test_short_channel_offsets(self):
        """Test EOF inside the channel offset table."""
        # First offset promises 3 channels, only one more follows
        data = b"T\x1a\x00" + struct.pack(">HHH", 0, 8, 8)

        with pytest.raises(ShortReadError, match="channel 2 offset"):
            parse(data)

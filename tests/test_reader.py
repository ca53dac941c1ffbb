"""Tests for MDXReader and handler dispatch."""

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from mdxconv.formats.mdx.options import DecoderOptions, KeyOnDelayMode
from mdxconv.formats.mdx.reader import MDXReader
from mdxconv.formats.mdx.stream import ByteStream
from mdxconv.handlers import MDXHandler, dispatch
from mdxconv.models.events import (
    DataEnd,
    DecodedCommand,
    Event,
    KeyOnDelay,
    Note,
    RepeatStart,
    Rest,
    SetTempo,
    TruncatedCommand,
)
from mdxconv.utils.validation import MDXFormatError


class RecordingHandler(MDXHandler):
    """Handler that records every call it receives."""

    def __init__(self):
        self.calls = []

    def handle_header(self, mdx):
        self.calls.append(("header", mdx.title))

    def handle_voice(self, voice):
        self.calls.append(("voice", voice.number))

    def handle_channel_start(self, channel):
        self.calls.append(("start", channel))

    def handle_channel_end(self, channel):
        self.calls.append(("end", channel))

    def handle_command(self, opcode, operands):
        self.calls.append(("command", opcode, operands))

    def handle_truncated(self, opcode, operands):
        self.calls.append(("truncated", opcode, operands))

    def handle_rest(self, duration):
        self.calls.append(("rest", duration))

    def handle_note(self, note, duration):
        self.calls.append(("note", note, duration))

    def handle_set_tempo(self, tempo):
        self.calls.append(("tempo", tempo))

    def handle_set_voice(self, voice):
        self.calls.append(("set_voice", voice))

    def handle_data_end(self, end=None):
        self.calls.append(("data_end", end))


def all_event_types():
    pending = list(Event.__subclasses__())
    found = []
    while pending:
        cls = pending.pop()
        found.append(cls)
        pending.extend(cls.__subclasses__())
    return found


class TestHandlerDispatch:
    """Test cases for the callback surface."""

    def test_call_order(self, mdx_builder, voice_record):
        """Test header, voices, then channels with dual dispatch."""
        data = mdx_builder(
            [b"\xff\x40\xfd\x01\x90\x0b\x05\xf1\x00", b"\xf1\x00"], voices=[voice_record]
        )
        handler = RecordingHandler()

        MDXReader().load(data, handler)

        assert handler.calls == [
            ("header", "Test Song"),
            ("voice", 1),
            ("start", 0),
            ("tempo", 0x40),
            ("command", 0xFF, b"\x40"),
            ("set_voice", 1),
            ("command", 0xFD, b"\x01"),
            ("note", 0x10, 12),
            ("command", 0x90, b"\x0b"),
            ("rest", 6),
            ("command", 0x05, b""),
            ("data_end", None),
            ("command", 0xF1, b"\x00"),
            ("end", 0),
            ("start", 1),
            ("data_end", None),
            ("command", 0xF1, b"\x00"),
            ("end", 1),
        ]

    def test_truncated_skips_generic_callback(self, mdx_builder):
        """Test that a truncated command only reaches handle_truncated."""
        handler = RecordingHandler()

        MDXReader().load(mdx_builder([b"\x05\xfe\x38"]), handler)

        assert handler.calls[-3:] == [
            ("command", 0x05, b""),
            ("truncated", 0xFE, b"\x38"),
            ("end", 0),
        ]

    def test_load_returns_header(self, song_data):
        """Test that load returns the parsed header."""
        mdx = MDXReader().load(song_data, MDXHandler())

        assert mdx.num_channels == 2
        assert mdx.title == "Test Song"

    def test_load_with_options(self, mdx_builder):
        """Test that reader options reach the channel decoder."""
        handler = RecordingHandler()
        options = DecoderOptions(key_on_delay=KeyOnDelayMode.STICKY)

        MDXReader(options).load(mdx_builder([b"\xf0\x01\xf1\x00"]), handler)

        commands = [c for c in handler.calls if c[0] == "command"]
        assert commands == [
            ("command", 0xF0, b"\x01"),
            ("command", 0xF0, b"\xf1"),
            ("command", 0xF0, b"\x00"),
        ]

    def test_truncation_ends_only_its_channel(self):
        """Test that channels after a truncated one still decode."""
        handler = RecordingHandler()
        # Channel B starts at offset 0 and reuses the table bytes as its
        # stream: 06 (rest), F1 00 (data end). Channel A is the last data
        # in the file and is cut off inside a register write.
        data = (
            b"Cut\r\n\x1a\x00"
            + bytes([0x06, 0xF1])  # voice table offset, past the end
            + bytes([0x00, 0x06])  # channel A
            + bytes([0x00, 0x00])  # channel B
            + b"\xfe\x38"
        )

        MDXReader().load(data, handler)

        assert handler.calls == [
            ("header", "Cut"),
            ("start", 0),
            ("truncated", 0xFE, b"\x38"),
            ("end", 0),
            ("start", 1),
            ("rest", 7),
            ("command", 0x06, b""),
            ("data_end", None),
            ("command", 0xF1, b"\x00"),
            ("end", 1),
        ]

    def test_every_event_has_a_hook(self):
        """Test that each event type names an existing handler method."""
        for cls in all_event_types():
            assert cls.hook, cls.__name__
            assert callable(getattr(MDXHandler, cls.hook)), cls.hook

    def test_dispatch_passes_event_fields(self):
        """Test dispatch of a single decoded command."""
        handler = RecordingHandler()

        dispatch(handler, DecodedCommand(Note(3, 4), 0x83, b"\x03"))

        assert handler.calls == [("note", 3, 4), ("command", 0x83, b"\x03")]

    def test_default_handler_ignores_everything(self, song_data):
        """Test that the base handler is a complete no-op."""
        MDXReader().load(song_data, MDXHandler())


class TestMDXReader:
    """Test cases for collecting a song in memory."""

    def test_read_song(self, song_data):
        """Test the collected song structure."""
        song = MDXReader.read(song_data)

        assert song.title == "Test Song"
        assert len(song.voices) == 1
        assert [c.name for c in song.channels] == ["A", "B"]
        assert all(c.terminated for c in song.channels)

    def test_channel_events(self, song_data):
        """Test decoded events of a collected channel."""
        channel = MDXReader.read(song_data).channels[0]

        assert channel.events_of(SetTempo) == [SetTempo(200)]
        assert channel.events_of(Note) == [Note(0x10, 12), Note(0x11, 24)]
        assert channel.events_of(Rest) == [Rest(6)]
        assert isinstance(channel.events[-1], DataEnd)

    def test_channel_bytes(self, song_data):
        """Test that a channel's commands reproduce its stream."""
        channel = MDXReader.read(song_data).channels[1]

        assert channel.to_bytes() == b"\xf6\x02\x00\x80\x2f\xf5\xff\xfb\xf1\x00"
        assert channel.events_of(RepeatStart) == [RepeatStart(2)]

    def test_truncated_channel(self, mdx_builder):
        """Test the truncated flag of a collected channel."""
        channel = MDXReader.read(mdx_builder([b"\x90"])).channels[0]

        assert channel.truncated
        assert not channel.terminated
        assert channel.events == [TruncatedCommand(0x90, b"")]

    def test_voice_lookup(self, song_data):
        """Test voice lookup by number."""
        song = MDXReader.read(song_data)

        assert song.get_voice(1) is song.voices[0]
        assert song.get_voice(2) is None

    def test_sticky_key_on_delay(self, mdx_builder):
        """Test reading with the sticky key-on delay mode."""
        data = mdx_builder([b"\xf0\x01\x05\xf1\x00"])
        options = DecoderOptions(key_on_delay=KeyOnDelayMode.STICKY)

        channel = MDXReader.read(data, options).channels[0]

        assert channel.events == [KeyOnDelay(1), KeyOnDelay(5), KeyOnDelay(0xF1), KeyOnDelay(0)]
        assert channel.to_bytes() == b"\xf0\x01\x05\xf1\x00"


class TestSources:
    """Test cases for the accepted input types."""

    def test_read_path(self, song_file):
        assert MDXReader.read(song_file).title == "Test Song"
        assert MDXReader.read(str(song_file)).title == "Test Song"

    def test_read_file_object(self, song_data):
        assert len(MDXReader.read(io.BytesIO(song_data)).channels) == 2

    def test_read_bytearray(self, song_data):
        assert len(MDXReader.read(bytearray(song_data)).channels) == 2

    def test_read_byte_stream(self, song_data):
        with ByteStream.from_bytes(song_data) as stream:
            assert len(MDXReader.read(stream).channels) == 2

    def test_missing_file(self, tmp_path):
        """Test that a missing file is reported."""
        with pytest.raises(FileNotFoundError):
            MDXReader.read(tmp_path / "missing.mdx")

    def test_unsupported_source(self):
        """Test that other source types are rejected."""
        with pytest.raises(TypeError):
            MDXReader.read(12345)

    def test_invalid_file(self):
        """Test that a broken header raises MDXFormatError."""
        with pytest.raises(MDXFormatError):
            MDXReader.read(b"not an mdx file")


class TestFileInfo:
    """Test cases for quick header checks."""

    def test_can_read(self, song_file, tmp_path):
        """Test detection of readable files."""
        bad = tmp_path / "bad.mdx"
        bad.write_bytes(b"garbage")

        assert MDXReader.can_read(song_file)
        assert not MDXReader.can_read(bad)
        assert not MDXReader.can_read(tmp_path / "missing.mdx")

    def test_get_file_info(self, song_file, song_data):
        """Test header summary of a valid file."""
        info = MDXReader.get_file_info(song_file)

        assert info["valid"]
        assert info["size"] == len(song_data)
        assert info["title"] == "Test Song"
        assert info["channels"] == 2
        assert info["pcm_file"] == ""

    def test_get_file_info_invalid(self, tmp_path):
        """Test header summary of a broken file."""
        bad = tmp_path / "bad.mdx"
        bad.write_bytes(b"garbage")

        info = MDXReader.get_file_info(bad)

        assert not info["valid"]
        assert "error" in info

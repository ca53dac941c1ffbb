"""Tests for display name helpers."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from mdxconv.utils.naming import (
    channel_name,
    command_name,
    note_label,
    note_name,
    note_octave,
    operator_name,
)


class TestCommandNames:
    """Test cases for command byte names."""

    @pytest.mark.parametrize(
        "opcode,name",
        [
            (0x00, "Rest"),
            (0x7F, "Rest"),
            (0x80, "Note"),
            (0xDE, "Note"),
            (0xDF, "Unknown"),
            (0xE6, "Informal command"),
            (0xF0, "Key on delay"),
            (0xF1, "Data end"),
            (0xF9, "Volume increment"),
            (0xFA, "Volume decrement"),
            (0xFF, "Set tempo"),
        ],
    )
    def test_command_name(self, opcode, name):
        assert command_name(opcode) == name

    def test_every_command_named(self):
        """Test that no command opcode falls back to Unknown."""
        for opcode in range(0xE7, 0x100):
            assert command_name(opcode) != "Unknown"


class TestNoteNames:
    """Test cases for note and octave names."""

    def test_note_zero_is_d_sharp(self):
        assert note_name(0) == "d+"
        assert note_octave(0) == 0

    def test_middle_c(self):
        assert note_label(45) == "o4c"

    def test_octave_boundary(self):
        assert note_label(8) == "o0b"
        assert note_label(9) == "o1c"


class TestChannelNames:
    """Test cases for channel letters."""

    def test_fm_channels(self):
        assert [channel_name(i) for i in range(8)] == list("ABCDEFGH")

    def test_pcm_channels(self):
        assert [channel_name(i) for i in range(8, 16)] == list("PQRSTUVW")

    def test_out_of_range(self):
        assert channel_name(16) == "!"


class TestOperatorNames:
    """Test cases for operator names."""

    def test_operator_order(self):
        assert [operator_name(i) for i in range(4)] == ["M1", "M2", "C1", "C2"]

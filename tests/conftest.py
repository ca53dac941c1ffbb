"""Test configuration and fixtures."""

import struct
import sys
from pathlib import Path
from typing import List, Sequence

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

# A voice record with every field distinct from zero
SAMPLE_VOICE = bytes(
    [
        0x01,  # voice number
        0x2B,  # FL=5, CON=3
        0x0F,  # slot mask
        0x71, 0x12, 0x03, 0x04,  # DT1/MUL
        0x22, 0x10, 0x7F, 0x00,  # TL
        0xDF, 0x1F, 0x40, 0x05,  # KS/AR
        0x8A, 0x0A, 0x80, 0x01,  # AMS-EN/D1R
        0x45, 0x05, 0xC0, 0x02,  # DT2/D2R
        0xA7, 0x17, 0xF0, 0x0F,  # D1L/RR
    ]
)


def build_mdx(
    channels: Sequence[bytes],
    voices: Sequence[bytes] = (),
    title: bytes = b"Test Song",
    pcm: bytes = b"",
) -> bytes:
    """
    Assemble an MDX file.

    Channel streams follow the offset table in order, and the voice
    table is placed last.
    """
    table_size = 2 * (len(channels) + 1)

    offsets: List[int] = []
    position = table_size
    for data in channels:
        offsets.append(position)
        position += len(data)

    out = bytearray(title + b"\r\n\x1a" + pcm + b"\x00")
    out += struct.pack(f">{len(channels) + 1}H", position, *offsets)
    for data in channels:
        out += data
    for record in voices:
        out += record
    return bytes(out)


@pytest.fixture
def mdx_builder():
    """Return the MDX file builder function."""
    return build_mdx


@pytest.fixture
def voice_record():
    """Return raw bytes of a 27-byte voice record."""
    return SAMPLE_VOICE


@pytest.fixture
def song_data():
    """Return a two-channel song with one voice."""
    channel_a = bytes(
        [
            0xFF, 0xC8,  # tempo 200
            0xFD, 0x01,  # voice 1
            0xFB, 0x0F,  # v15
            0xFC, 0x03,  # pan LR
            0x90, 0x0B,  # o1g, 12 clocks
            0x05,  # rest 6 clocks
            0x91, 0x17,  # o1g+, 24 clocks
            0xF1, 0x00,
        ]
    )
    channel_b = bytes(
        [
            0xF6, 0x02, 0x00,  # repeat x2
            0x80, 0x2F,
            0xF5, 0xFF, 0xFB,
            0xF1, 0x00,
        ]
    )
    return build_mdx([channel_a, channel_b], voices=[SAMPLE_VOICE])


@pytest.fixture
def song_file(tmp_path, song_data):
    """Return path to the two-channel song written to disk."""
    path = tmp_path / "song.mdx"
    path.write_bytes(song_data)
    return path

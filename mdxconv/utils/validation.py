"""
Exceptions and validation helpers for MDX data.
"""

from typing import Optional

# YM2151 has 8 FM channels, PCM8 adds 8 more
MAX_CHANNELS = 16

VOICE_RECORD_SIZE = 27


class MDXError(Exception):
    """Base class for all MDX decoding errors."""

    pass


class MDXFormatError(MDXError):
    """Raised when the file structure cannot be decoded."""

    pass


class ShortReadError(MDXFormatError):
    """
    Raised when the stream ends before a required field is complete.

    Attributes:
        field: Name of the field being read
        wanted: Number of bytes required
        got: Number of bytes actually available
        position: Stream position where the read started
    """

    def __init__(self, field: str, wanted: int, got: int, position: Optional[int] = None):
        self.field = field
        self.wanted = wanted
        self.got = got
        self.position = position
        where = f" at 0x{position:04X}" if position is not None else ""
        super().__init__(f"Short read of {field}{where}: wanted {wanted} bytes, got {got}")


def channel_count_from_offset(first_offset: int) -> int:
    """
    Infer the number of channels from the first channel offset.

    Channel data starts right after the offset table, so the first
    offset equals the table length in bytes. One slot belongs to the
    voice table offset.

    Args:
        first_offset: Value of the first channel offset

    Returns:
        Number of channel offsets in the table (unclamped)
    """
    return first_offset // 2 - 1


def clamp_channel_count(count: int) -> int:
    """
    Clamp a channel count to the hardware limit.

    Args:
        count: Inferred channel count

    Returns:
        Count limited to MAX_CHANNELS

    Raises:
        MDXFormatError: If the table cannot hold a single channel
    """
    if count < 1:
        raise MDXFormatError(f"Offset table holds no channels (inferred count {count})")
    return min(count, MAX_CHANNELS)


def validate_voice_record(record: bytes) -> None:
    """
    Validate the size of a voice record.

    Args:
        record: Raw voice record

    Raises:
        MDXFormatError: If the record is not exactly VOICE_RECORD_SIZE bytes
    """
    if len(record) != VOICE_RECORD_SIZE:
        raise MDXFormatError(
            f"Voice record must be {VOICE_RECORD_SIZE} bytes, got {len(record)}"
        )


def validate_channel_index(channel: int, num_channels: int) -> None:
    """
    Validate a channel index against the header's channel count.

    Raises:
        IndexError: If the channel does not exist
    """
    if not 0 <= channel < num_channels:
        raise IndexError(f"Channel must be 0-{num_channels - 1}, got {channel}")

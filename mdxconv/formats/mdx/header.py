"""
MDX header parser.

Header layout:
    title       text terminated by 0x1A (line break before it is dropped)
    pcm name    text terminated by 0x00
    ---- file base: every offset below is relative to this point ----
    u16be       voice table offset
    u16be x n   channel offsets

There is no channel count field. Channel data begins right after the
offset table, so the first channel offset equals the table size.
"""

import logging

from mdxconv.formats.mdx.options import DecoderOptions
from mdxconv.formats.mdx.stream import ByteStream
from mdxconv.models.mdx_file import MDXFile
from mdxconv.utils.validation import (
    MAX_CHANNELS,
    MDXFormatError,
    channel_count_from_offset,
    clamp_channel_count,
)

logger = logging.getLogger(__name__)

TITLE_TERMINATOR = 0x1A
PCM_NAME_TERMINATOR = 0x00
CARRIAGE_RETURN = 0x0D


def strip_title(raw: bytes) -> bytes:
    """
    Cut a title at its last carriage return.

    Carriage returns inside a multi-line title are kept. A title without
    any carriage return is returned unchanged.
    """
    cut = raw.rfind(bytes([CARRIAGE_RETURN]))
    if cut < 0:
        return raw
    return raw[:cut]


def read_header(stream: ByteStream, options: DecoderOptions = DecoderOptions()) -> MDXFile:
    """
    Read the MDX header from the current stream position.

    Args:
        stream: Stream positioned at the start of the file
        options: Decoder options

    Returns:
        Parsed header

    Raises:
        MDXFormatError: On a short read or a missing title terminator
    """
    raw_title = stream.read_line(TITLE_TERMINATOR, max_length=options.max_title_length)
    title_bytes = strip_title(raw_title)
    pcm_bytes = stream.read_line(PCM_NAME_TERMINATOR)

    file_base = stream.tell()
    voice_table_offset = stream.read_uint16_be("voice table offset")
    first_offset = stream.read_uint16_be("channel 0 offset")

    inferred = channel_count_from_offset(first_offset)
    num_channels = clamp_channel_count(inferred)
    if inferred > MAX_CHANNELS:
        logger.warning(
            "Offset table implies %d channels, clamping to %d", inferred, MAX_CHANNELS
        )

    offsets = [first_offset]
    for i in range(1, num_channels):
        offsets.append(stream.read_uint16_be(f"channel {i} offset"))

    mdx = MDXFile(
        title=title_bytes.decode(options.encoding, errors="replace"),
        title_bytes=title_bytes,
        pcm_file_name=pcm_bytes.decode(options.encoding, errors="replace"),
        file_base=file_base,
        voice_table_offset=voice_table_offset,
        channel_offsets=tuple(offsets),
    )
    logger.debug(
        "Header: base=0x%04X voices=0x%04X channels=%d",
        file_base,
        voice_table_offset,
        num_channels,
    )
    return mdx

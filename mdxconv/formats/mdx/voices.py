"""
MDX voice table parser.

The table has no count field: records are read until the stream runs
out. A trailing partial record ends the table.
"""

import logging
from typing import Iterator

from mdxconv.formats.mdx.stream import ByteStream
from mdxconv.models.mdx_file import MDXFile
from mdxconv.models.voice import Voice
from mdxconv.utils.validation import VOICE_RECORD_SIZE

logger = logging.getLogger(__name__)


def iter_voices(stream: ByteStream, mdx: MDXFile) -> Iterator[Voice]:
    """
    Yield every voice record of the table.

    Args:
        stream: Stream to read from
        mdx: Parsed header

    Yields:
        One Voice per complete 27-byte record
    """
    stream.seek(mdx.voice_table_start)

    while not stream.eof():
        record = stream.read(VOICE_RECORD_SIZE)
        if len(record) < VOICE_RECORD_SIZE:
            logger.debug("Voice table ends with %d trailing bytes", len(record))
            break
        yield Voice.from_bytes(record)

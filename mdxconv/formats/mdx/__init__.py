"""MDX format handlers."""

from mdxconv.formats.mdx.reader import MDXReader
from mdxconv.formats.mdx.decoder import ChannelDecoder, iter_channel
from mdxconv.formats.mdx.header import read_header
from mdxconv.formats.mdx.voices import iter_voices
from mdxconv.formats.mdx.stream import ByteStream

__all__ = [
    "MDXReader",
    "ChannelDecoder",
    "iter_channel",
    "read_header",
    "iter_voices",
    "ByteStream",
]

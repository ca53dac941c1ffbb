"""
MDX file reader.

Runs the decode pipeline in order: header, voice table, then every
channel from 0 upwards. Results are either pushed through an
MDXHandler (load) or collected into an MDXSong (read).
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from mdxconv.formats.mdx.decoder import iter_channel
from mdxconv.formats.mdx.header import read_header
from mdxconv.formats.mdx.options import DecoderOptions
from mdxconv.formats.mdx.stream import ByteStream
from mdxconv.formats.mdx.voices import iter_voices
from mdxconv.handlers import MDXHandler, dispatch
from mdxconv.models.mdx_file import MDXFile
from mdxconv.models.song import Channel, MDXSong
from mdxconv.utils.validation import MDXFormatError

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes, bytearray, BinaryIO, ByteStream]


class MDXReader:
    """
    Reader for MDX music files.

    Example:
        song = MDXReader.read("song.mdx")
        print(f"{song.title}: {len(song.channels)} channels")

        # Streaming, with callbacks
        MDXReader(options=DecoderOptions()).load("song.mdx", MyHandler())
    """

    def __init__(self, options: Optional[DecoderOptions] = None):
        self.options = options or DecoderOptions()

    @classmethod
    def read(cls, source: Source, options: Optional[DecoderOptions] = None) -> MDXSong:
        """
        Read an MDX file into memory.

        Args:
            source: File path, raw bytes, binary file object or ByteStream
            options: Decoder options

        Returns:
            Decoded MDXSong
        """
        reader = cls(options)
        return reader.parse(source)

    def parse(self, source: Source) -> MDXSong:
        """Decode a source into an MDXSong."""
        with self._open(source) as stream:
            header = read_header(stream, self.options)
            song = MDXSong(header=header, voices=list(iter_voices(stream, header)))

            for index in range(header.num_channels):
                commands = list(iter_channel(stream, header, index, self.options))
                song.channels.append(Channel(index=index, commands=commands))

        return song

    def load(self, source: Source, handler: MDXHandler) -> MDXFile:
        """
        Decode a source, reporting everything to a handler.

        Call order: handle_header, handle_voice per record, then per
        channel handle_channel_start, the command hooks, handle_channel_end.

        Args:
            source: File path, raw bytes, binary file object or ByteStream
            handler: Receiver of decode callbacks

        Returns:
            Parsed header

        Raises:
            MDXFormatError: If the header cannot be read
        """
        with self._open(source) as stream:
            header = read_header(stream, self.options)
            handler.handle_header(header)

            for voice in iter_voices(stream, header):
                handler.handle_voice(voice)

            for index in range(header.num_channels):
                handler.handle_channel_start(index)
                for decoded in iter_channel(stream, header, index, self.options):
                    dispatch(handler, decoded)
                handler.handle_channel_end(index)

        return header

    @contextmanager
    def _open(self, source: Source) -> Iterator[ByteStream]:
        if isinstance(source, ByteStream):
            yield source
        elif isinstance(source, (bytes, bytearray)):
            with ByteStream.from_bytes(bytes(source)) as stream:
                yield stream
        elif isinstance(source, (str, Path)):
            filepath = Path(source)
            if not filepath.exists():
                raise FileNotFoundError(f"File not found: {filepath}")
            logger.debug("Reading %s", filepath)
            with ByteStream.open(filepath) as stream:
                yield stream
        elif hasattr(source, "read"):
            yield ByteStream(source)
        else:
            raise TypeError(f"Unsupported MDX source: {type(source).__name__}")

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file has a readable MDX header.

        Args:
            filepath: Path to check

        Returns:
            True if the header and offset table parse
        """
        filepath = Path(filepath)

        if not filepath.exists():
            return False

        try:
            with ByteStream.open(filepath) as stream:
                read_header(stream)
        except MDXFormatError:
            return False
        return True

    @classmethod
    def get_file_info(
        cls, filepath: Union[str, Path], options: Optional[DecoderOptions] = None
    ) -> dict:
        """
        Get header information without decoding channels.

        Args:
            filepath: Path to .mdx file
            options: Decoder options

        Returns:
            Dictionary with file info
        """
        filepath = Path(filepath)
        info = {"valid": False, "size": filepath.stat().st_size}

        with ByteStream.open(filepath) as stream:
            try:
                header = read_header(stream, options or DecoderOptions())
            except MDXFormatError as e:
                info["error"] = str(e)
                return info

        info.update(
            valid=True,
            title=header.title,
            pcm_file=header.pcm_file_name,
            file_base=header.file_base,
            voice_table_offset=header.voice_table_offset,
            channels=header.num_channels,
        )
        return info

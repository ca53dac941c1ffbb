"""
Seekable byte stream used by the MDX decoder.

Wraps any binary file object and provides the primitive reads the
format needs: unsigned bytes, big-endian words and terminated lines.
"""

import io
import struct
from pathlib import Path
from typing import BinaryIO, Optional, Union

from mdxconv.utils.validation import MDXFormatError, ShortReadError


class ByteStream:
    """
    Sequential, seekable reader over a binary file object.

    Example:
        with ByteStream.open("song.mdx") as stream:
            title = stream.read_line(0x1A, max_length=1024)
    """

    def __init__(self, fileobj: BinaryIO, owned: bool = False):
        self._file = fileobj
        self._owned = owned

        position = fileobj.tell()
        self._size = fileobj.seek(0, io.SEEK_END)
        fileobj.seek(position)

    @classmethod
    def from_bytes(cls, data: bytes) -> "ByteStream":
        """Create a stream over an in-memory buffer."""
        return cls(io.BytesIO(data), owned=True)

    @classmethod
    def open(cls, filepath: Union[str, Path]) -> "ByteStream":
        """Open a file for reading. The stream closes the file."""
        return cls(open(filepath, "rb"), owned=True)

    def __enter__(self) -> "ByteStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def size(self) -> int:
        """Total stream length in bytes."""
        return self._size

    def close(self) -> None:
        if self._owned:
            self._file.close()

    def read(self, size: int) -> bytes:
        """Read up to size bytes. Fewer are returned at end of stream."""
        return self._file.read(size)

    def read_exact(self, size: int, field: str = "data") -> bytes:
        """Read exactly size bytes or raise ShortReadError."""
        position = self.tell()
        data = self._file.read(size)
        if len(data) < size:
            raise ShortReadError(field, size, len(data), position)
        return data

    def read_uint8(self, field: str = "byte") -> int:
        return self.read_exact(1, field)[0]

    def read_uint16_be(self, field: str = "word") -> int:
        return struct.unpack(">H", self.read_exact(2, field))[0]

    def read_line(self, terminator: int, max_length: Optional[int] = None) -> bytes:
        """
        Read bytes up to a terminator byte.

        The terminator is consumed but not returned.

        Args:
            terminator: Byte value ending the line
            max_length: Maximum line length, terminator not counted. When
                given, the terminator must follow within max_length bytes.
                When None, end of stream also ends the line.

        Returns:
            Line contents without the terminator

        Raises:
            MDXFormatError: If a bounded line has no terminator
        """
        start = self.tell()
        line = bytearray()

        while max_length is None or len(line) <= max_length:
            data = self._file.read(1)
            if not data:
                if max_length is None:
                    return bytes(line)
                raise MDXFormatError(
                    f"Line at 0x{start:04X} ends before terminator 0x{terminator:02X}"
                )
            if data[0] == terminator:
                return bytes(line)
            line += data

        raise MDXFormatError(
            f"Line at 0x{start:04X} has no terminator 0x{terminator:02X} "
            f"within {max_length} bytes"
        )

    def seek(self, position: int) -> None:
        self._file.seek(position)

    def tell(self) -> int:
        return self._file.tell()

    def eof(self) -> bool:
        return self._file.tell() >= self._size

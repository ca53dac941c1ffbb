"""
Decoder configuration.
"""

from dataclasses import dataclass
from enum import Enum


class KeyOnDelayMode(Enum):
    """
    How the key-on delay command (0xF0) consumes operands.

    SINGLE: one operand byte, then back to the initial state like
        every other single-operand command.
    STICKY: reproduces the historical decoder, which never left the
        key-on delay state. Every following byte of the channel is
        reported as another key-on delay value.
    """

    SINGLE = "single"
    STICKY = "sticky"


@dataclass(frozen=True)
class DecoderOptions:
    """
    Options controlling MDX decoding.

    Attributes:
        encoding: Codec used to decode the title and PCM file name
        max_title_length: Longest title accepted before the 0x1A terminator
        key_on_delay: Operand handling for the key-on delay command
    """

    encoding: str = "cp932"
    max_title_length: int = 1024
    key_on_delay: KeyOnDelayMode = KeyOnDelayMode.SINGLE

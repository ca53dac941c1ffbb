"""Utility functions for MDXConv."""

from mdxconv.utils.naming import channel_name, command_name, note_name, note_octave, operator_name
from mdxconv.utils.validation import MDXError, MDXFormatError, ShortReadError

__all__ = [
    "channel_name",
    "command_name",
    "note_name",
    "note_octave",
    "operator_name",
    "MDXError",
    "MDXFormatError",
    "ShortReadError",
]

"""
Song analysis module.

Provides summaries of decoded MDX songs.
"""

from mdxconv.analysis.mdx_analyzer import (
    ChannelSummary,
    MDXAnalyzer,
    SongAnalysis,
    tempo_to_bpm,
    tempo_to_microseconds,
)

__all__ = [
    "MDXAnalyzer",
    "SongAnalysis",
    "ChannelSummary",
    "tempo_to_bpm",
    "tempo_to_microseconds",
]

"""Format handlers for MDX."""

from mdxconv.formats.mdx import MDXReader

__all__ = ["MDXReader"]

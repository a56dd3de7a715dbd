"""
Document Processor Package

Markdown parsing on markdown-it-py, and the front matter extension that
registers with it.

Components:
- markdown_parser: MarkdownParser, the markdown-it host
- front_matter/: front matter detection, extraction and rendering
"""

from .markdown_parser import MarkdownParser, normalize_source

# Front matter extension
from .front_matter import (
    FrontMatterOptions,
    MetadataRenderer,
    StructuredDataAdapter,
    TitleBlock,
    TitleBlockExtractor,
    extract_metadata,
    find_front_matter,
    front_matter_plugin,
)

__all__ = [
    "MarkdownParser",
    "normalize_source",
    "FrontMatterOptions",
    "MetadataRenderer",
    "StructuredDataAdapter",
    "TitleBlock",
    "TitleBlockExtractor",
    "extract_metadata",
    "find_front_matter",
    "front_matter_plugin",
]

"""
Front Matter Package

Detection, parsing and rendering of a leading YAML metadata block.

Components:
- scanner: FenceScanner, the fence-matching state machine
- adapter: StructuredDataAdapter, tolerant YAML boundary
- values: MetadataValue tagged union (ABSENT, scalar, sequence, mapping)
- title_block: TitleBlockExtractor and the TitleBlock record
- authors: AuthorNormalizer and the Author record
- rendering: MetadataRenderer producing the title block HTML
- plugin: markdown-it registration and render boundary
"""

from .values import (
    ABSENT,
    Absent,
    MappingValue,
    MetadataValue,
    ScalarValue,
    SequenceValue,
    as_items,
    from_python,
)

from .scanner import (
    NO_MATCH,
    TOKEN_TYPE,
    FenceMatch,
    FenceScanner,
    NoMatch,
)

from .adapter import (
    FrontMatterParseError,
    MetadataLoader,
    StructuredDataAdapter,
)

from .authors import Author, AuthorNormalizer
from .title_block import TitleBlock, TitleBlockExtractor
from .rendering import MetadataRenderer

from .plugin import (
    FrontMatterOptions,
    extract_metadata,
    find_front_matter,
    front_matter_plugin,
    front_matter_renderer,
    front_matter_rule,
    narrowed,
    render_front_matter,
    render_metadata_text,
)

__all__ = [
    "ABSENT",
    "Absent",
    "MappingValue",
    "MetadataValue",
    "ScalarValue",
    "SequenceValue",
    "as_items",
    "from_python",
    "NO_MATCH",
    "TOKEN_TYPE",
    "FenceMatch",
    "FenceScanner",
    "NoMatch",
    "FrontMatterParseError",
    "MetadataLoader",
    "StructuredDataAdapter",
    "Author",
    "AuthorNormalizer",
    "TitleBlock",
    "TitleBlockExtractor",
    "MetadataRenderer",
    "FrontMatterOptions",
    "extract_metadata",
    "find_front_matter",
    "front_matter_plugin",
    "front_matter_renderer",
    "front_matter_rule",
    "narrowed",
    "render_front_matter",
    "render_metadata_text",
]

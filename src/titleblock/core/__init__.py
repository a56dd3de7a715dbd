"""
Core modules for titleblock.

This package contains the document processing components: the host
Markdown parser and the front matter extension.
"""

from .document_processor import (
    MarkdownParser,
    front_matter_plugin,
)

__all__ = [
    "MarkdownParser",
    "front_matter_plugin",
]

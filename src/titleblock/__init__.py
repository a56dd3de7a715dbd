"""
titleblock - front matter title blocks for Markdown documents.

Detects a leading YAML metadata block, extracts the document title block
(title, subtitle, authors, dates, DOI, abstract) and renders it to HTML
together with the remaining metadata.
"""

__version__ = "0.1.0"

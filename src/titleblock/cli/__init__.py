"""
titleblock CLI Package.

Command-line interface for rendering Markdown front matter title blocks.
"""

from .cli import app, cli_main

__all__ = ["app", "cli_main"]

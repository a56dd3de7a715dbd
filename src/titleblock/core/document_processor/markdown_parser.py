"""
Markdown Parser Module - Host Parsing Pipeline

Block-level extensions such as the front matter plugin register with a
markdown-it-py parser. ``MarkdownParser`` builds that parser from a preset,
applies plugins and reports simple statistics about a parse.

Usage:
    >>> parser = MarkdownParser().use(front_matter_plugin)
    >>> print(parser.render("---\\ntitle: Doc\\n---\\n\\nBody"))
    <h1>Doc</h1>
    <pre>
    {}
    </pre>
    <p>Body</p>
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token

logger = logging.getLogger(__name__)

DEFAULT_PRESET = "commonmark"
DEFAULT_ENABLED = ("table",)


def normalize_source(text: str) -> str:
    """Normalize line endings and replace NUL characters, as markdown-it does."""
    return text.replace("\r\n", "\n").replace("\r", "\n").replace("\0", "\ufffd")


class MarkdownParser:
    """
    markdown-it-py parser with plugin support.

    Attributes:
        md: The underlying MarkdownIt instance
    """

    def __init__(
        self,
        preset: str = DEFAULT_PRESET,
        options: Optional[Dict[str, Any]] = None,
        enable: Iterable[str] = DEFAULT_ENABLED
    ) -> None:
        """
        Initialize MarkdownParser.

        Args:
            preset: markdown-it preset name
            options: Options overriding the preset's
            enable: Rules to enable on top of the preset
        """
        self.md = MarkdownIt(preset, options)
        enabled = list(enable)
        if enabled:
            self.md.enable(enabled)
        logger.debug(f"MarkdownParser initialized with preset '{preset}', enabled {enabled}")

    @property
    def block_rules(self) -> List[str]:
        """Names of the registered block rules, in order."""
        return self.md.block.ruler.get_all_rules()

    def use(self, plugin: Callable[..., Any], *args: Any, **kwargs: Any) -> "MarkdownParser":
        """Apply a markdown-it plugin: ``plugin(md, *args, **kwargs)``."""
        self.md.use(plugin, *args, **kwargs)
        logger.debug(f"Applied plugin {getattr(plugin, '__name__', plugin)!r}")
        return self

    def parse(self, text: str, env: Optional[Dict[str, Any]] = None) -> List[Token]:
        """
        Split markdown text into tokens.

        Raises:
            TypeError: If text is not a string
        """
        if not isinstance(text, str):
            raise TypeError("Input text must be a string")
        return self.md.parse(text, env if env is not None else {})

    def render(self, text: str, env: Optional[Dict[str, Any]] = None) -> str:
        """Parse markdown text and render it to HTML."""
        if not isinstance(text, str):
            raise TypeError("Input text must be a string")
        return self.md.render(text, env if env is not None else {})

    def parse_with_metadata(self, text: str) -> Dict[str, Any]:
        """
        Render text and report parsing statistics.

        Returns:
            Dictionary containing:
            - 'result': Rendered HTML
            - 'tokens': Number of block-level tokens
            - 'token_types': Dict of token type to count
        """
        env: Dict[str, Any] = {}
        tokens = self.parse(text, env)

        token_types: Dict[str, int] = {}
        for token in tokens:
            token_types[token.type] = token_types.get(token.type, 0) + 1

        return {
            "result": self.md.renderer.render(tokens, self.md.options, env),
            "tokens": len(tokens),
            "token_types": token_types,
        }

    def __repr__(self) -> str:
        return f"MarkdownParser(block_rules={self.block_rules})"

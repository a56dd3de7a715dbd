"""
Front Matter Plugin Module

Registers front matter support with a markdown-it parser::

    md = MarkdownIt().use(front_matter_plugin, callback=print)
    html = md.render(text)

The block rule gets first refusal on line 0, ahead of the table rule, and
joins the paragraph, reference, blockquote and list termination chains. The
render rule turns the captured block into a title block followed by a dump
of the remaining metadata.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence, Tuple

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.token import Token

from ..markdown_parser import normalize_source
from .adapter import StructuredDataAdapter
from .rendering import MetadataRenderer
from .scanner import DEFAULT_MARKER, DEFAULT_MIN_MARKERS, TOKEN_TYPE, FenceScanner, ScanResult
from .title_block import TitleBlock, TitleBlockExtractor
from .values import MappingValue

logger = logging.getLogger(__name__)

FrontMatterCallback = Callable[[str], Any]
TERMINATES = ["paragraph", "reference", "blockquote", "list"]


@dataclass(frozen=True)
class FrontMatterOptions:
    """
    Fence settings of the front matter extension.

    Attributes:
        marker: Marker unit repeated to form a fence
        min_markers: Minimum number of marker units in the opening fence
    """
    marker: str = DEFAULT_MARKER
    min_markers: int = DEFAULT_MIN_MARKERS

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "FrontMatterOptions":
        """Build options from the ``front_matter`` section of a configuration dict."""
        section = config.get("front_matter") or {}
        return cls(
            marker=section.get("marker", DEFAULT_MARKER),
            min_markers=int(section.get("min_markers", DEFAULT_MIN_MARKERS)),
        )

    def scanner(self) -> FenceScanner:
        return FenceScanner(self.marker, self.min_markers)

    def adapter(self) -> StructuredDataAdapter:
        return StructuredDataAdapter(self.marker, self.min_markers)


@contextmanager
def narrowed(state: StateBlock, line_max: int, parent_type: str = "root") -> Iterator[StateBlock]:
    """
    Temporarily bound block processing to lines before ``line_max``.

    ``lineMax`` and ``parentType`` are restored on exit, including when the
    body raises.
    """
    saved_line_max = state.lineMax
    saved_parent_type = state.parentType
    state.lineMax = line_max
    state.parentType = parent_type
    try:
        yield state
    finally:
        state.lineMax = saved_line_max
        state.parentType = saved_parent_type


def front_matter_rule(
    scanner: FenceScanner,
    callback: Optional[FrontMatterCallback] = None
) -> Callable[[StateBlock, int, int, bool], bool]:
    """Create the block rule applying ``scanner`` matches to the parse state."""

    def front_matter(state: StateBlock, start_line: int, end_line: int, silent: bool) -> bool:
        if silent:
            return scanner.validate(state, start_line)

        match = scanner.scan(state, start_line, end_line)
        if not match:
            return False

        # keep lazy continuations from running past the block
        with narrowed(state, match.bound):
            state.tokens.append(match.token)
        state.line = match.next_line

        if callback is not None:
            try:
                callback(match.token.content)
            except Exception as e:
                logger.warning(f"Front matter callback failed: {e}", exc_info=True)
        return True

    return front_matter


def render_metadata_text(
    text: str,
    adapter: Optional[StructuredDataAdapter] = None,
    extractor: Optional[TitleBlockExtractor] = None,
    renderer: Optional[MetadataRenderer] = None
) -> str:
    """
    Render captured front matter text to HTML.

    Returns:
        The rendered title block and metadata dump, or "" when the text
        does not hold a metadata mapping
    """
    metadata = (adapter or StructuredDataAdapter()).parse(text)
    if not isinstance(metadata, MappingValue):
        return ""
    title_block, residual = (extractor or TitleBlockExtractor()).extract(metadata)
    return (renderer or MetadataRenderer()).render(title_block, residual)


def front_matter_renderer(
    adapter: Optional[StructuredDataAdapter] = None
) -> Callable[[Any, Sequence[Token], int, Any, Any], str]:
    """Create the markdown-it render rule for ``front_matter`` tokens."""
    adapter = adapter or StructuredDataAdapter()
    extractor = TitleBlockExtractor()
    renderer = MetadataRenderer()

    def render_front_matter(self: Any, tokens: Sequence[Token], idx: int, options: Any, env: Any) -> str:
        try:
            rendered = render_metadata_text(tokens[idx].content, adapter, extractor, renderer)
            return rendered + "\n" if rendered else ""
        except Exception as e:
            logger.warning(f"Failed to render front matter: {e}", exc_info=True)
            return ""

    return render_front_matter


render_front_matter = front_matter_renderer()


def front_matter_plugin(
    md: MarkdownIt,
    callback: Optional[FrontMatterCallback] = None,
    options: Optional[FrontMatterOptions] = None
) -> None:
    """
    Install the front matter block rule and render rule on ``md``.

    Args:
        md: Host markdown-it parser
        callback: Called with the raw inner text of every recognised block
        options: Fence settings, defaults to ``---`` fences
    """
    options = options or FrontMatterOptions()
    md.block.ruler.before(
        "table",
        TOKEN_TYPE,
        front_matter_rule(options.scanner(), callback),
        {"alt": TERMINATES},
    )
    md.add_render_rule(TOKEN_TYPE, front_matter_renderer(options.adapter()))
    logger.debug(f"Front matter plugin installed (marker={options.marker!r}, min_markers={options.min_markers})")


def find_front_matter(source: str, options: Optional[FrontMatterOptions] = None) -> ScanResult:
    """Scan the start of ``source`` for a front matter block without parsing the rest."""
    options = options or FrontMatterOptions()
    state = StateBlock(normalize_source(source), MarkdownIt(), {}, [])
    return options.scanner().scan(state, 0, state.lineMax)


def extract_metadata(
    source: str,
    options: Optional[FrontMatterOptions] = None
) -> Optional[Tuple[TitleBlock, MappingValue]]:
    """
    Extract the title block and residual metadata of a document.

    Returns:
        (TitleBlock, residual) or None when the document has no usable
        front matter
    """
    options = options or FrontMatterOptions()
    match = find_front_matter(source, options)
    if not match:
        return None

    metadata = options.adapter().parse(match.token.content)
    if not isinstance(metadata, MappingValue):
        return None
    return TitleBlockExtractor().extract(metadata)

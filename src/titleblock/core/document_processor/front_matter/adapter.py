"""
Structured Data Adapter Module

Parses the text captured between front matter fences with PyYAML and
converts the result to a ``MappingValue``.

``parse`` is tolerant: malformed YAML, an empty document or a top-level
value that is not a mapping all yield ``ABSENT``, so one broken header can
never abort the rendering of the surrounding document. ``load`` is the
strict variant and raises ``FrontMatterParseError``.
"""

import logging
import re
from typing import Optional, Union

import yaml

from .scanner import DEFAULT_MARKER, DEFAULT_MIN_MARKERS
from .values import ABSENT, Absent, MappingValue, from_python

logger = logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class MetadataLoader(yaml.SafeLoader):
    """Safe YAML loader that keeps timestamps as plain strings."""


MetadataLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class FrontMatterParseError(Exception):
    """
    Exception raised when front matter text cannot be turned into a mapping.

    Attributes:
        message: Description of the parsing error
        line_number: Line number where parsing failed (if available)
        content_preview: Preview of problematic content for debugging
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        content_preview: Optional[str] = None
    ) -> None:
        self.message = message
        self.line_number = line_number
        self.content_preview = content_preview

        error_parts = [message]
        if line_number is not None:
            error_parts.append(f"at line {line_number}")
        if content_preview:
            error_parts.append(f"Content: {content_preview[:100]}...")

        super().__init__(" ".join(error_parts))


class StructuredDataAdapter:
    """
    Boundary between captured front matter text and the metadata value model.

    Args:
        marker: Fence marker unit, used to strip a trailing closing fence
        min_markers: Minimum marker units of a closing fence
    """

    def __init__(self, marker: str = DEFAULT_MARKER, min_markers: int = DEFAULT_MIN_MARKERS) -> None:
        self.closing_fence = re.compile(
            rf"^[ \t]*(?:{re.escape(marker)}){{{min_markers},}}\s*\Z",
            re.MULTILINE,
        )

    def strip_closing_fence(self, text: str) -> str:
        """Remove one trailing closing-fence line, if present."""
        return self.closing_fence.sub("", text, count=1)

    def load(self, text: str) -> MappingValue:
        """
        Parse front matter text strictly.

        Raises:
            FrontMatterParseError: If the text is not YAML or not a mapping
        """
        if not isinstance(text, str):
            raise FrontMatterParseError(f"Front matter must be text, got {type(text).__name__}")

        body = self.strip_closing_fence(text)
        try:
            data = yaml.load(body, Loader=MetadataLoader)
        except yaml.MarkedYAMLError as e:
            line_number = e.problem_mark.line + 1 if e.problem_mark is not None else None
            raise FrontMatterParseError(
                f"Invalid YAML front matter: {e.problem or e}",
                line_number=line_number,
                content_preview=body[:200]
            ) from e
        except yaml.YAMLError as e:
            raise FrontMatterParseError(
                f"Invalid YAML front matter: {e}",
                content_preview=body[:200]
            ) from e

        value = from_python(data)
        if not isinstance(value, MappingValue):
            raise FrontMatterParseError(
                f"Front matter must be a mapping, got {type(data).__name__}",
                content_preview=body[:200]
            )
        return value

    def parse(self, text: str) -> Union[MappingValue, Absent]:
        """Parse front matter text, returning ABSENT on any failure."""
        try:
            return self.load(text)
        except FrontMatterParseError as e:
            logger.debug(f"Ignoring front matter: {e}")
            return ABSENT
        except Exception as e:
            logger.warning(f"Unexpected error parsing front matter: {e}", exc_info=True)
            return ABSENT

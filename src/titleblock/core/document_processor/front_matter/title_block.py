"""
Title Block Module

Splits parsed front matter into the fields of a document title block and
the residual metadata nobody claimed.

Recognised string fields are moved out of the mapping; a recognised key
holding anything other than a string stays in the residual mapping and its
field stays empty. ``author`` and ``authors`` are always consumed.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .authors import Author, AuthorNormalizer
from .values import ABSENT, MappingValue

logger = logging.getLogger(__name__)

# source key -> TitleBlock field
TEXT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("title", "title"),
    ("subtitle", "subtitle"),
    ("abstract", "abstract"),
    ("date", "date"),
    ("date-modified", "modified"),
    ("doi", "doi"),
)
AUTHOR_KEYS: Tuple[str, ...] = ("authors", "author")


@dataclass(frozen=True)
class TitleBlock:
    """
    Typed document title block.

    Attributes:
        title: Document title
        subtitle: Document subtitle
        abstract: Abstract paragraph
        date: Publication date, as written
        modified: Modification date (``date-modified``), as written
        doi: Digital Object Identifier without the resolver prefix
        authors: Authors in source order
        claimed_keys: Source keys consumed while building the block
    """
    title: Optional[str] = None
    subtitle: Optional[str] = None
    abstract: Optional[str] = None
    date: Optional[str] = None
    modified: Optional[str] = None
    doi: Optional[str] = None
    authors: Tuple[Author, ...] = ()
    claimed_keys: Tuple[str, ...] = ()

    @property
    def has_doc_meta(self) -> bool:
        """True if the author/date/DOI section has anything to show."""
        return bool(self.authors or self.date or self.modified or self.doi)


class TitleBlockExtractor:
    """Consuming transform from a metadata mapping to (TitleBlock, residual)."""

    def __init__(self, author_normalizer: Optional[AuthorNormalizer] = None) -> None:
        self.author_normalizer = author_normalizer or AuthorNormalizer()

    def extract(self, mapping: MappingValue) -> Tuple[TitleBlock, MappingValue]:
        """
        Extract the title block from ``mapping``.

        The input mapping is left untouched; the residual is a new mapping
        whose keys are disjoint from ``TitleBlock.claimed_keys``.

        Args:
            mapping: Parsed front matter

        Returns:
            The title block and the residual mapping
        """
        fields: Dict[str, str] = {}
        claimed = []

        for key, field_name in TEXT_FIELDS:
            text = mapping.get(key).text
            if text is None:
                if key in mapping:
                    logger.debug(f"Front matter key '{key}' is not a string, leaving it in place")
                continue
            fields[field_name] = text
            claimed.append(key)

        present_author_keys = [key for key in AUTHOR_KEYS if key in mapping]
        author_value = ABSENT
        for key in AUTHOR_KEYS:
            author_value = mapping.get(key)
            if author_value is not ABSENT:
                break
        claimed.extend(present_author_keys)

        title_block = TitleBlock(
            authors=self.author_normalizer.normalize(author_value),
            claimed_keys=tuple(claimed),
            **fields,
        )
        return title_block, mapping.without(claimed)

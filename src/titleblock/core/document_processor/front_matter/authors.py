"""
Author Normalization Module

Front matter authors come in several shapes::

    author: Jane Doe

    author:
      name: Jane Doe
      orcid: 0000-0002-1825-0097
      affiliation: University of Somewhere

    authors:
      - Jane Doe
      - name: John Roe
        affiliations:
          - Institute A
          - name: Institute B

``AuthorNormalizer`` turns all of them into an ordered tuple of ``Author``
records. Items of any other shape are dropped.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .values import MappingValue, MetadataValue, ScalarValue, as_items

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Author:
    """
    A normalized document author.

    Attributes:
        name: Display name, empty when the source gave none
        orcid: ORCID identifier, if given
        affiliations: Affiliation names in source order
    """
    name: str = ""
    orcid: Optional[str] = None
    affiliations: Tuple[str, ...] = ()


class AuthorNormalizer:
    """Converts author metadata values into Author records."""

    def normalize(self, value: MetadataValue) -> Tuple[Author, ...]:
        """
        Normalize an ``author``/``authors`` value.

        Args:
            value: ABSENT, a scalar, a mapping or a sequence of those

        Returns:
            Authors in input order
        """
        authors = []
        for item in as_items(value):
            author = self.normalize_item(item)
            if author is None:
                logger.debug(f"Dropping author entry of unsupported shape: {item!r}")
                continue
            authors.append(author)
        return tuple(authors)

    def normalize_item(self, item: MetadataValue) -> Optional[Author]:
        """Normalize a single author entry, or return None if it has no usable shape."""
        if isinstance(item, ScalarValue):
            if item.text is None:
                return None
            return Author(name=item.text)

        if isinstance(item, MappingValue):
            return Author(
                name=item.get("name").text or "",
                orcid=item.get("orcid").text,
                affiliations=tuple(self.affiliations(item)),
            )

        return None

    def affiliations(self, author: MappingValue) -> List[str]:
        """
        Resolve the affiliations of an author mapping.

        A string ``affiliation`` wins; otherwise every entry of
        ``affiliations`` contributes either its string value or the string
        ``name`` of a mapping entry.
        """
        simple = author.get("affiliation").text
        if simple:
            return [simple]

        names = []
        for entry in as_items(author.get("affiliations")):
            if isinstance(entry, MappingValue):
                name = entry.get("name").text
            else:
                name = entry.text
            if name is not None:
                names.append(name)
        return names

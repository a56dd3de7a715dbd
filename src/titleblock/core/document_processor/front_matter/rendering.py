"""
Metadata Renderer Module

Renders a TitleBlock and its residual mapping to HTML. Output is
deterministic; every value taken from the document is HTML-escaped.
"""

import html
from typing import List, Tuple

import yaml

from .title_block import TitleBlock
from .values import MappingValue


DOI_BASE_URL = "https://doi.org/"
PLACEHOLDER = "&nbsp;"


class MetadataRenderer:
    """HTML renderer for document title blocks."""

    def render(self, title_block: TitleBlock, residual: MappingValue) -> str:
        """
        Render the title block followed by a dump of the residual metadata.

        The ``<pre>`` dump is always present, ``{}`` when nothing is left.
        """
        parts = []
        title = self.render_title(title_block)
        if title:
            parts.append(title)
        parts.append(f"<pre>\n{html.escape(self.dump(residual))}</pre>")
        return "\n".join(parts)

    def render_title(self, title_block: TitleBlock) -> str:
        """Render heading, subtitle, metadata block and abstract."""
        rendered = []
        if title_block.title:
            rendered.append(f"<h1>{html.escape(title_block.title)}</h1>")

        if title_block.subtitle:
            rendered.append(f'<p class="quarto-subtitle">{html.escape(title_block.subtitle)}</p>')

        if title_block.has_doc_meta:
            rendered.append(self.render_meta_block(self.meta_groups(title_block)))

        if title_block.abstract:
            rendered.append(f'<p class="quarto-abstract">{html.escape(title_block.abstract)}</p>')

        return "\n".join(rendered)

    def meta_groups(self, title_block: TitleBlock) -> List[str]:
        groups = []

        if title_block.authors:
            names, affiliations = self.author_columns(title_block)
            groups.append(self.render_meta("Author" if len(names) == 1 else "Authors", names))
            if affiliations:
                label = "Affiliation" if len(affiliations) == 1 else "Affiliations"
                groups.append(self.render_meta(label, affiliations))

        # both dates are labelled "Date"
        if title_block.date:
            groups.append(self.render_meta("Date", [html.escape(title_block.date)]))
        if title_block.modified:
            groups.append(self.render_meta("Date", [html.escape(title_block.modified)]))

        if title_block.doi:
            href = html.escape(DOI_BASE_URL + title_block.doi, quote=True)
            link = f'<a href="{href}">{html.escape(title_block.doi)}</a>'
            groups.append(self.render_meta("DOI", [link]))

        return groups

    def author_columns(self, title_block: TitleBlock) -> Tuple[List[str], List[str]]:
        """
        Build the aligned names and affiliations columns.

        Each author occupies ``max(len(affiliations), 1)`` rows of the names
        column: the name followed by placeholder rows, so that row ``i`` of
        both columns belongs to the same author.
        """
        names: List[str] = []
        affiliations: List[str] = []
        for author in title_block.authors:
            names.append(html.escape(author.name))
            names.extend([PLACEHOLDER] * (max(len(author.affiliations), 1) - 1))
            affiliations.extend(html.escape(affiliation) for affiliation in author.affiliations)
        return names, affiliations

    @staticmethod
    def render_meta(label: str, values: List[str]) -> str:
        rendered = ['<div class="quarto-meta">', f'<p class="quarto-meta-title">{label}</p>']
        rendered.extend(f"<p>{value}</p>" for value in values)
        rendered.append("</div>")
        return "\n".join(rendered)

    @staticmethod
    def render_meta_block(groups: List[str]) -> str:
        return "\n".join(['<div class="quarto-meta-block">', *groups, "</div>"])

    @staticmethod
    def dump(residual: MappingValue) -> str:
        """Serialize the residual mapping as block-style YAML."""
        return yaml.safe_dump(
            residual.to_python(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )

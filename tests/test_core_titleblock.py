"""
Essential titleblock functionality tests

End-to-end smoke tests over the public entry points:
- Rendering a Markdown document with the front matter plugin
- Extracting the title block and residual metadata
- Tolerating malformed and unterminated front matter
- Configuration-driven fence settings
"""

import json
import shutil
import tempfile
from pathlib import Path

from titleblock.core.document_processor import MarkdownParser
from titleblock.core.document_processor.front_matter import (
    FrontMatterOptions,
    extract_metadata,
    front_matter_plugin,
)
from titleblock.utils.config.manager import ConfigManager

PAPER = """---
title: On Fences
subtitle: Notes
author:
  - name: A
    affiliations: [A-affil-1, A-affil-2]
  - name: B
    affiliation: B-affil-1
date: 2024-03-01
doi: 10.5555/fence
tags: [markdown]
---

Text with a [link](https://example.org).
"""


class TestTitleblockCore:
    """Essential smoke tests for titleblock core functionality"""

    def setup_method(self):
        """Setup test environment"""
        self.temp_dir = tempfile.mkdtemp()
        self.parser = MarkdownParser().use(front_matter_plugin)

    def teardown_method(self):
        """Cleanup test environment"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_full_document_render(self):
        """Test the title block precedes the rendered body."""
        html = self.parser.render(PAPER)

        assert html.startswith("<h1>On Fences</h1>\n")
        assert '<p class="quarto-subtitle">Notes</p>' in html
        assert '<p class="quarto-meta-title">Authors</p>\n<p>A</p>\n<p>&nbsp;</p>\n<p>B</p>' in html
        assert "<p>A-affil-1</p>\n<p>A-affil-2</p>\n<p>B-affil-1</p>" in html
        assert '<a href="https://doi.org/10.5555/fence">10.5555/fence</a>' in html
        assert "<pre>\ntags:\n- markdown\n</pre>" in html
        assert html.endswith('<p>Text with a <a href="https://example.org">link</a>.</p>\n')

    def test_key_partition(self):
        """Test claimed and residual keys split the parsed keys without overlap."""
        title_block, residual = extract_metadata(PAPER)

        claimed = set(title_block.claimed_keys)
        assert claimed.isdisjoint(residual.keys())
        assert claimed | set(residual.keys()) == {
            "title", "subtitle", "author", "date", "doi", "tags"
        }

    def test_malformed_front_matter_is_silent(self):
        """Test broken YAML leaves the rest of the document intact."""
        html = self.parser.render("---\ntitle: [oops\n---\n\nStill here.\n")

        assert html == "<p>Still here.</p>\n"

    def test_unterminated_front_matter(self):
        """Test an unclosed block consumes the document without hanging."""
        tokens = self.parser.parse("---\ntitle: Open\n\nno closing fence")

        assert len(tokens) == 1
        assert tokens[0].map == [0, 3]

    def test_configured_marker(self):
        """Test fence settings from the configuration file reach the scanner."""
        config_path = Path(self.temp_dir) / "titleblock.config.json"
        config_path.write_text(json.dumps({"front_matter": {"marker": "+", "min_markers": 3}}))
        config = ConfigManager(project_root=self.temp_dir, load_env=False, environ={}).config

        parser = MarkdownParser().use(front_matter_plugin, options=FrontMatterOptions.from_config(config))
        html = parser.render("+++\ntitle: Plus\n+++\n")

        assert html.startswith("<h1>Plus</h1>")

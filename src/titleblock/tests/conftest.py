"""Shared test fixtures and configuration for titleblock tests."""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock

from titleblock.core.document_processor import MarkdownParser, normalize_source
from titleblock.core.document_processor.front_matter import front_matter_plugin


@pytest.fixture(autouse=True)
def restore_root_logger():
    """
    Restore root logger handlers and level after each test.

    The CLI reconfigures the root logger; later tests must not inherit it.
    """
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def temp_directory():
    """Provide a temporary directory for testing."""
    temp_dir = tempfile.mkdtemp()
    temp_path = Path(temp_dir)

    yield temp_path

    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def make_state():
    """Build a markdown-it block state for a source string."""
    def _make_state(src: str) -> StateBlock:
        return StateBlock(normalize_source(src), MarkdownIt(), {}, [])
    return _make_state


@pytest.fixture
def front_matter_parser():
    """MarkdownParser with the front matter plugin installed."""
    return MarkdownParser().use(front_matter_plugin)


@pytest.fixture
def sample_document():
    """A document with a full title block."""
    return """---
title: Attention Is Enough
subtitle: A Short Study
date: 2024-01-15
date-modified: 2024-02-01
doi: 10.1234/abcd.5678
abstract: We show that short documents are short.
authors:
  - name: Ada Lovelace
    orcid: 0000-0002-1825-0097
    affiliations:
      - Analytical Engines Ltd
      - name: Royal Society
  - name: Charles Babbage
    affiliation: Cambridge
keywords: [metadata, yaml]
draft: true
---

# Introduction

Body text with **bold** words.
"""

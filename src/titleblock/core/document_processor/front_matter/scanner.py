"""
Front Matter Scanner Module

Finds a leading metadata block in a markdown-it block state::

    ---
    title: My Document
    ---

The opening fence must start at line 0, column 0 and contain at least
``min_markers`` marker units. A closing fence is a line, indented less than
four columns relative to the block indent, whose marker run is at least as
long as the opening run and is followed only by whitespace. A ``...`` line
at the block indent (the YAML document end marker) also closes the block.
Without a closing line the block runs up to the enclosing bound.

Scanning never modifies the parse state; the caller applies a
``FenceMatch`` (see ``plugin.front_matter_rule``).
"""

import logging
from dataclasses import dataclass
from typing import Union

from markdown_it.rules_block import StateBlock
from markdown_it.token import Token

logger = logging.getLogger(__name__)

TOKEN_TYPE = "front_matter"
DEFAULT_MARKER = "-"
DEFAULT_MIN_MARKERS = 3
MAX_FENCE_INDENT = 4
DOCUMENT_END = "..."


class NoMatch:
    """The line does not open a front matter block. Use ``NO_MATCH``."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_MATCH"


NO_MATCH = NoMatch()


@dataclass(frozen=True)
class FenceMatch:
    """
    A front matter block found by the scanner.

    Attributes:
        token: The block token to emit
        start_line: Line of the opening fence
        end_line: Last line belonging to the block, inclusive
        bound: Line bound to impose while the token is emitted
        next_line: Line where block parsing resumes
        closed: True if an explicit closing line was found
    """
    token: Token
    start_line: int
    end_line: int
    bound: int
    next_line: int
    closed: bool


ScanResult = Union[FenceMatch, NoMatch]


class FenceScanner:
    """
    Fence-matching state machine for front matter blocks.

    Args:
        marker: Marker unit repeated to form a fence
        min_markers: Minimum number of marker units in the opening fence
    """

    def __init__(self, marker: str = DEFAULT_MARKER, min_markers: int = DEFAULT_MIN_MARKERS) -> None:
        if not marker:
            raise ValueError("Fence marker cannot be empty")
        if min_markers < 1:
            raise ValueError("min_markers must be at least 1")
        self.marker = marker
        self.min_markers = min_markers

    def _run_length(self, src: str, pos: int, end: int) -> int:
        """Number of whole marker units starting at ``pos``."""
        unit = len(self.marker)
        count = 0
        while pos + unit <= end and src.startswith(self.marker, pos):
            count += 1
            pos += unit
        return count

    def _opening_run(self, state: StateBlock, start_line: int) -> int:
        """Marker units of the opening fence, or 0 if the line cannot open a block."""
        if start_line != 0 or state.lineMax == 0 or not state.src.startswith(self.marker[0]):
            return 0
        count = self._run_length(state.src, state.bMarks[0], state.eMarks[0])
        return count if count >= self.min_markers else 0

    def validate(self, state: StateBlock, start_line: int) -> bool:
        """Check the opening fence only, without scanning the body."""
        return self._opening_run(state, start_line) > 0

    def _is_closing_fence(self, state: StateBlock, line: int, opening_run: int) -> bool:
        start = state.bMarks[line] + state.tShift[line]
        end = state.eMarks[line]

        if not state.src.startswith(self.marker[0], start):
            return False
        if state.sCount[line] - state.blkIndent >= MAX_FENCE_INDENT:
            return False

        run = self._run_length(state.src, start, end)
        if run < opening_run:
            return False

        pos = start + run * len(self.marker)
        return not state.src[pos:end].strip()

    @staticmethod
    def _is_document_end(state: StateBlock, line: int) -> bool:
        # only unindented; inside block scalars "..." is content
        if state.sCount[line] != state.blkIndent:
            return False
        start = state.bMarks[line] + state.tShift[line]
        return state.src[start:state.eMarks[line]].rstrip() == DOCUMENT_END

    def scan(self, state: StateBlock, start_line: int, end_line: int) -> ScanResult:
        """
        Look for a front matter block starting at ``start_line``.

        Args:
            state: markdown-it block state
            start_line: Line the host parser is trying to start a block on
            end_line: Exclusive bound imposed by the enclosing container

        Returns:
            FenceMatch describing the block, or NO_MATCH
        """
        opening_run = self._opening_run(state, start_line)
        if not opening_run:
            return NO_MATCH

        closing_line = None
        stop = end_line
        for line in range(start_line + 1, end_line):
            if not state.isEmpty(line) and state.sCount[line] < state.blkIndent:
                # the enclosing container ended
                stop = line
                break
            if self._is_document_end(state, line) or self._is_closing_fence(state, line, opening_run):
                closing_line = line
                break

        closed = closing_line is not None
        content_end = closing_line if closed else stop
        last_line = closing_line if closed else max(stop - 1, start_line)
        bound = closing_line if closed else stop

        token = Token(
            TOKEN_TYPE,
            "",
            0,
            map=[start_line, last_line],
            content=state.src[state.bMarks[start_line + 1]:state.bMarks[content_end]],
            markup=state.src[state.bMarks[start_line]:state.eMarks[last_line]],
            level=state.level,
            block=True,
            hidden=True,
        )

        logger.debug(
            f"Front matter block on lines {start_line}-{last_line} "
            f"({'closed' if closed else 'auto-closed'} at bound {end_line})"
        )
        return FenceMatch(
            token=token,
            start_line=start_line,
            end_line=last_line,
            bound=bound,
            next_line=bound + 1 if closed else bound,
            closed=closed,
        )

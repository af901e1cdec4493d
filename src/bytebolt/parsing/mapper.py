import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .sentinels import is_sentinel

log = logging.getLogger(__name__)

# A block head is a display line starting with a bare integer token
RE_BLOCK_HEAD = re.compile(r"^\s*(\d+)\s+")


@dataclass(frozen=True)
class DisassemblyBlock:
    source_line: int
    start_index: int
    end_index: int

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start_index, self.end_index)


def parse_blocks(text: str) -> List[DisassemblyBlock]:
    """
    Split a bytecode listing into blocks, one per block head.

    A block runs from its head to the line before the next head (or to the
    last display line). The result is sorted by source line; blocks that
    share a source line keep their listing order.
    """
    if is_sentinel(text):
        return []

    lines = text.splitlines()
    heads: List[Tuple[int, int]] = []  # (display_index, source_line)
    for idx, line in enumerate(lines):
        match = RE_BLOCK_HEAD.match(line)
        if not match:
            continue
        try:
            heads.append((idx, int(match.group(1))))
        except ValueError:
            log.debug("Skipping malformed block head at %d: %r", idx, line)
            continue

    blocks = []
    for n, (start, source_line) in enumerate(heads):
        end = heads[n + 1][0] - 1 if n + 1 < len(heads) else len(lines) - 1
        blocks.append(DisassemblyBlock(source_line, start, end))

    blocks.sort(key=lambda b: b.source_line)
    return blocks


class LineMap:
    """
    Source line <-> display line index over one bytecode listing.

    Block k covers source lines [line_k, next_higher_line - 1]; the block
    with the highest source line covers everything after it. Blocks sharing
    a source line are all hit by a query on that line.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.blocks = parse_blocks(text)
        self._coverage = self._compute_coverage(self.blocks)

    @staticmethod
    def _compute_coverage(blocks: List[DisassemblyBlock]) -> List[Tuple[int, Optional[int]]]:
        coverage: List[Tuple[int, Optional[int]]] = []
        n = len(blocks)
        nxt = 0
        for i, block in enumerate(blocks):
            # First block with a strictly greater source line
            if nxt <= i:
                nxt = i + 1
            while nxt < n and blocks[nxt].source_line == block.source_line:
                nxt += 1
            end = blocks[nxt].source_line - 1 if nxt < n else None
            coverage.append((block.source_line, end))
        return coverage

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    def coverage_of(self, block_pos: int) -> Tuple[int, Optional[int]]:
        """Coverage interval of the block at sorted position block_pos; None means unbounded."""
        return self._coverage[block_pos]

    def blocks_for(self, start_line: int, end_line: Optional[int] = None) -> List[DisassemblyBlock]:
        """Return every block whose coverage intersects [start_line, end_line]."""
        if end_line is None:
            end_line = start_line
        if end_line < start_line:
            start_line, end_line = end_line, start_line

        hits = []
        for block, (lo, hi) in zip(self.blocks, self._coverage):
            if lo > end_line:
                break
            if hi is None or hi >= start_line:
                hits.append(block)
        return hits

    def spans_for(self, start_line: int, end_line: Optional[int] = None) -> List[Tuple[int, int]]:
        return [b.span for b in self.blocks_for(start_line, end_line)]

    def source_line_at(self, index: int) -> Optional[int]:
        """Source line of the block containing display index, if any."""
        for block in self.blocks:
            if block.start_index <= index <= block.end_index:
                return block.source_line
        return None

import logging
from typing import List, Optional, Tuple

from ..parsing.mapper import LineMap
from .editor import SourceLineRange

log = logging.getLogger(__name__)

Span = Tuple[int, int]


class HighlightController:
    """
    Owns the highlights applied to a bytecode surface.

    The surface is any object offering:
        add_highlight(start, end) / remove_highlight(start, end)
        viewport_height          -> visible display lines
        scroll_to_line(line)     -> put display line `line` at the top
        call_after_refresh(cb)   -> run cb once layout has settled
    """

    def __init__(self, surface, line_map: Optional[LineMap] = None):
        self.surface = surface
        self.line_map = line_map or LineMap()
        self.highlights: List[Span] = []
        # Bumped on every clear; deferred scrolls from older events are dropped
        self._generation = 0

    def set_line_map(self, line_map: LineMap):
        self.clear()
        self.line_map = line_map

    def clear(self):
        self._generation += 1
        for start, end in self.highlights:
            self.surface.remove_highlight(start, end)
        self.highlights = []

    def apply_for_selection(self, lines: SourceLineRange, scroll: bool = False) -> List[Span]:
        self.clear()
        spans = self.line_map.spans_for(lines.start, lines.end)
        for start, end in spans:
            self.surface.add_highlight(start, end)
        self.highlights = list(spans)
        log.debug("%s -> %s", lines, spans)
        if scroll and spans:
            self.scroll_to_reveal(spans[0])
        return spans

    def scroll_to_reveal(self, span: Span):
        generation = self._generation

        def _scroll():
            if generation != self._generation:
                return
            self.surface.scroll_to_line(scroll_target(span, self.surface.viewport_height))

        self.surface.call_after_refresh(_scroll)


def scroll_target(span: Span, viewport_height: int) -> int:
    """
    Top display line that reveals span: its first line when the block is
    taller than the viewport, otherwise the line that centres its midpoint.
    """
    start, end = span
    if end - start + 1 > viewport_height:
        return start
    middle = (start + end) // 2
    return max(0, middle - viewport_height // 2)

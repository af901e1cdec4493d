"""
Custom Widgets
==============
Exposes: BytecodeView, BytecodeLine, StatusBar

BytecodeView is the highlight surface the HighlightController drives:
one BytecodeLine per display line, highlighted lines carry the "hl" class.
"""

from __future__ import annotations

from textual.containers import VerticalScroll
from textual.message import Message
from textual.widgets import Static

from ..utils.highlighter import highlight_bytecode, highlight_bytecode_line
from ..parsing.sentinels import is_sentinel


class BytecodeLine(Static):
    """A single bytecode display line."""

    def __init__(self, renderable, index: int, **kwargs) -> None:
        super().__init__(renderable, **kwargs)
        self.line_index = index

    def on_click(self) -> None:
        self.post_message(BytecodeView.LineClicked(self.line_index))


class BytecodeView(VerticalScroll):
    """
    Main pane — the bytecode listing.
    ID: #bytecode-view
    """

    class LineClicked(Message):
        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("id", "bytecode-view")
        super().__init__(**kwargs)
        self.listing: str = ""
        self._lines: list[BytecodeLine] = []
        self._generation = 0

    # ── Listing ─────────────────────────────────────────────

    def set_listing(self, listing: str) -> None:
        """Replace the whole listing."""
        self.listing = listing
        self._generation += 1
        self.remove_children()

        if is_sentinel(listing):
            line = BytecodeLine(highlight_bytecode(listing), 0, classes="sentinel")
            self._lines = [line]
        else:
            self._lines = [
                BytecodeLine(highlight_bytecode_line(text), i, id=f"bc-line-{self._generation}-{i}")
                for i, text in enumerate(listing.splitlines())
            ]
        if self._lines:
            self.mount(*self._lines)
        self.scroll_home(animate=False)

    # ── Highlight surface ───────────────────────────────────

    def add_highlight(self, start: int, end: int) -> None:
        for line in self._lines[start:end + 1]:
            line.add_class("hl")

    def remove_highlight(self, start: int, end: int) -> None:
        for line in self._lines[start:end + 1]:
            line.remove_class("hl")

    def highlighted_indices(self) -> list[int]:
        return [i for i, line in enumerate(self._lines) if line.has_class("hl")]

    @property
    def viewport_height(self) -> int:
        return self.scrollable_content_region.height or self.size.height or 1

    def scroll_to_line(self, line: int) -> None:
        self.scroll_to(y=line, animate=False)


class StatusBar(Static):
    """
    Bottom bar — current file, interpreter, sync status and
    the source line behind the last clicked bytecode line.
    ID: #status-bar
    """

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("id", "status-bar")
        super().__init__(**kwargs)
        self._file: str = ""
        self._interpreter: str = ""
        self._status: str = "idle"
        self._peek: str = ""

    def set_status(
        self,
        *,
        file: str | None = None,
        interpreter: str | None = None,
        status: str | None = None,
        peek: str | None = None,
    ) -> None:
        if file is not None:
            self._file = file
        if interpreter is not None:
            self._interpreter = interpreter
        if status is not None:
            self._status = status
        if peek is not None:
            self._peek = peek
        self._render_bar()

    def render_text(self) -> str:
        parts = []
        if self._file:
            parts.append(f"📄 {self._file}")
        if self._interpreter:
            parts.append(f"🐍 {self._interpreter}")
        parts.append(f"● {self._status}")
        if self._peek:
            parts.append(self._peek)
        return "  │  ".join(parts)

    def _render_bar(self) -> None:
        self.update(self.render_text())

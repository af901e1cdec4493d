from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .events import Signal, Subscription

Position = Tuple[int, int]  # (row, column), both 0-based


@dataclass(frozen=True)
class SourceLineRange:
    """Closed interval of 1-based source lines."""
    start: int
    end: int

    def __post_init__(self):
        if self.end < self.start:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @classmethod
    def single(cls, line: int) -> "SourceLineRange":
        return cls(line, line)

    def __contains__(self, line: int) -> bool:
        return self.start <= line <= self.end

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def __str__(self) -> str:
        if self.start == self.end:
            return f"line {self.start}"
        return f"lines {self.start}-{self.end}"


class SourceEditor:
    """
    One open source buffer: its text plus a caret/selection.

    Selection and caret moves are published through subscribe(); the
    listener receives the editor itself.
    """

    def __init__(self, path: str, text: str = ""):
        self.path = path
        self.text = text
        self.anchor: Position = (0, 0)
        self.cursor: Position = (0, 0)
        self.selection_changed = Signal("selection_changed")

    def __repr__(self) -> str:
        return f"SourceEditor({self.path!r})"

    @property
    def line_count(self) -> int:
        return max(1, len(self.text.splitlines()))

    @property
    def has_selection(self) -> bool:
        return self.anchor != self.cursor

    @property
    def listener_count(self) -> int:
        return len(self.selection_changed)

    def subscribe(self, listener) -> Subscription:
        return self.selection_changed.subscribe(listener)

    def select(self, anchor: Position, cursor: Optional[Position] = None):
        """Set the selection; a single position moves the caret."""
        self.anchor = tuple(anchor)
        self.cursor = tuple(cursor) if cursor is not None else tuple(anchor)
        self.selection_changed.emit(self)

    def move_caret(self, row: int, column: int = 0):
        self.select((row, column))

    def selected_lines(self) -> SourceLineRange:
        """Selected source lines (1-based); the caret line without a selection."""
        if not self.has_selection:
            return SourceLineRange.single(self.cursor[0] + 1)
        return SourceLineRange(self.anchor[0] + 1, self.cursor[0] + 1)

    def set_text(self, text: str):
        """Replace the buffer, keeping the selection inside it."""
        self.text = text
        last_row = self.line_count - 1
        self.anchor = (min(self.anchor[0], last_row), self.anchor[1])
        self.cursor = (min(self.cursor[0], last_row), self.cursor[1])

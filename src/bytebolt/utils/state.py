from dataclasses import dataclass, field
from typing import List, Optional

from ..parsing.mapper import LineMap
from ..parsing.sentinels import is_sentinel


@dataclass
class BytecodeState:
    """
    Everything the panel shows for the current refresh.
    """
    source_path: str = ""
    source_lines: List[str] = field(default_factory=list)

    # Listing shown in the panel; either real dis output or a sentinel
    bytecode: str = ""
    line_map: LineMap = field(default_factory=LineMap)
    last_update: float = 0.0

    @property
    def has_mapping(self) -> bool:
        return not is_sentinel(self.bytecode)

    def update_bytecode(self, text: str):
        self.bytecode = text
        self.line_map = LineMap(text)

    def get_source_line_for_bytecode(self, index: int) -> Optional[str]:
        line_num = self.line_map.source_line_at(index)
        if line_num and 0 < line_num <= len(self.source_lines):
            return self.source_lines[line_num - 1]
        return None

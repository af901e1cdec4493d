from .mapper import DisassemblyBlock, LineMap, parse_blocks
from .sentinels import (
    COMPILATION_ERROR,
    NO_DOCUMENT,
    NO_FILE,
    NO_PYTHON_FILE,
    NO_SDK,
    SENTINELS,
    is_sentinel,
)

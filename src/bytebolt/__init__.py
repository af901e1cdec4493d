from typing import Optional

from .parsing import LineMap, is_sentinel
from .compiler.driver import BytecodeDriver


def disassemble(source_text: str, interpreter: Optional[str] = None) -> str:
    """
    Pipeline: Python source -> bytecode listing (or a diagnostic sentinel)
    """
    from .compiler.toolchain import resolve_interpreter
    return BytecodeDriver(resolve_interpreter(interpreter)).produce(source_text)

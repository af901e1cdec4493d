from .driver import BytecodeDriver, DEFAULT_TIMEOUT, execute
from .toolchain import discover_interpreters, resolve_interpreter

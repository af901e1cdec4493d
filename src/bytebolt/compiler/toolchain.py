import os
import shutil
import sys
from pathlib import Path
from typing import List, Optional

CANDIDATES = ["python3", "python"]


def resolve_interpreter(configured: Optional[str] = None) -> Optional[str]:
    """
    Resolve the interpreter used to disassemble sources.

    A configured value may be a command on PATH or a path to an executable.
    With nothing configured, fall back to python3/python on PATH and finally
    to the running interpreter. Returns None when a configured value does not
    resolve.
    """
    if configured:
        found = shutil.which(configured)
        if found:
            return found
        path = Path(configured).expanduser()
        if path.is_file() and os.access(path, os.X_OK):
            return str(path)
        return None

    for name in CANDIDATES:
        found = shutil.which(name)
        if found:
            return found
    return sys.executable or None


def discover_interpreters() -> List[str]:
    """
    Returns the interpreter names found on PATH.
    """
    return [c for c in CANDIDATES if shutil.which(c)]

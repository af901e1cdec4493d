"""
File kind detection: the single place that decides whether a file is a
Python source the disassembler can handle.
"""
from pathlib import Path

SUPPORTED_EXTENSIONS = {".py"}


def is_python_file(file_path) -> bool:
    """Return True if the file extension is .py (case-insensitive)."""
    if not file_path:
        return False
    return Path(file_path).suffix.lower() in SUPPORTED_EXTENSIONS


def source_label(file_path) -> str:
    """Return a short header label for the source pane."""
    if not file_path:
        return "NO FILE"
    return f"PYTHON SOURCE — {Path(file_path).name}"

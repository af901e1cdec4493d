"""
Diagnostic sentinels: fixed strings shown in place of a bytecode listing
when no listing can be produced. Any text starting with one of these is
treated as "no mapping available".
"""

NO_SDK = "No Python SDK"
NO_FILE = "No file"
NO_PYTHON_FILE = "No Python file"
NO_DOCUMENT = "Cannot get document"
COMPILATION_ERROR = "Compilation error"

SENTINELS = (NO_SDK, NO_FILE, NO_PYTHON_FILE, NO_DOCUMENT, COMPILATION_ERROR)

# Generic marker prefix also checked by the highlighter
NO_PYTHON_PREFIX = "No Python"


def is_sentinel(text: str) -> bool:
    """Return True if the text is blank or starts with a known sentinel."""
    if not text or not text.strip():
        return True
    if text.startswith(NO_PYTHON_PREFIX):
        return True
    return text.startswith(SENTINELS)

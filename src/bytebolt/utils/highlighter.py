import re

from rich.text import Text

from ..parsing.sentinels import is_sentinel

# "  12 | >>    40 LOAD_CONST   1 (None)"
LINE_HEAD = re.compile(r"^\s*\d+(?=\s)")
JUMP_TARGET = re.compile(r">>")
OFFSET = re.compile(r"(?<=\|)\s*(?:>>)?\s*(\d+)\b")
OPNAME = re.compile(r"\b([A-Z][A-Z0-9_]{2,})\b")
ARG_REPR = re.compile(r"\(([^()]*)\)\s*$")
SECTION_HEADER = re.compile(r"^Disassembly of .*:$")
STRINGS = re.compile(r"'[^']*'|\"[^\"]*\"")


def highlight_bytecode_line(line: str, bg: str = "") -> Text:
    """
    Syntax-highlight one line of the bytecode listing.

    Custom rules applied via Rich Text styling:
      - Source line number heads -> bold yellow
      - Jump target markers (>>) -> bold magenta
      - Offsets -> dim
      - Opcode names (LOAD_CONST, CALL, ...) -> blue
      - Argument reprs in parentheses -> cyan, string literals green
      - "Disassembly of ..." headers -> bold
    """
    text = Text(line, style=bg or "")

    if SECTION_HEADER.match(line.strip()):
        text.stylize("bold", 0, len(line))
        return text

    head = LINE_HEAD.match(line)
    if head:
        text.stylize("bold yellow", 0, head.end())

    for m in JUMP_TARGET.finditer(line):
        text.stylize("bold magenta", m.start(), m.end())

    offset = OFFSET.search(line)
    if offset:
        text.stylize("dim", offset.start(1), offset.end(1))

    for m in OPNAME.finditer(line):
        text.stylize("blue", m.start(1), m.end(1))

    arg = ARG_REPR.search(line)
    if arg:
        text.stylize("cyan", arg.start(1), arg.end(1))

    for m in STRINGS.finditer(line):
        text.stylize("green", m.start(), m.end())

    return text


def highlight_bytecode(listing: str) -> Text:
    """Highlight a whole listing; sentinel text is rendered as a dim notice."""
    if is_sentinel(listing):
        return Text(listing.strip() or "(empty)", style="dim italic")

    result = Text()
    lines = listing.splitlines()
    for i, line in enumerate(lines):
        result.append_text(highlight_bytecode_line(line))
        if i < len(lines) - 1:
            result.append("\n")
    return result

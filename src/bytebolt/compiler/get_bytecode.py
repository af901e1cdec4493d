"""
Helper run under the target interpreter: compiles one Python file and
prints its bytecode, one instruction per line.

Only the first instruction of each source line starts with the line
number, so a leading integer on a display line always marks a new block:

    Disassembly of <module>:
       1 |      0  RESUME                 0
         |      2  LOAD_CONST             0 (1)
"""
import dis
import sys
import tokenize


def _line_start(instr):
    starts = instr.starts_line
    # 3.13+: starts_line is a bool and the number lives in line_number
    if isinstance(starts, bool):
        return getattr(instr, "line_number", None) if starts else None
    return starts


def _format(instr):
    line = _line_start(instr)
    head = "%4d" % line if line is not None else "    "
    marker = ">>" if instr.is_jump_target else "  "
    arg = ""
    if instr.arg is not None:
        arg = "%-6s" % instr.arg
        if instr.argrepr:
            arg += " (%s)" % instr.argrepr
    return "%s | %s %5d  %-24s %s" % (head, marker, instr.offset, instr.opname, arg)


def disassemble(code, out=sys.stdout):
    pending = [code]
    while pending:
        co = pending.pop(0)
        out.write("Disassembly of %s:\n" % getattr(co, "co_qualname", co.co_name))
        for instr in dis.get_instructions(co):
            out.write(_format(instr).rstrip() + "\n")
        out.write("\n")
        pending.extend(c for c in co.co_consts if hasattr(c, "co_code"))


def main(argv):
    if len(argv) != 2:
        sys.stderr.write("usage: get_bytecode.py FILE\n")
        return 2
    path = argv[1]
    with tokenize.open(path) as f:
        source = f.read()
    code = compile(source, path, "exec")
    disassemble(code)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))

import sys
import os
import argparse
from typing import Optional

from rich.console import Console

from .compiler.driver import BytecodeDriver
from .parsing.sentinels import is_sentinel
from .sync.workspace import Workspace
from .ui.app import run_tui
from .utils.config import ConfigManager
from .utils.highlighter import highlight_bytecode
from .utils.lang import is_python_file
from .utils.log import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(description="ByteBolt: live Python bytecode viewer")
    parser.add_argument("path", nargs="?", help="Python file or project directory")
    parser.add_argument("--python", dest="interpreter", help="Interpreter used to disassemble")
    parser.add_argument("--plain", action="store_true", help="Show bytecode without highlight sync")
    parser.add_argument("--print", dest="print_only", action="store_true",
                        help="Print the bytecode of PATH and exit")
    parser.add_argument("--no-watch", action="store_true", help="Do not refresh on file saves")
    return parser


def print_bytecode(path: str, interpreter: Optional[str] = None,
                   config: Optional[ConfigManager] = None) -> int:
    """Print the highlighted listing for one file. Returns the exit status."""
    workspace = Workspace(os.path.dirname(path), interpreter=interpreter, config=config)
    workspace.open_file(path)
    listing = BytecodeDriver().get_bytecode(workspace)
    Console().print(highlight_bytecode(listing))
    return 1 if is_sentinel(listing) else 0


def run():
    parser = _build_parser()
    args = parser.parse_args()
    setup_logging()

    if not args.path:
        print("Error: No source file or directory specified.")
        print("Usage: bytebolt <file.py|directory>")
        sys.exit(1)

    # Resolve to absolute path immediately
    abs_path = os.path.abspath(args.path)

    if not os.path.exists(abs_path):
        print(f"Error: File not found: {abs_path}")
        sys.exit(1)

    if os.path.isfile(abs_path) and not is_python_file(abs_path):
        print("Error: Unsupported file type. Use a .py file or a directory")
        sys.exit(1)

    if args.print_only:
        if not os.path.isfile(abs_path):
            print("Error: --print needs a .py file")
            sys.exit(1)
        sys.exit(print_bytecode(abs_path, args.interpreter, ConfigManager()))

    try:
        run_tui(abs_path, interpreter=args.interpreter, plain=args.plain,
                watch=False if args.no_watch else None)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"Fatal Error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    run()

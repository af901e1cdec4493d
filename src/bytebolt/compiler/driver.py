import atexit
import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Set

from ..parsing.sentinels import (
    COMPILATION_ERROR,
    NO_DOCUMENT,
    NO_FILE,
    NO_PYTHON_FILE,
    NO_SDK,
)
from ..utils.lang import is_python_file

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
HELPER_SCRIPT = Path(__file__).with_name("get_bytecode.py")


class TempFiles:
    """
    Tracks temporary files created for one driver. Each file is removed as
    soon as its call finishes; anything left over is removed at exit.
    """

    def __init__(self):
        self.paths: Set[str] = set()
        atexit.register(self.cleanup)

    def create(self, content: str, suffix: str = ".py") -> str:
        with tempfile.NamedTemporaryFile(
            "w", suffix=suffix, prefix="bytebolt-", delete=False, encoding="utf-8"
        ) as tmp:
            tmp.write(content)
            path = tmp.name
        self.paths.add(path)
        return path

    def discard(self, path: str):
        self.paths.discard(path)
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            log.debug("Could not remove %s: %s", path, e)

    def cleanup(self):
        for path in list(self.paths):
            self.discard(path)


def execute(interpreter: str, helper_script: str, target: str,
            timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """
    Run `interpreter helper_script target` and return its stdout.

    Returns None when the process writes anything to stderr (regardless of
    exit code), does not finish within the timeout, or cannot be launched.
    """
    command = [interpreter, helper_script, target]
    env = dict(os.environ, PYTHONIOENCODING="utf-8")
    try:
        process = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=env,
        )
    except (OSError, ValueError) as e:
        log.warning("Could not launch %s: %s", interpreter, e)
        return None

    try:
        stdout, stderr = process.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        log.warning("Disassembler timed out after %.1fs", timeout)
        process.kill()
        process.communicate()
        return None

    if stderr:
        log.warning("Disassembler reported errors:\n%s", stderr)
        return None
    return stdout


class BytecodeDriver:
    """
    Produces the bytecode listing for a Python source buffer by running the
    bundled helper script under the configured interpreter.
    """

    def __init__(self, interpreter: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT):
        self.interpreter = interpreter
        self.timeout = timeout
        self.temp_files = TempFiles()

    def set_interpreter(self, interpreter: Optional[str]):
        self.interpreter = interpreter

    def produce(self, source_text: str, interpreter: Optional[str] = None) -> str:
        """
        Disassemble source_text. Always returns a string: either the listing
        or one of the diagnostic sentinels.
        """
        interpreter = interpreter or self.interpreter
        if not interpreter:
            return NO_SDK

        try:
            script = self.temp_files.create(HELPER_SCRIPT.read_text(encoding="utf-8"))
        except OSError as e:
            log.warning("Could not stage helper script: %s", e)
            return COMPILATION_ERROR

        source = None
        try:
            source = self.temp_files.create(source_text)
            output = execute(interpreter, script, source, timeout=self.timeout)
        except OSError as e:
            log.warning("Could not stage source snapshot: %s", e)
            output = None
        finally:
            self.temp_files.discard(script)
            if source:
                self.temp_files.discard(source)

        if output is None:
            return COMPILATION_ERROR
        return output

    def get_bytecode(self, workspace) -> str:
        """
        Resolve the selected file and toolchain from the workspace and
        disassemble the file's current document text.
        """
        interpreter = workspace.resolve_toolchain()
        if not interpreter:
            return NO_SDK

        path = workspace.selected_file
        if path is None:
            return NO_FILE
        if not is_python_file(path):
            return NO_PYTHON_FILE

        text = workspace.document_text(path)
        if text is None:
            return NO_DOCUMENT

        return self.produce(text, interpreter)

import logging
import time
from typing import Callable, Optional

from .compiler.driver import BytecodeDriver
from .parsing.sentinels import COMPILATION_ERROR
from .sync.workspace import Workspace
from .utils.config import ConfigManager
from .utils.state import BytecodeState
from .utils.watcher import FileWatcher

log = logging.getLogger(__name__)


class BytecodeEngine:
    def __init__(self, workspace: Workspace, config: Optional[ConfigManager] = None,
                 driver: Optional[BytecodeDriver] = None):
        self.workspace = workspace
        self.config = config
        self.driver = driver or BytecodeDriver()
        self.state = BytecodeState()
        self.watcher = FileWatcher()
        self.on_update_callback: Optional[Callable[[BytecodeState], None]] = None
        # Called from the watchdog thread with the saved path
        self.on_save_callback: Optional[Callable[[str], None]] = None

    def start(self):
        watch = self.config.get("watch", True) if self.config is not None else True
        if watch and self.workspace.root:
            self.watcher.start_watching(self.workspace.root, self._on_file_saved)

    def stop(self):
        self.watcher.stop_watching()

    def _on_file_saved(self, path: str):
        if self.on_save_callback:
            self.on_save_callback(path)
        else:
            self.workspace.reload_from_disk(path)

    def refresh(self) -> BytecodeState:
        path = self.workspace.selected_file
        log.debug("Refreshing %s", path)
        try:
            text = self.driver.get_bytecode(self.workspace)
        except Exception as e:
            log.exception("Refresh error: %s", e)
            text = COMPILATION_ERROR

        source = self.workspace.document_text(path) if path else None
        self.state.source_path = path or ""
        self.state.source_lines = source.splitlines() if source else []
        self.state.update_bytecode(text)
        self.state.last_update = time.time()

        if self.on_update_callback:
            self.on_update_callback(self.state)
        return self.state

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from .lang import is_python_file

log = logging.getLogger(__name__)


class SourceSaveHandler(FileSystemEventHandler):
    """
    Listens for saves of Python files in one directory and triggers a callback
    with the resolved path.
    """
    def __init__(self, callback: Callable[[str], None]):
        self.callback = callback
        self.last_triggered = {}
        self.debounce_seconds = 0.5 # Some editors write twice per save

    def on_modified(self, event):
        if event.is_directory:
            return
        path = str(Path(event.src_path).resolve())
        if not is_python_file(path):
            return
        now = time.time()
        if now - self.last_triggered.get(path, 0) > self.debounce_seconds:
            self.last_triggered[path] = now
            self.callback(path)


class FileWatcher:
    """
    Manages the watchdog observer thread.
    """
    def __init__(self):
        self.observer: Optional[Observer] = None
        self.watched_dir: Optional[Path] = None

    def start_watching(self, directory: str, callback: Callable[[str], None]):
        """
        Starts a background thread watching a directory for .py saves.
        """
        path = Path(directory).resolve()
        if path.is_file():
            path = path.parent
        if not path.exists():
            raise FileNotFoundError(f"Cannot watch non-existent directory: {directory}")

        self.stop_watching()
        self.observer = Observer()
        self.observer.schedule(SourceSaveHandler(callback), str(path), recursive=False)
        self.observer.start()
        self.watched_dir = path
        log.debug("Watching %s", path)

    def stop_watching(self):
        if self.observer is not None and self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
        self.observer = None
        self.watched_dir = None

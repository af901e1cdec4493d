"""
Workspace: the host side of the panel: open editors, the selected file,
toolchain resolution and the file/document events the panel reacts to.
"""
import logging
import uuid
from pathlib import Path
from typing import Dict, Optional

from ..compiler.toolchain import resolve_interpreter
from .editor import SourceEditor
from .events import Signal

log = logging.getLogger(__name__)


class Workspace:
    def __init__(self, root: Optional[str] = None, interpreter: Optional[str] = None,
                 config=None):
        self.root = str(Path(root).resolve()) if root else None
        self.key = self.root or uuid.uuid4().hex
        self.interpreter = interpreter
        self.config = config
        self.editors: Dict[str, SourceEditor] = {}
        self.selected_file: Optional[str] = None

        # Listeners receive the affected path
        self.file_selected = Signal("file_selected")
        self.document_changed = Signal("document_changed")

    @staticmethod
    def _key(path) -> str:
        return str(Path(path).resolve())

    @property
    def active_editor(self) -> Optional[SourceEditor]:
        if self.selected_file is None:
            return None
        return self.editors.get(self.selected_file)

    def resolve_toolchain(self) -> Optional[str]:
        configured = self.interpreter
        if not configured and self.config is not None:
            configured = self.config.get("python", "")
        return resolve_interpreter(configured)

    def open_file(self, path) -> Optional[SourceEditor]:
        """
        Select a file, opening an editor for it if needed. Files that cannot
        be read are still selected but get no editor.
        """
        key = self._key(path)
        editor = self.editors.get(key)
        if editor is None:
            try:
                text = Path(key).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                log.warning("Cannot open %s: %s", key, e)
            else:
                editor = SourceEditor(key, text)
                self.editors[key] = editor

        changed = key != self.selected_file
        self.selected_file = key
        if changed:
            self.file_selected.emit(key)
        return editor

    def close_file(self, path):
        key = self._key(path)
        self.editors.pop(key, None)
        if self.selected_file == key:
            self.selected_file = None
            self.file_selected.emit(None)

    def document_text(self, path) -> Optional[str]:
        key = self._key(path)
        editor = self.editors.get(key)
        if editor is not None:
            return editor.text
        try:
            return Path(key).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def edit_document(self, path, text: str):
        """Replace an open document's text and publish the change."""
        key = self._key(path)
        editor = self.editors.get(key)
        if editor is None:
            return
        if editor.text == text:
            return
        editor.set_text(text)
        self.document_changed.emit(key)

    def reload_from_disk(self, path):
        """Pick up a save made outside the app."""
        key = self._key(path)
        if key not in self.editors:
            return
        try:
            text = Path(key).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Cannot reload %s: %s", key, e)
            return
        self.edit_document(key, text)

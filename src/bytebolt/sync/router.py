import logging
from enum import Enum
from typing import Optional

from ..utils.lang import is_python_file
from .editor import SourceEditor
from .events import Subscription
from .highlight import HighlightController

log = logging.getLogger(__name__)


class BindingError(RuntimeError):
    """An event reached a router that is not bound to the sending editor."""


class BindingState(str, Enum):
    UNBOUND = "unbound"
    BOUND = "bound"
    DISPOSED = "disposed"


class SelectionRouter:
    """
    Binds the highlight controller to at most one source editor.

    bind() always tears the previous binding down first, so a stale editor
    never holds a live listener.
    """

    def __init__(self, controller: HighlightController, auto_scroll: bool = True):
        self.controller = controller
        self.auto_scroll = auto_scroll
        self.state = BindingState.UNBOUND
        self.editor: Optional[SourceEditor] = None
        self._subscription: Optional[Subscription] = None

    def bind(self, editor: SourceEditor):
        if self.state == BindingState.DISPOSED:
            raise BindingError("router is disposed")
        self.unbind()
        self.editor = editor
        self._subscription = editor.subscribe(self._on_selection)
        self.state = BindingState.BOUND
        # Initial highlight from the editor's current caret/selection
        self.controller.apply_for_selection(editor.selected_lines())

    def unbind(self):
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
        self.editor = None
        self.controller.clear()
        if self.state != BindingState.DISPOSED:
            self.state = BindingState.UNBOUND

    def dispose(self):
        self.unbind()
        self.state = BindingState.DISPOSED

    def _on_selection(self, editor: SourceEditor):
        if self.state != BindingState.BOUND or editor is not self.editor:
            raise BindingError(f"selection event from unbound editor {editor!r}")
        self.controller.apply_for_selection(editor.selected_lines(), scroll=self.auto_scroll)


class HostEventRouter:
    """
    Forwards workspace file-selection and document-change events to a panel's
    update_bytecode(), for Python files only and only while the panel is
    visible.
    """

    def __init__(self, workspace, panel):
        self.workspace = workspace
        self.panel = panel
        self._subscriptions = [
            workspace.file_selected.subscribe(self._on_file_selected),
            workspace.document_changed.subscribe(self._on_document_changed),
        ]

    def _on_file_selected(self, path):
        if path is None:
            # Active file closed; drop its binding even while hidden
            self.panel.unbind()
            self._update()
            return
        if not is_python_file(path):
            return
        self._update()

    def _on_document_changed(self, path):
        if path != self.workspace.selected_file or not is_python_file(path):
            return
        self._update()

    def _update(self):
        if not getattr(self.panel, "visible", True):
            return
        self.panel.update_bytecode()

    def detach(self):
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions = []

"""
Bytecode panels. The host sees a renderable `component` and an
`update_bytecode()` command. The synced variant also keeps the listing's
highlights in step with the active source editor.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..engine import BytecodeEngine
from ..sync.highlight import HighlightController
from ..sync.registry import PanelRegistry
from ..sync.router import HostEventRouter, SelectionRouter

log = logging.getLogger(__name__)


class BytecodePanel(ABC):
    @property
    @abstractmethod
    def component(self):
        """The widget that displays the bytecode."""

    @abstractmethod
    def update_bytecode(self):
        """Re-disassemble the selected file and show the result."""


class PlainBytecodePanel(BytecodePanel):
    def __init__(self, engine: BytecodeEngine, view, registry: Optional[PanelRegistry] = None):
        self.engine = engine
        self.view = view
        self.registry = registry
        self.visible = True
        self.disposed = False
        self.host_router = HostEventRouter(engine.workspace, self)
        if registry is not None:
            registry.register(engine.workspace.key, self)

    @property
    def component(self):
        return self.view

    def update_bytecode(self):
        if self.disposed:
            return
        state = self.engine.refresh()
        self.view.set_listing(state.bytecode)

    def unbind(self):
        """Nothing is bound to an editor in plain mode."""

    def dispose(self):
        if self.disposed:
            return
        self.disposed = True
        self.host_router.detach()
        if self.registry is not None:
            self.registry.remove(self.engine.workspace.key, self)


class SyncedBytecodePanel(PlainBytecodePanel):
    def __init__(self, engine: BytecodeEngine, view, registry: Optional[PanelRegistry] = None,
                 auto_scroll: bool = True):
        super().__init__(engine, view, registry)
        self.controller = HighlightController(view)
        self.router = SelectionRouter(self.controller, auto_scroll=auto_scroll)

    def update_bytecode(self):
        if self.disposed:
            return
        self.router.unbind()
        super().update_bytecode()
        self.controller.set_line_map(self.engine.state.line_map)

        editor = self.engine.workspace.active_editor
        if editor is not None:
            self.router.bind(editor)

    def unbind(self):
        if not self.disposed:
            self.router.unbind()

    def dispose(self):
        self.router.dispose()
        super().dispose()

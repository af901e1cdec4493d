from pathlib import Path
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import DirectoryTree, Footer, Static, TextArea

from ..compiler.toolchain import discover_interpreters
from ..engine import BytecodeEngine
from ..sync.registry import PanelRegistry
from ..sync.workspace import Workspace
from ..utils.config import ConfigManager
from ..utils.lang import source_label
from ..utils.state import BytecodeState
from .panel import PlainBytecodePanel, SyncedBytecodePanel
from .widgets import BytecodeView, StatusBar

# User Palette
C_BG = "#EBEEEE"
C_TEXT = "#191A1A"
C_ACCENT1 = "#45d3ee" # Cyan
C_ACCENT2 = "#9FBFC5" # Muted Blue
C_ACCENT3 = "#94bfc1" # Teal


class BytecodeApp(App):
    """Python source on the left, its bytecode on the right, highlights kept in sync."""

    CSS = f"""
    Screen {{
        background: {C_BG};
        color: {C_TEXT};
    }}

    #main-layout {{ height: 1fr; }}

    #file-tree {{ width: 30; border: solid {C_ACCENT3}; }}

    #source-pane, #bytecode-pane {{
        width: 1fr;
        border: solid {C_ACCENT2};
        margin: 0 1;
    }}

    .pane-title {{ color: {C_ACCENT3}; text-style: bold; height: 1; }}

    #source {{ height: 1fr; }}

    BytecodeView {{ height: 1fr; }}
    BytecodeLine {{ width: 100%; height: 1; }}
    BytecodeLine.hl {{ background: {C_ACCENT2}; }}
    BytecodeLine.sentinel {{ color: #6c6c6c; text-style: italic; }}

    #status-bar {{ height: 1; background: {C_TEXT}; color: {C_ACCENT1}; }}

    Footer {{ background: {C_TEXT}; color: {C_ACCENT1}; }}
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True),
        Binding("f5", "update_bytecode", "Update", show=True),
        Binding("ctrl+b", "toggle_bytecode", "Bytecode", show=True),
        Binding("f4", "close_file", "Close", show=True),
    ]

    def __init__(self, path: str, interpreter: Optional[str] = None, plain: bool = False,
                 watch: Optional[bool] = None, config: Optional[ConfigManager] = None,
                 registry: Optional[PanelRegistry] = None):
        super().__init__()
        target = Path(path).resolve()
        self.root = target if target.is_dir() else target.parent
        self.initial_file: Optional[Path] = None if target.is_dir() else target

        self.config = config if config is not None else ConfigManager()
        if watch is not None:
            self.config.config["watch"] = watch
        self.plain = plain or not self.config.get("sync", True)

        self.workspace = Workspace(str(self.root), interpreter=interpreter, config=self.config)
        self.engine = BytecodeEngine(self.workspace, config=self.config)
        self.engine.on_update_callback = self._on_state_updated
        self.engine.on_save_callback = self._on_file_saved
        self.registry = registry if registry is not None else PanelRegistry()
        self.panel = None
        self._reload_subscription = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="main-layout"):
            yield DirectoryTree(str(self.root), id="file-tree")
            with Vertical(id="source-pane"):
                yield Static(source_label(None), id="source-title", classes="pane-title")
                yield TextArea(id="source")
            with Vertical(id="bytecode-pane"):
                yield Static("BYTECODE", classes="pane-title")
                yield BytecodeView()
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        view = self.query_one(BytecodeView)
        # Registered before the panel so a reload reaches the text area first
        self._reload_subscription = self.workspace.document_changed.subscribe(self._on_document_changed)
        if self.plain:
            self.panel = PlainBytecodePanel(self.engine, view, self.registry)
        else:
            self.panel = SyncedBytecodePanel(
                self.engine, view, self.registry,
                auto_scroll=self.config.get("auto_scroll", True),
            )
        self.query_one(StatusBar).set_status(interpreter=self._interpreter_label())
        self.engine.start()
        if self.initial_file is not None:
            self.open_path(self.initial_file)
        else:
            self.panel.update_bytecode()

    def on_unmount(self) -> None:
        self.engine.stop()
        if self._reload_subscription is not None:
            self._reload_subscription.cancel()
        if self.panel is not None:
            self.panel.dispose()

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------

    def open_path(self, path) -> None:
        """Select a file; the workspace event refreshes the panel."""
        editor = self.workspace.open_file(path)
        source = self.query_one("#source", TextArea)
        source.load_text(editor.text if editor is not None else "")
        self.query_one("#source-title", Static).update(source_label(path))
        self.query_one(StatusBar).set_status(file=Path(path).name, peek="")

    def on_directory_tree_file_selected(self, event: DirectoryTree.FileSelected) -> None:
        self.open_path(event.path)

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        editor = self.workspace.active_editor
        if editor is None:
            return
        selection = event.selection
        editor.select(selection.start, selection.end)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        path = self.workspace.selected_file
        if path is not None:
            self.workspace.edit_document(path, event.text_area.text)

    def on_bytecode_view_line_clicked(self, message: BytecodeView.LineClicked) -> None:
        state = self.engine.state
        line = state.line_map.source_line_at(message.index)
        if line is None or line < 1:
            return
        text = state.get_source_line_for_bytecode(message.index)
        if text is not None:
            self.query_one(StatusBar).set_status(peek=f"L{line}: {text.strip()}")
        source = self.query_one("#source", TextArea)
        source.move_cursor((line - 1, 0))
        source.focus()

    def _interpreter_label(self) -> str:
        interpreter = self.workspace.resolve_toolchain()
        if interpreter:
            return interpreter
        found = discover_interpreters()
        if found:
            return f"no interpreter (try --python {found[0]})"
        return "no interpreter"

    def _on_document_changed(self, path: str) -> None:
        editor = self.workspace.active_editor
        if editor is None or path != self.workspace.selected_file:
            return
        source = self.query_one("#source", TextArea)
        if source.text == editor.text:
            return
        # Changed outside the text area, e.g. a save picked up from disk
        location = source.cursor_location
        source.load_text(editor.text)
        source.move_cursor(location)

    def _on_file_saved(self, path: str) -> None:
        # Watchdog thread
        self.call_from_thread(self.workspace.reload_from_disk, path)

    def _on_state_updated(self, state: BytecodeState) -> None:
        status = "bytecode" if state.has_mapping else state.bytecode.strip() or "empty"
        self.query_one(StatusBar).set_status(status=status)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_update_bytecode(self) -> None:
        panel = self.registry.get(self.workspace.key)
        if panel is not None:
            panel.update_bytecode()

    def action_close_file(self) -> None:
        path = self.workspace.selected_file
        if path is None:
            return
        self.workspace.close_file(path)
        self.query_one("#source", TextArea).load_text("")
        self.query_one("#source-title", Static).update(source_label(None))
        self.query_one(StatusBar).set_status(file="", peek="")

    def action_toggle_bytecode(self) -> None:
        pane = self.query_one("#bytecode-pane")
        pane.display = not pane.display
        self.panel.visible = pane.display
        if self.panel.visible:
            self.panel.update_bytecode()


def run_tui(path: str, interpreter: Optional[str] = None, plain: bool = False,
            watch: Optional[bool] = None):
    app = BytecodeApp(path, interpreter=interpreter, plain=plain, watch=watch)
    app.run()

"""
Tests for the binding lifecycle (SelectionRouter) and host event forwarding
(HostEventRouter).
"""
import pytest
from unittest.mock import MagicMock

from bytebolt.parsing.mapper import LineMap
from bytebolt.sync.editor import SourceEditor
from bytebolt.sync.events import Signal
from bytebolt.sync.highlight import HighlightController
from bytebolt.sync.router import BindingError, BindingState, HostEventRouter, SelectionRouter

LISTING = "   1 | 0 RESUME\n     | 2 NOP\n   4 | 4 LOAD_CONST\n     | 6 RETURN_VALUE"


@pytest.fixture
def router(surface):
    return SelectionRouter(HighlightController(surface, LineMap(LISTING)), auto_scroll=True)


class TestBinding:

    def test_starts_unbound(self, router):
        assert router.state == BindingState.UNBOUND
        assert router.editor is None

    def test_bind_applies_initial_highlight(self, router, surface):
        editor = SourceEditor("/p/a.py", "a\nb\nc\nd\n")
        editor.anchor = editor.cursor = (3, 0)
        router.bind(editor)
        assert router.state == BindingState.BOUND
        assert surface.lit == {2, 3}
        # no scroll for the initial highlight
        assert surface.deferred == []

    def test_initial_highlight_uses_selection(self, router, surface):
        editor = SourceEditor("/p/a.py", "a\nb\nc\nd\n")
        editor.anchor, editor.cursor = (0, 0), (3, 1)
        router.bind(editor)
        assert surface.lit == {0, 1, 2, 3}

    def test_caret_event_reapplies_and_scrolls(self, router, surface):
        editor = SourceEditor("/p/a.py", "a\nb\nc\nd\n")
        router.bind(editor)
        assert surface.lit == {0, 1}
        editor.move_caret(3)
        assert surface.lit == {2, 3}
        assert len(surface.deferred) == 1

    def test_rebind_leaves_one_listener(self, router, surface):
        first = SourceEditor("/p/a.py", "a\nb\nc\nd\n")
        second = SourceEditor("/p/b.py", "a\nb\nc\nd\n")
        router.bind(first)
        router.bind(second)
        router.bind(second)
        assert first.listener_count == 0
        assert second.listener_count == 1

    def test_stale_editor_cannot_touch_highlights(self, router, surface):
        first = SourceEditor("/p/a.py", "a\nb\nc\nd\n")
        second = SourceEditor("/p/b.py", "a\nb\nc\nd\n")
        router.bind(first)
        router.bind(second)
        before = set(surface.lit)
        first.move_caret(3)
        assert surface.lit == before

    def test_unbind_clears(self, router, surface):
        editor = SourceEditor("/p/a.py", "a\nb\n")
        router.bind(editor)
        router.unbind()
        assert router.state == BindingState.UNBOUND
        assert surface.lit == set()
        assert editor.listener_count == 0

    def test_dispose_is_permanent(self, router):
        router.dispose()
        assert router.state == BindingState.DISPOSED
        with pytest.raises(BindingError):
            router.bind(SourceEditor("/p/a.py"))

    def test_event_for_foreign_editor_is_a_bug(self, router):
        editor = SourceEditor("/p/a.py")
        router.bind(editor)
        with pytest.raises(BindingError):
            router._on_selection(SourceEditor("/p/b.py"))


class FakeWorkspace:
    def __init__(self, selected=None):
        self.selected_file = selected
        self.file_selected = Signal()
        self.document_changed = Signal()


class TestHostEventRouter:

    def test_python_file_selection_updates(self):
        ws, panel = FakeWorkspace(), MagicMock(visible=True)
        HostEventRouter(ws, panel)
        ws.file_selected.emit("/p/a.py")
        panel.update_bytecode.assert_called_once()

    def test_non_python_selection_ignored(self):
        ws, panel = FakeWorkspace(), MagicMock(visible=True)
        HostEventRouter(ws, panel)
        ws.file_selected.emit("/p/readme.md")
        panel.update_bytecode.assert_not_called()
        panel.unbind.assert_not_called()

    def test_cleared_selection_unbinds_and_updates(self):
        ws, panel = FakeWorkspace(), MagicMock(visible=True)
        HostEventRouter(ws, panel)
        ws.file_selected.emit(None)
        panel.unbind.assert_called_once()
        panel.update_bytecode.assert_called_once()

    def test_cleared_selection_unbinds_hidden_panel(self):
        ws, panel = FakeWorkspace(), MagicMock(visible=False)
        HostEventRouter(ws, panel)
        ws.file_selected.emit(None)
        panel.unbind.assert_called_once()
        panel.update_bytecode.assert_not_called()

    def test_hidden_panel_not_updated(self):
        ws, panel = FakeWorkspace(), MagicMock(visible=False)
        HostEventRouter(ws, panel)
        ws.file_selected.emit("/p/a.py")
        panel.update_bytecode.assert_not_called()

    def test_document_change_of_active_file(self):
        ws, panel = FakeWorkspace(selected="/p/a.py"), MagicMock(visible=True)
        HostEventRouter(ws, panel)
        ws.document_changed.emit("/p/b.py")
        panel.update_bytecode.assert_not_called()
        ws.document_changed.emit("/p/a.py")
        panel.update_bytecode.assert_called_once()

    def test_detach(self):
        ws, panel = FakeWorkspace(selected="/p/a.py"), MagicMock(visible=True)
        router = HostEventRouter(ws, panel)
        router.detach()
        ws.file_selected.emit("/p/a.py")
        ws.document_changed.emit("/p/a.py")
        panel.update_bytecode.assert_not_called()
        assert len(ws.file_selected) == 0

from typing import Dict, Hashable, Optional


class PanelRegistry:
    """
    Maps a workspace key to its bytecode panel so commands can reach the
    panel without holding a reference. Panels remove themselves on dispose.
    """

    def __init__(self):
        self._panels: Dict[Hashable, object] = {}

    def register(self, key: Hashable, panel):
        self._panels[key] = panel

    def get(self, key: Hashable) -> Optional[object]:
        return self._panels.get(key)

    def remove(self, key: Hashable, panel=None):
        # Only drop the entry if it still belongs to this panel
        if panel is not None and self._panels.get(key) is not panel:
            return
        self._panels.pop(key, None)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._panels

    def __len__(self) -> int:
        return len(self._panels)

import pytest


class FakeSurface:
    """Records what the highlight controller does to a bytecode view."""

    def __init__(self, viewport_height=10):
        self.viewport_height = viewport_height
        self.lit = set()
        self.scrolled_to = []
        self.deferred = []

    def add_highlight(self, start, end):
        self.lit.update(range(start, end + 1))

    def remove_highlight(self, start, end):
        self.lit.difference_update(range(start, end + 1))

    def scroll_to_line(self, line):
        self.scrolled_to.append(line)

    def call_after_refresh(self, callback):
        self.deferred.append(callback)

    def settle(self):
        pending, self.deferred = self.deferred, []
        for callback in pending:
            callback()


@pytest.fixture
def surface():
    return FakeSurface()


class FakeView(FakeSurface):
    """A FakeSurface that also records listings shown by a panel."""

    def __init__(self):
        super().__init__()
        self.listings = []

    def set_listing(self, listing):
        self.listings.append(listing)


@pytest.fixture
def view():
    return FakeView()

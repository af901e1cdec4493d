from .editor import SourceEditor, SourceLineRange
from .events import Signal, Subscription
from .highlight import HighlightController
from .registry import PanelRegistry
from .router import BindingError, BindingState, HostEventRouter, SelectionRouter
from .workspace import Workspace

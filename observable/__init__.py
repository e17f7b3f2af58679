"""Publish/subscribe for plain Python objects: on, off, fire, get_events."""
from .bus import Emitter, current_target
from .errors import InvalidEventNameError, NotCallableError, ObservableConfigError, ObservableError
from .mixin import Observable, make_observable
from .models import Callback, EventTable, ObservableOptions

__version__ = "0.4.0"

__all__ = [
    "Callback",
    "Emitter",
    "EventTable",
    "InvalidEventNameError",
    "NotCallableError",
    "Observable",
    "ObservableConfigError",
    "ObservableError",
    "ObservableOptions",
    "current_target",
    "make_observable",
]

import functools
import logging
import threading
import types
from typing import Any, Callable, Dict

from . import config
from .bus import Emitter
from .models import OptionsLike, resolve_options

logger = logging.getLogger(__name__)

_create_lock = threading.Lock()


def _emitter_of(obj: Any, strict: bool) -> Emitter:
    """Return obj's private Emitter, creating it on first use."""
    try:
        state = vars(obj)
    except TypeError:
        raise TypeError(f"{type(obj).__name__} object has no __dict__ to hold an event table") from None

    emitter = state.get(config.EMITTER_ATTR)
    if emitter is None or emitter.owner is not obj:
        with _create_lock:
            emitter = state.get(config.EMITTER_ATTR)
            if emitter is None:
                emitter = Emitter(owner=obj, strict=strict)
                state[config.EMITTER_ATTR] = emitter
            elif emitter.owner is not obj:
                # copy.copy() carried the original's emitter over
                emitter = emitter.copy_for(obj)
                state[config.EMITTER_ATTR] = emitter
    # strictness follows the class attribute / latest make_observable() call
    emitter.strict = strict
    return emitter


def _per_instance(op: str, strict: bool) -> Callable[..., Any]:
    # Class-level method that forwards to the calling instance's own Emitter
    @functools.wraps(getattr(Emitter, op))
    def method(self, *args, **kwargs):
        return getattr(_emitter_of(self, strict), op)(*args, **kwargs)
    return method


class Observable:
    """
    Mixin base class: subclasses get on / off / fire / get_events backed by
    a per-instance event table created lazily, so no __init__ cooperation
    is needed.

        class Document(Observable):
            observable_strict = True
    """

    observable_strict: bool = config.STRICT

    def on(self, event=None, *callbacks):
        return _emitter_of(self, self.observable_strict).on(event, *callbacks)

    def off(self, event=None, *callbacks):
        return _emitter_of(self, self.observable_strict).off(event, *callbacks)

    def fire(self, event=None, *args, **kwargs):
        return _emitter_of(self, self.observable_strict).fire(event, *args, **kwargs)

    def get_events(self):
        return _emitter_of(self, self.observable_strict).get_events()

    def listener_count(self, event=None):
        return _emitter_of(self, self.observable_strict).listener_count(event)


def make_observable(target: Any = None, options: OptionsLike = None) -> Any:
    """
    Give `target` publish/subscribe methods and return the same object.

    - target=None: a fresh SimpleNamespace is created (standalone bus).
    - target is an instance: a new, empty event table is attached to it.
    - target is a class: every instance gets its own table on first use.

    `options` (ObservableOptions or mapping) can rename on/off/fire to dodge
    collisions with existing members; get_events and listener_count keep
    their names.

    copy.copy() of an attached instance still points at the original's
    table through the installed bound methods; use copy.deepcopy() or call
    make_observable() on the copy. Class targets and Observable subclasses
    give a shallow copy its own table.
    """
    opts = resolve_options(options)
    if target is None:
        target = types.SimpleNamespace()

    installed: Dict[str, str] = {
        opts.subscribe_name: "on",
        opts.unsubscribe_name: "off",
        opts.publish_name: "fire",
        config.INSPECT_NAME: "get_events",
        config.COUNT_NAME: "listener_count",
    }

    if isinstance(target, type):
        if not getattr(target, "__dictoffset__", 0):
            raise TypeError(f"{target.__name__} instances have no __dict__ to hold an event table")
        for name, op in installed.items():
            _log_overwrite(target, name)
            setattr(target, name, _per_instance(op, opts.strict))
        return target

    if not hasattr(target, "__dict__"):
        raise TypeError(f"{type(target).__name__} object has no __dict__ to hold an event table")

    emitter = Emitter(owner=target, strict=opts.strict)
    setattr(target, config.EMITTER_ATTR, emitter)
    for name, op in installed.items():
        _log_overwrite(target, name)
        setattr(target, name, getattr(emitter, op))
    return target


def _log_overwrite(target: Any, name: str) -> None:
    if hasattr(target, name):
        logger.debug("make_observable: replacing existing %r on %s", name, type(target).__name__)

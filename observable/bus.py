# A tiny pub/sub event table owned by one object.
import logging
import threading
from typing import Any, List, Optional, Sequence

from .errors import InvalidEventNameError, NotCallableError
from .models import Callback, EventTable

logger = logging.getLogger(__name__)

# Per-thread stack of targets whose fire() is currently dispatching
_dispatch = threading.local()


def _dispatch_stack() -> List[Any]:
    stack = getattr(_dispatch, "stack", None)
    if stack is None:
        stack = _dispatch.stack = []
    return stack


def current_target() -> Optional[Any]:
    """
    Return the object whose fire() is running on this thread, or None.

    This is the invocation context of a callback: inside a subscriber,
    current_target() is the observable that published the event.
    """
    stack = _dispatch_stack()
    return stack[-1] if stack else None


def _flatten(callbacks: Sequence[Any]) -> List[Any]:
    # on("e", [f, g]) is the same as on("e", f, g)
    if len(callbacks) == 1 and isinstance(callbacks[0], (list, tuple)):
        return list(callbacks[0])
    return list(callbacks)


class Emitter:
    """
    Event table plus the four operations that read and mutate it.

    Every operation returns `owner` so calls can be chained. `owner` is the
    object the emitter was attached to, or the emitter itself when used as
    a standalone bus.

    Callbacks are matched for removal by equality, so a bound method passed
    to off() matches the same bound method passed to on().
    """

    def __init__(self, owner: Any = None, strict: bool = False) -> None:
        self.owner = self if owner is None else owner
        self.strict = strict
        self._events: EventTable = {}
        self._lock = threading.RLock()

    def __getstate__(self) -> dict:
        # locks can't be copied or pickled; a fresh one is made on restore
        state = self.__dict__.copy()
        del state["_lock"]
        with self._lock:
            state["_events"] = {name: list(fns) for name, fns in self._events.items()}
        return state

    def __setstate__(self, state: dict) -> None:
        self.__dict__.update(state)
        self._lock = threading.RLock()

    def copy_for(self, owner: Any) -> "Emitter":
        """New emitter for `owner` starting with this one's subscriptions."""
        clone = Emitter(owner=owner, strict=self.strict)
        clone._events = self.get_events()
        return clone

    def __repr__(self) -> str:
        with self._lock:
            counts = {name: len(fns) for name, fns in self._events.items()}
        return f"Emitter(owner={type(self.owner).__name__}, events={counts})"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _accepts_event(self, op: str, event: Any) -> bool:
        if isinstance(event, str):
            return True
        if self.strict:
            raise InvalidEventNameError(f"{op}(): event name must be a str, got {type(event).__name__}")
        logger.debug("%s(): ignoring non-string event name %r", op, event)
        return False

    def _callables(self, event: str, callbacks: Sequence[Any]) -> List[Callback]:
        fns = []
        for fn in _flatten(callbacks):
            if callable(fn):
                fns.append(fn)
            elif self.strict:
                raise NotCallableError(f"on({event!r}): {fn!r} is not callable")
            else:
                logger.debug("on(%r): skipping non-callable %r", event, fn)
        return fns

    # ------------------------------------------------------------------
    # Subscribe / unsubscribe
    # ------------------------------------------------------------------

    def on(self, event: Optional[str] = None, *callbacks: Any) -> Any:
        """
        Subscribe callbacks to an event, in the order given.

            bus.on("saved", fn1, fn2)
            bus.on("saved", [fn1, fn2])
        """
        if event is None or not self._accepts_event("on", event):
            return self.owner

        fns = self._callables(event, callbacks)
        if not fns:
            return self.owner

        with self._lock:
            self._events.setdefault(event, []).extend(fns)
        logger.debug("on(%r): +%d callback(s)", event, len(fns))
        return self.owner

    def off(self, event: Optional[str] = None, *callbacks: Any) -> Any:
        """
        Unsubscribe.

            bus.off()                  # drop every event
            bus.off("saved")           # drop one event
            bus.off("saved", fn1, fn2) # drop every occurrence of fn1 and fn2
            bus.off("saved", [fn1, fn2])
        """
        if event is None:
            with self._lock:
                self._events.clear()
            logger.debug("off(): cleared all events")
            return self.owner

        if not self._accepts_event("off", event):
            return self.owner

        with self._lock:
            if not callbacks:
                self._events.pop(event, None)
                logger.debug("off(%r): removed event", event)
                return self.owner

            handlers = self._events.get(event)
            if not handlers:
                return self.owner

            doomed = _flatten(callbacks)
            remaining = [fn for fn in handlers if fn not in doomed]
            # A key never holds an empty list
            if remaining:
                self._events[event] = remaining
            else:
                del self._events[event]

        logger.debug("off(%r): -%d callback(s)", event, len(handlers) - len(remaining))
        return self.owner

    # ------------------------------------------------------------------
    # Publish
    # ------------------------------------------------------------------

    def fire(self, event: Optional[str] = None, *args: Any, **kwargs: Any) -> Any:
        """
        Call every callback of `event` with the given arguments.

        Dispatch runs over a snapshot taken on entry, so callbacks that
        subscribe or unsubscribe while it runs only affect later fires.
        A callback that raises aborts the rest of the dispatch and the
        exception propagates to the caller.
        """
        if event is None or not self._accepts_event("fire", event):
            return self.owner

        with self._lock:
            handlers = list(self._events.get(event, ()))
        if not handlers:
            return self.owner

        logger.debug("fire(%r): dispatching to %d callback(s)", event, len(handlers))
        stack = _dispatch_stack()
        stack.append(self.owner)
        try:
            for fn in handlers:
                fn(*args, **kwargs)
        finally:
            stack.pop()
        return self.owner

    # ------------------------------------------------------------------
    # Inspect
    # ------------------------------------------------------------------

    def get_events(self) -> EventTable:
        """Copy of the event table; mutating it never touches the emitter."""
        with self._lock:
            return {name: list(fns) for name, fns in self._events.items()}

    def listener_count(self, event: Optional[str] = None) -> int:
        """Callbacks registered for `event`, or for all events when None."""
        with self._lock:
            if event is None:
                return sum(len(fns) for fns in self._events.values())
            if not isinstance(event, str):
                return 0
            return len(self._events.get(event, ()))

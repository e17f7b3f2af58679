class ObservableError(Exception):
    """Base class for errors raised by the observable package."""


class ObservableConfigError(ObservableError, ValueError):
    """Bad options passed to make_observable()."""


class InvalidEventNameError(ObservableError, TypeError):
    """Event name is not a string (strict mode only)."""


class NotCallableError(ObservableError, TypeError):
    """Non-callable passed to a subscribe call (strict mode only)."""

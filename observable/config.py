# Global knobs (installed method names + input validation)

# Names under which make_observable() installs the three event operations.
# Override per target with ObservableOptions / an options mapping.
SUBSCRIBE_NAME   = "on"
UNSUBSCRIBE_NAME = "off"
PUBLISH_NAME     = "fire"

# Read-only helpers are always installed under these names (not renameable)
INSPECT_NAME = "get_events"
COUNT_NAME   = "listener_count"

# ---------------------------------------------------------------------
# Validation mode:
# - False: malformed event names / non-callables are ignored and the
#   operation returns the target unchanged (chainable, never raises).
# - True:  the same misuse raises InvalidEventNameError / NotCallableError.
# Subscriber exceptions always propagate out of fire() in both modes.
# ---------------------------------------------------------------------
STRICT = False

# Attribute that holds a target's private Emitter
EMITTER_ATTR = "_observable_emitter"

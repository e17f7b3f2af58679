import pytest

from observable import (
    Emitter,
    InvalidEventNameError,
    NotCallableError,
    Observable,
    ObservableError,
    make_observable,
)


def noop():
    pass


def test_strict_rejects_non_string_event_names():
    bus = Emitter(strict=True)
    with pytest.raises(InvalidEventNameError):
        bus.on(42, noop)
    with pytest.raises(InvalidEventNameError):
        bus.off(42)
    with pytest.raises(InvalidEventNameError):
        bus.fire(42)


def test_strict_rejects_non_callables_without_partial_subscribe():
    bus = Emitter(strict=True)
    with pytest.raises(NotCallableError):
        bus.on("e", noop, "not callable")
    assert bus.get_events() == {}


def test_strict_errors_are_type_errors():
    bus = Emitter(strict=True)
    with pytest.raises(TypeError):
        bus.on("e", 1)
    with pytest.raises(ObservableError):
        bus.fire(1.5)


def test_strict_still_allows_absent_arguments():
    bus = Emitter(strict=True)
    assert bus.fire() is bus
    assert bus.on() is bus
    assert bus.off() is bus
    assert bus.fire("unknown") is bus


def test_strict_via_options():
    target = make_observable(None, {"strict": True})
    with pytest.raises(NotCallableError):
        target.on("e", None)


def test_strict_mixin_class_attribute():
    class Strict(Observable):
        observable_strict = True

    class Lenient(Observable):
        pass

    with pytest.raises(InvalidEventNameError):
        Strict().on(7, noop)
    lenient = Lenient()
    assert lenient.on(7, noop) is lenient


def test_strict_follows_later_class_attribute_changes():
    class Doc(Observable):
        pass

    doc = Doc()
    doc.on("e", noop)
    Doc.observable_strict = True
    with pytest.raises(InvalidEventNameError):
        doc.on(7, noop)


def test_reattaching_a_class_updates_strictness_of_existing_instances():
    class Ctor:
        pass

    make_observable(Ctor)
    c = Ctor()
    assert c.on(7, noop) is c

    make_observable(Ctor, {"strict": True})
    with pytest.raises(InvalidEventNameError):
        c.on(7, noop)

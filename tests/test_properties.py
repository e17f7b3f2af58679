from hypothesis import given, strategies as st

from observable import Emitter, make_observable

event_names = st.text(min_size=1, max_size=12)


def make_callbacks(n, log):
    def cb_for(i):
        return lambda *args: log.append((i, args))
    return [cb_for(i) for i in range(n)]


@given(n=st.integers(1, 20), args=st.lists(st.integers(), max_size=4))
def test_fire_preserves_registration_order(n, args):
    log = []
    bus = Emitter()
    for cb in make_callbacks(n, log):
        bus.on("e", cb)

    bus.fire("e", *args)
    assert log == [(i, tuple(args)) for i in range(n)]


@given(a_events=st.lists(event_names, max_size=6), b_events=st.lists(event_names, max_size=6))
def test_targets_never_share_tables(a_events, b_events):
    a, b = make_observable(), make_observable()
    for name in a_events:
        a.on(name, print)
    for name in b_events:
        b.on(name, len)

    assert all(fns == [print] * a_events.count(name) for name, fns in a.get_events().items())
    assert all(fns == [len] * b_events.count(name) for name, fns in b.get_events().items())


@given(names=st.lists(event_names, min_size=1, max_size=8, unique=True))
def test_mutating_a_snapshot_leaves_the_table_alone(names):
    bus = Emitter()
    for name in names:
        bus.on(name, print)

    before = bus.get_events()
    snapshot = bus.get_events()
    for name in names:
        snapshot[name].append(len)
        del snapshot[name]

    assert bus.get_events() == before


@given(
    pattern=st.lists(st.integers(0, 3), max_size=15),
    drop=st.integers(0, 3),
)
def test_off_removes_all_occurrences_and_keeps_the_rest_in_order(pattern, drop):
    log = []
    cbs = make_callbacks(4, log)
    bus = Emitter()
    bus.on("e", [cbs[i] for i in pattern])

    bus.off("e", cbs[drop])
    expected = [cbs[i] for i in pattern if i != drop]
    assert bus.get_events().get("e", []) == expected

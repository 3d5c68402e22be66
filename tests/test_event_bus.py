"""
Dispatcher contract tests, run against every backend.

Covers:
- Subscribe / unsubscribe lifecycle and idempotence
- De-duplication of identical handlers
- Registration-order delivery and snapshot semantics
- Type-scoped once behaviour
- Exception propagation
- Introspection helpers
"""

from dataclasses import dataclass, field
from types import SimpleNamespace

import pytest

from eventunit import Event


# ══════════════════════════════════════════════════════════════
# SUBSCRIBE / UNSUBSCRIBE
# ══════════════════════════════════════════════════════════════

def test_unsubscribed_handler_is_never_called(bus):
    calls = []
    unsubscribe = bus.subscribe("t", calls.append)
    unsubscribe()

    bus.emit({"type": "t"})

    assert calls == []
    assert bus.event_types() == []


def test_unsubscribe_twice_is_noop(bus):
    other = []
    unsubscribe = bus.subscribe("t", lambda event: None)
    bus.subscribe("t", other.append)

    unsubscribe()
    unsubscribe()

    assert bus.listener_count("t") == 1
    bus.emit({"type": "t"})
    assert len(other) == 1


def test_same_handler_registered_once(bus):
    calls = []
    bus.subscribe("t", calls.append)
    bus.subscribe("t", calls.append)

    assert bus.listener_count("t") == 1
    bus.emit({"type": "t"})
    assert len(calls) == 1


def test_distinct_closures_are_independent(bus):
    calls = []
    bus.subscribe("t", lambda event: calls.append(1))
    bus.subscribe("t", lambda event: calls.append(2))

    bus.emit({"type": "t"})

    assert calls == [1, 2]


def test_listener_count_lifecycle(bus):
    assert bus.listener_count("t") == 0

    unsub1 = bus.subscribe("t", lambda event: None)
    unsub2 = bus.subscribe("t", lambda event: None)
    assert bus.listener_count("t") == 2

    unsub1()
    assert bus.listener_count("t") == 1
    unsub2()
    assert bus.listener_count("t") == 0
    assert not bus.has_handlers("t")


def test_many_unsubscribers_clean_up(bus):
    unsubscribers = [bus.subscribe("bulk", lambda event: None) for _ in range(100)]
    assert bus.listener_count("bulk") == 100

    for unsubscribe in unsubscribers:
        unsubscribe()

    assert bus.listener_count("bulk") == 0
    assert "bulk" not in bus.event_types()


# ══════════════════════════════════════════════════════════════
# EMIT
# ══════════════════════════════════════════════════════════════

def test_emit_without_subscribers_is_silent(bus):
    bus.emit({"type": "x"})
    bus.emit({"type": "error"})

    assert bus.event_types() == []


def test_handlers_fire_in_registration_order(bus):
    order = []
    bus.subscribe("t", lambda event: order.append("h1"))
    bus.subscribe("t", lambda event: order.append("h2"))
    bus.subscribe("t", lambda event: order.append("h3"))

    bus.emit({"type": "t"})

    assert order == ["h1", "h2", "h3"]


def test_payload_is_passed_unchanged(bus):
    received = []
    bus.subscribe("user.login", received.append)
    event = {"type": "user.login", "userId": "alice"}

    bus.emit(event)
    bus.emit(event)

    assert received == [event, event]
    assert all(item is event for item in received)


def test_accepts_objects_with_type_attribute(bus):
    received = []
    bus.subscribe("system.start", received.append)

    bus.emit(Event("system.start", {"processId": 42}))
    bus.emit(SimpleNamespace(type="system.start", processId=7))

    assert [item.type for item in received] == ["system.start", "system.start"]
    assert received[0].payload == {"processId": 42}


def test_other_types_are_not_delivered(bus):
    received = []
    bus.subscribe("a", received.append)

    bus.emit({"type": "b"})

    assert received == []


def test_thousand_emissions_are_all_delivered(bus):
    count = []
    bus.subscribe("rapid", lambda event: count.append(event["n"]))

    for n in range(1000):
        bus.emit({"type": "rapid", "n": n})

    assert count == list(range(1000))


def test_handler_clearing_its_type_does_not_skip_snapshot(bus):
    calls = []

    def first(event):
        calls.append("first")
        bus.off("t")

    bus.subscribe("t", first)
    bus.subscribe("t", lambda event: calls.append("second"))
    bus.subscribe("t", lambda event: calls.append("third"))

    bus.emit({"type": "t"})

    assert calls == ["first", "second", "third"]
    assert bus.listener_count("t") == 0


def test_handler_subscribed_during_emit_waits_for_next_emit(bus):
    calls = []

    def late(event):
        calls.append("late")

    def first(event):
        calls.append("first")
        bus.subscribe("t", late)

    bus.subscribe("t", first)
    bus.emit({"type": "t"})
    assert calls == ["first"]

    bus.emit({"type": "t"})
    assert calls == ["first", "first", "late"]


def test_handler_unsubscribing_later_handler_still_delivers_snapshot(bus):
    calls = []
    unsubscribers = {}

    def first(event):
        calls.append("first")
        unsubscribers["second"]()

    bus.subscribe("t", first)
    unsubscribers["second"] = bus.subscribe("t", lambda event: calls.append("second"))

    bus.emit({"type": "t"})
    bus.emit({"type": "t"})

    assert calls == ["first", "second", "first"]


def test_handler_exception_aborts_remaining_handlers(bus):
    calls = []

    def failing(event):
        raise RuntimeError("boom")

    bus.subscribe("t", lambda event: calls.append("before"))
    bus.subscribe("t", failing)
    bus.subscribe("t", lambda event: calls.append("after"))

    with pytest.raises(RuntimeError, match="boom"):
        bus.emit({"type": "t"})

    assert calls == ["before"]
    assert bus.listener_count("t") == 3


# ══════════════════════════════════════════════════════════════
# ONCE
# ══════════════════════════════════════════════════════════════

def test_once_fires_exactly_once(bus):
    calls = []
    bus.subscribe_once("once.event", calls.append)

    for _ in range(3):
        bus.emit({"type": "once.event"})

    assert len(calls) == 1
    assert bus.listener_count("once.event") == 0


def test_once_clears_every_handler_of_its_type(bus):
    regular = []
    once = []
    bus.subscribe("t", regular.append)
    bus.subscribe_once("t", once.append)

    bus.emit({"type": "t"})
    assert len(regular) == 1
    assert len(once) == 1
    assert bus.listener_count("t") == 0

    bus.emit({"type": "t"})
    assert len(regular) == 1


def test_once_leaves_other_types_alone(bus):
    bus.subscribe("other", lambda event: None)
    bus.subscribe_once("t", lambda event: None)

    bus.emit({"type": "t"})

    assert bus.event_types() == ["other"]


def test_once_registered_first_clears_type_mid_emission(bus):
    calls = []
    bus.subscribe_once("t", lambda event: calls.append("once"))
    bus.subscribe("t", lambda event: calls.append("h2"))
    bus.subscribe("t", lambda event: calls.append("h3"))

    bus.emit({"type": "t"})

    assert calls == ["once", "h2", "h3"]
    assert bus.listener_count("t") == 0

    bus.emit({"type": "t"})
    assert calls == ["once", "h2", "h3"]


def test_once_can_be_cancelled_before_firing(bus):
    calls = []
    cancel = bus.subscribe_once("t", calls.append)
    assert bus.listener_count("t") == 1

    cancel()
    bus.emit({"type": "t"})

    assert calls == []
    assert bus.listener_count("t") == 0


def test_node_style_aliases(bus):
    regular = []
    once = []
    bus.on("t", regular.append)
    bus.once("t", once.append)

    bus.emit({"type": "t"})
    bus.emit({"type": "t"})

    assert regular == [{"type": "t"}]
    assert once == [{"type": "t"}]
    assert bus.listener_count("t") == 0


# ══════════════════════════════════════════════════════════════
# OFF / REMOVE ALL / INTROSPECTION
# ══════════════════════════════════════════════════════════════

def test_off_removes_whole_bucket(bus):
    bus.subscribe("remove.test", lambda event: None)
    bus.subscribe("remove.test", lambda event: None)
    bus.subscribe("keep", lambda event: None)

    bus.off("remove.test")
    bus.off("never.seen")

    assert bus.listener_count("remove.test") == 0
    assert bus.event_types() == ["keep"]


def test_remove_all_listeners_empties_registry(bus):
    bus.subscribe("type1", lambda event: None)
    bus.subscribe("type2", lambda event: None)
    bus.subscribe_once("type3", lambda event: None)

    bus.remove_all_listeners()

    assert bus.event_types() == []
    assert bus.listener_count("type1") == 0


def test_event_types_lists_active_types(bus):
    assert bus.event_types() == []

    bus.subscribe("type1", lambda event: None)
    bus.subscribe("type2", lambda event: None)

    assert sorted(bus.event_types()) == ["type1", "type2"]
    assert bus.has_handlers("type1")
    assert not bus.has_handlers("type3")


def test_reserved_pyee_names_are_ordinary_types(bus):
    received = []
    bus.subscribe("new_listener", received.append)
    bus.subscribe("x", lambda event: None)

    bus.emit({"type": "new_listener"})

    assert received == [{"type": "new_listener"}]


def test_bound_methods_deduplicate(bus):
    class Sink:
        def __init__(self):
            self.events = []

        def handle(self, event):
            self.events.append(event)

    sink = Sink()
    bus.subscribe("t", sink.handle)
    bus.subscribe("t", sink.handle)
    bus.emit({"type": "t"})

    assert bus.listener_count("t") == 1
    assert len(sink.events) == 1


def test_instances_do_not_share_state():
    from eventunit import MemoryEventBus, NativeEventBus

    for cls in (MemoryEventBus, NativeEventBus):
        first, second = cls(), cls()
        first.subscribe("t", lambda event: None)
        assert second.listener_count("t") == 0


# ══════════════════════════════════════════════════════════════
# HANDLER IDENTITY
# ══════════════════════════════════════════════════════════════

@dataclass
class Recorder:
    """Callable with value equality and, being a dataclass, no hash."""

    name: str
    events: list = field(default_factory=list)

    def __call__(self, event):
        self.events.append(event)


def test_unhashable_handler_is_accepted(bus):
    recorder = Recorder("a")

    unsubscribe = bus.subscribe("t", recorder)
    bus.subscribe("t", recorder)
    bus.emit({"type": "t"})

    assert bus.listener_count("t") == 1
    assert recorder.events == [{"type": "t"}]

    unsubscribe()
    unsubscribe()
    assert bus.listener_count("t") == 0
    assert bus.event_types() == []


def test_unhashable_handler_once(bus):
    recorder = Recorder("a")
    cancel = bus.subscribe_once("t", recorder)
    cancel()
    bus.subscribe_once("t", recorder)

    bus.emit({"type": "t"})
    bus.emit({"type": "t"})

    assert recorder.events == [{"type": "t"}]


def test_equal_but_distinct_handlers_are_independent(bus):
    first, second = Recorder("a"), Recorder("a")
    assert first == second

    bus.subscribe("t", first)
    unsubscribe_second = bus.subscribe("t", second)
    assert bus.listener_count("t") == 2

    bus.emit({"type": "t"})
    assert first.events == [{"type": "t"}]
    assert second.events == [{"type": "t"}]

    unsubscribe_second()
    bus.emit({"type": "t"})
    assert len(first.events) == 2
    assert len(second.events) == 1

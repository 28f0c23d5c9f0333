from __future__ import annotations

from autochess.engine.events import EventQueue, EventType


def test_events_pop_in_emission_order() -> None:
    queue = EventQueue()
    queue.emit(EventType.BATTLE_STARTED, round=1)
    queue.emit(EventType.TURN_STARTED, turn=1)
    queue.emit(EventType.BATTLE_OUTCOME, outcome="win")

    assert queue.peek().event_type == EventType.BATTLE_STARTED
    assert [event.event_type for event in queue.drain()] == [
        EventType.BATTLE_STARTED,
        EventType.TURN_STARTED,
        EventType.BATTLE_OUTCOME,
    ]
    assert queue.pop() is None
    assert len(queue) == 0


def test_payload_is_indexable() -> None:
    queue = EventQueue()

    event = queue.emit(EventType.UNIT_MERGED, unit_id="mage", new_star=2, position=4)

    assert event["new_star"] == 2
    assert event.data == {"unit_id": "mage", "new_star": 2, "position": 4}


def test_subscribers_are_called_on_emit() -> None:
    queue = EventQueue()
    received = []
    queue.subscribe(EventType.HEAL_APPLIED, received.append)

    queue.emit(EventType.HEAL_APPLIED, amount=5)
    queue.emit(EventType.TURN_STARTED, turn=2)

    assert [event["amount"] for event in received] == [5]


def test_max_pending_drops_oldest() -> None:
    queue = EventQueue(max_pending=2)
    for turn in range(1, 5):
        queue.emit(EventType.TURN_STARTED, turn=turn)

    assert [event["turn"] for event in queue.drain()] == [3, 4]


def test_clear_keeps_sequence_increasing() -> None:
    queue = EventQueue()
    first = queue.emit(EventType.GAME_OVER)
    queue.clear()

    second = queue.emit(EventType.GAME_RESTARTED)

    assert second.sequence > first.sequence
    assert len(queue) == 1

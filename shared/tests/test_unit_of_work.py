"""Tests for the unit of work and the message bus."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import DomainEvent


@dataclass
class SomethingHappened(DomainEvent):
    what: str = ''


def test_registering_a_handler_twice_keeps_one():
    bus = MessageBus()
    handler = lambda event: None  # noqa: E731

    bus.register_event_handler(SomethingHappened, handler)
    bus.register_event_handler(SomethingHappened, handler)

    assert bus.handlers_for(SomethingHappened) == [handler]


def test_failing_handler_does_not_stop_the_others():
    bus = MessageBus()
    seen = []

    def broken(event):
        raise RuntimeError("broken handler")

    bus.register_event_handler(SomethingHappened, broken)
    bus.register_event_handler(SomethingHappened, lambda event: seen.append(event.what))

    bus.publish_events([SomethingHappened(what="booked")])

    assert seen == ["booked"]


@pytest.mark.django_db(transaction=True)
def test_events_are_published_after_commit(monkeypatch):
    published = []
    monkeypatch.setattr(
        "shared.application.message_bus.message_bus.publish_events",
        lambda events: published.extend(events),
    )

    with DjangoUnitOfWork() as uow:
        uow.record(SomethingHappened(what="booked"))
        assert len(uow.pending_events) == 1
        assert published == []

    assert [e.what for e in published] == ["booked"]


@pytest.mark.django_db(transaction=True)
def test_events_are_dropped_on_rollback(monkeypatch):
    published = []
    monkeypatch.setattr(
        "shared.application.message_bus.message_bus.publish_events",
        lambda events: published.extend(events),
    )

    with pytest.raises(RuntimeError):
        with DjangoUnitOfWork() as uow:
            uow.record(SomethingHappened(what="booked"))
            raise RuntimeError("fail inside the transaction")

    assert uow.pending_events == []
    assert published == []

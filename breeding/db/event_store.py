"""Breeding event storage, same in-memory / Firestore split as the pedigree store."""

import abc
import logging
from datetime import datetime, timezone

from google.cloud.firestore_v1 import DocumentReference, Transaction

from breeding.db.firestore import get_firestore_client, is_mock_mode
from breeding.db.pedigree_store import firestore_transaction
from breeding.models.breeding_event import BreedingEvent

logger = logging.getLogger(__name__)


class EventStore(abc.ABC):
    """Common interface for breeding event persistence."""

    @abc.abstractmethod
    def add_event(self, fields: dict) -> BreedingEvent:
        """Assign an ID, stamp timestamps and store a new event."""

    @abc.abstractmethod
    def get_event(self, event_id: int) -> BreedingEvent | None:
        """Return an event by numeric ID."""

    @abc.abstractmethod
    def list_events(self) -> list[BreedingEvent]:
        """Return every event in creation order."""

    @abc.abstractmethod
    def update_event(self, event_id: int, **fields) -> BreedingEvent | None:
        """Apply *fields* and return the updated event, or *None* if missing."""

    @abc.abstractmethod
    def delete_event(self, event_id: int) -> bool:
        """Delete an event; return *False* when it did not exist."""


class InMemoryEventStore(EventStore):
    """Dict-backed event store."""

    def __init__(self) -> None:
        self._events: dict[int, BreedingEvent] = {}
        self._last_id = 0

    def add_event(self, fields: dict) -> BreedingEvent:
        self._last_id += 1
        now = datetime.now(timezone.utc)
        event = BreedingEvent(id=self._last_id, created_at=now, updated_at=now, **fields)
        self._events[event.id] = event
        return event

    def get_event(self, event_id: int) -> BreedingEvent | None:
        return self._events.get(event_id)

    def list_events(self) -> list[BreedingEvent]:
        return list(self._events.values())

    def update_event(self, event_id: int, **fields) -> BreedingEvent | None:
        event = self._events.get(event_id)
        if event is None:
            return None
        updated = event.model_copy(update={**fields, "updated_at": datetime.now(timezone.utc)})
        self._events[event_id] = updated
        return updated

    def delete_event(self, event_id: int) -> bool:
        return self._events.pop(event_id, None) is not None

    def clear(self) -> None:
        self._events.clear()
        self._last_id = 0


class FirestoreEventStore(EventStore):
    """Firestore-backed store using ``breeding_events/{id}`` documents."""

    COLLECTION = "breeding_events"
    COUNTER_COLLECTION = "counters"

    def _ref(self, event_id: int) -> DocumentReference:
        return get_firestore_client().collection(self.COLLECTION).document(str(event_id))

    def _allocate_id(self) -> int:
        db = get_firestore_client()
        ref = db.collection(self.COUNTER_COLLECTION).document(self.COLLECTION)

        @firestore_transaction
        def _allocate(transaction: Transaction) -> int:
            snap = ref.get(transaction=transaction)
            current = snap.to_dict().get("value", 0) if snap.exists else 0
            transaction.set(ref, {"value": current + 1})
            return current + 1

        return _allocate(db.transaction())

    def add_event(self, fields: dict) -> BreedingEvent:
        now = datetime.now(timezone.utc)
        event = BreedingEvent(id=self._allocate_id(), created_at=now, updated_at=now, **fields)
        self._ref(event.id).set(event.model_dump())
        logger.info("Created Firestore breeding event doc %s", event.id)
        return event

    def get_event(self, event_id: int) -> BreedingEvent | None:
        snap = self._ref(event_id).get()
        if not snap.exists:
            return None
        return BreedingEvent(**snap.to_dict())

    def list_events(self) -> list[BreedingEvent]:
        events = [
            BreedingEvent(**doc.to_dict())
            for doc in get_firestore_client().collection(self.COLLECTION).stream()
        ]
        events.sort(key=lambda e: e.id)
        return events

    def update_event(self, event_id: int, **fields) -> BreedingEvent | None:
        ref = self._ref(event_id)
        if not ref.get().exists:
            return None
        ref.update({**fields, "updated_at": datetime.now(timezone.utc)})
        return BreedingEvent(**ref.get().to_dict())

    def delete_event(self, event_id: int) -> bool:
        ref = self._ref(event_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True


_event_store: EventStore | None = None


def get_event_store() -> EventStore:
    """Return the singleton ``EventStore`` instance."""
    global _event_store
    if _event_store is None:
        if is_mock_mode():
            logger.info("Using InMemoryEventStore (mock mode)")
            _event_store = InMemoryEventStore()
        else:
            logger.info("Using FirestoreEventStore")
            _event_store = FirestoreEventStore()
    return _event_store

"""Pluggable pedigree storage: in-memory for dev/test, Firestore for production.

``get_store()`` returns a singleton whose concrete type depends on whether
the app is running in mock mode.

Backends only implement record primitives (get, list, save, remove, ID
allocation). Lineage bookkeeping lives in :class:`PedigreeStore` so that the
denormalised ``ancestry`` list is rebuilt the same way everywhere: on create,
and for an animal plus all its descendants whenever its parents change.
"""

import abc
import logging
from datetime import datetime, timezone

from google.cloud.firestore_v1 import DocumentReference, Transaction
from google.cloud.firestore_v1.base_query import FieldFilter

from breeding.config import settings
from breeding.db.firestore import get_firestore_client, is_mock_mode
from breeding.models.animal import Animal, AnimalCreate, AnimalUpdate
from breeding.services.lineage import descendant_ids, walk_ancestors

logger = logging.getLogger(__name__)

_PARENT_FIELDS = ("parent_male_id", "parent_female_id")


# ---------------------------------------------------------------------------
# Abstract interface
# ---------------------------------------------------------------------------

class PedigreeStore(abc.ABC):
    """Common interface for animal persistence."""

    @abc.abstractmethod
    def get_animal(self, animal_id: int) -> Animal | None:
        """Return an animal by ID, or *None* when it does not exist."""

    @abc.abstractmethod
    def list_animals(self, gender: str | None = None, status: str | None = None) -> list[Animal]:
        """Return animals in creation order, optionally filtered."""

    @abc.abstractmethod
    def _allocate_id(self) -> int:
        """Reserve and return the next numeric animal ID."""

    @abc.abstractmethod
    def _save(self, animal: Animal) -> None:
        """Insert or overwrite a record."""

    @abc.abstractmethod
    def _remove(self, animal_id: int) -> None:
        """Delete a record."""

    # -- lineage --

    def _validate_parents(
        self,
        parent_male_id: int | None,
        parent_female_id: int | None,
        animal_id: int | None = None,
    ) -> None:
        """Raise ``ValueError`` when the proposed parents are unusable."""
        for parent_id, expected_gender in ((parent_male_id, "male"), (parent_female_id, "female")):
            if parent_id is None:
                continue
            parent = self.get_animal(parent_id)
            if parent is None:
                raise ValueError("parent_not_found")
            if parent.gender != expected_gender:
                raise ValueError("invalid_parent_gender")

        if animal_id is not None:
            forbidden = {animal_id, *descendant_ids(self.list_animals(), animal_id)}
            if parent_male_id in forbidden or parent_female_id in forbidden:
                raise ValueError("lineage_cycle")

    def _lineage_for(
        self,
        parent_male_id: int | None,
        parent_female_id: int | None,
        own_entries: list[str],
    ) -> tuple[int, list[str]]:
        """Return ``(generation, ancestry)`` for an animal with the given parents.

        Ancestry is the bounded walk of stored ancestors, followed by the
        registered pedigree entries of those ancestors and then the animal's
        own (*own_entries*).
        """
        parents = [
            p for p in (self.get_animal(pid) for pid in (parent_male_id, parent_female_id) if pid is not None)
            if p is not None
        ]
        generation = max((p.generation for p in parents), default=-1) + 1

        walked = walk_ancestors(
            self.get_animal,
            (parent_male_id, parent_female_id),
            settings.ANCESTRY_MAX_GENERATIONS,
        )
        entries = [str(a.id) for a in walked]
        for ancestor in walked:
            entries.extend(ancestor.registered_ancestry)
        entries.extend(own_entries)
        return generation, list(dict.fromkeys(entries))

    def _refresh_lineage(self, animal: Animal) -> Animal:
        generation, ancestry = self._lineage_for(
            animal.parent_male_id, animal.parent_female_id, animal.registered_ancestry
        )
        return animal.model_copy(update={"generation": generation, "ancestry": ancestry})

    # -- CRUD --

    def create_animal(self, data: AnimalCreate) -> Animal:
        """Register a new animal and derive its generation and ancestry.

        Raises ``ValueError`` with ``parent_not_found``, ``invalid_parent_gender``
        or ``animal_id_exists``.
        """
        self._validate_parents(data.parent_male_id, data.parent_female_id)

        existing = self.list_animals()
        tags = {a.animal_id for a in existing}
        if data.animal_id is not None and data.animal_id in tags:
            raise ValueError("animal_id_exists")

        tag = data.animal_id
        if tag is None:
            prefix = "M" if data.gender == "male" else "F"
            n = len(existing) + 1
            while f"{prefix}{n}" in tags:
                n += 1
            tag = f"{prefix}{n}"

        registered = data.ancestry or []
        generation, ancestry = self._lineage_for(data.parent_male_id, data.parent_female_id, registered)

        now = datetime.now(timezone.utc)
        animal = Animal(
            id=self._allocate_id(),
            animal_id=tag,
            generation=generation,
            ancestry=ancestry,
            registered_ancestry=registered,
            created_at=now,
            updated_at=now,
            **data.model_dump(exclude={"animal_id", "ancestry"}),
        )
        self._save(animal)
        logger.info("Registered animal %s (%s, generation %d)", animal.id, animal.animal_id, generation)
        return animal

    def update_animal(self, animal_id: int, data: AnimalUpdate) -> Animal | None:
        """Apply the fields set on *data*; return the updated record or *None*."""
        animal = self.get_animal(animal_id)
        if animal is None:
            return None

        fields = data.model_dump(exclude_unset=True)
        lineage_changed = any(
            name in fields and fields[name] != getattr(animal, name) for name in _PARENT_FIELDS
        )
        if lineage_changed:
            self._validate_parents(
                fields.get("parent_male_id", animal.parent_male_id),
                fields.get("parent_female_id", animal.parent_female_id),
                animal_id,
            )

        updated = animal.model_copy(update={**fields, "updated_at": datetime.now(timezone.utc)})
        if not lineage_changed:
            self._save(updated)
            return updated

        updated = self._refresh_lineage(updated)
        self._save(updated)

        descendants = descendant_ids(self.list_animals(), animal_id)
        for descendant_id in descendants:
            descendant = self.get_animal(descendant_id)
            if descendant is not None:
                self._save(self._refresh_lineage(descendant))
        logger.info(
            "Lineage of animal %s changed, rebuilt ancestry for %d descendant(s)",
            animal_id,
            len(descendants),
        )
        return updated

    def delete_animal(self, animal_id: int) -> bool:
        """Delete an animal without offspring.

        Animals that are recorded as a parent are kept (their status becomes
        ``inactive``) and *False* is returned.
        """
        has_offspring = any(
            animal_id in (a.parent_male_id, a.parent_female_id) for a in self.list_animals()
        )
        if has_offspring:
            animal = self.get_animal(animal_id)
            if animal is not None:
                self._save(animal.model_copy(update={
                    "status": "inactive",
                    "updated_at": datetime.now(timezone.utc),
                }))
            logger.info("Animal %s has offspring, marked inactive instead of deleting", animal_id)
            return False
        self._remove(animal_id)
        return True


# ---------------------------------------------------------------------------
# In-memory implementation (mock / test mode)
# ---------------------------------------------------------------------------

class InMemoryPedigreeStore(PedigreeStore):
    """Dict-backed store; insertion order is creation order."""

    def __init__(self) -> None:
        self._animals: dict[int, Animal] = {}
        self._last_id = 0

    def get_animal(self, animal_id: int) -> Animal | None:
        return self._animals.get(animal_id)

    def list_animals(self, gender: str | None = None, status: str | None = None) -> list[Animal]:
        return [
            a for a in self._animals.values()
            if (gender is None or a.gender == gender) and (status is None or a.status == status)
        ]

    def _allocate_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def _save(self, animal: Animal) -> None:
        self._animals[animal.id] = animal

    def _remove(self, animal_id: int) -> None:
        self._animals.pop(animal_id, None)

    def clear(self) -> None:
        """Drop every record and restart ID allocation."""
        self._animals.clear()
        self._last_id = 0


# ---------------------------------------------------------------------------
# Firestore implementation
# ---------------------------------------------------------------------------

class FirestorePedigreeStore(PedigreeStore):
    """Firestore-backed store using ``animals/{id}`` documents."""

    COLLECTION = "animals"
    COUNTER_COLLECTION = "counters"

    def _ref(self, animal_id: int) -> DocumentReference:
        return get_firestore_client().collection(self.COLLECTION).document(str(animal_id))

    def get_animal(self, animal_id: int) -> Animal | None:
        snap = self._ref(animal_id).get()
        if not snap.exists:
            return None
        return Animal(**snap.to_dict())

    def list_animals(self, gender: str | None = None, status: str | None = None) -> list[Animal]:
        query = get_firestore_client().collection(self.COLLECTION)
        if gender is not None:
            query = query.where(filter=FieldFilter("gender", "==", gender))
        if status is not None:
            query = query.where(filter=FieldFilter("status", "==", status))
        animals = [Animal(**doc.to_dict()) for doc in query.stream()]
        # Sorted client-side to avoid a composite index per filter combination
        animals.sort(key=lambda a: a.id)
        return animals

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

    def _save(self, animal: Animal) -> None:
        self._ref(animal.id).set(animal.model_dump())

    def _remove(self, animal_id: int) -> None:
        self._ref(animal_id).delete()


def firestore_transaction(func):
    """Decorator to run *func* inside a Firestore transaction."""
    from google.cloud.firestore_v1 import transactional
    return transactional(func)


# ---------------------------------------------------------------------------
# Singleton factory
# ---------------------------------------------------------------------------
_store: PedigreeStore | None = None


def get_store() -> PedigreeStore:
    """Return the singleton ``PedigreeStore`` instance."""
    global _store
    if _store is None:
        if is_mock_mode():
            logger.info("Using InMemoryPedigreeStore (mock mode)")
            _store = InMemoryPedigreeStore()
        else:
            logger.info("Using FirestorePedigreeStore")
            _store = FirestorePedigreeStore()
    return _store

"""Lineage graph helpers used to keep denormalised ancestry in sync."""

from collections.abc import Callable, Iterable
from typing import Optional

from breeding.models.animal import Animal

AnimalLookup = Callable[[int], Optional[Animal]]


def walk_ancestors(
    lookup: AnimalLookup,
    parent_ids: Iterable[Optional[int]],
    max_generations: int,
) -> list[Animal]:
    """Return ancestors reachable from *parent_ids*, generation by generation.

    *parent_ids* are generation 1. Within a generation sires come before
    dams. Unknown IDs are skipped and each animal is visited once, so a
    corrupt (cyclic) pedigree still terminates.
    """
    found: list[Animal] = []
    seen: set[int] = set()
    frontier = [pid for pid in parent_ids if pid is not None]
    generation = 1
    while frontier and generation <= max_generations:
        next_frontier: list[int] = []
        for animal_id in frontier:
            if animal_id in seen:
                continue
            seen.add(animal_id)
            animal = lookup(animal_id)
            if animal is None:
                continue
            found.append(animal)
            next_frontier.extend(
                pid for pid in (animal.parent_male_id, animal.parent_female_id) if pid is not None
            )
        frontier = next_frontier
        generation += 1
    return found


def descendant_ids(animals: Iterable[Animal], animal_id: int) -> list[int]:
    """Return IDs of every descendant of *animal_id*, breadth-first."""
    children: dict[int, list[int]] = {}
    for animal in animals:
        for pid in (animal.parent_male_id, animal.parent_female_id):
            if pid is not None:
                children.setdefault(pid, []).append(animal.id)

    result: list[int] = []
    seen = {animal_id}
    queue = list(children.get(animal_id, []))
    while queue:
        current = queue.pop(0)
        if current in seen:
            continue
        seen.add(current)
        result.append(current)
        queue.extend(children.get(current, []))
    return result

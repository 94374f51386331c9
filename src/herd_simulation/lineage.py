"""Lineage index over a generated herd.

Animals only carry a ``parent_id`` back-reference. The index inverts it once
per herd so tree traversal is linear rather than a scan per node.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from src.herd_simulation.models import Animal

logger = logging.getLogger(__name__)


class LineageIndex:
    """Parent -> children mapping for one herd snapshot.

    Children are listed in herd order, which is birth order, so traversal
    output is stable across runs with the same inputs.
    """

    def __init__(self, herd: Sequence[Animal]):
        self._animals: Dict[int, Animal] = {}
        self._children: Dict[int, List[int]] = {}
        self._founder_ids: List[int] = []

        for animal in herd:
            self._animals[animal.id] = animal
            self._children.setdefault(animal.id, [])
            if animal.is_founder:
                self._founder_ids.append(animal.id)
            else:
                self._children.setdefault(animal.parent_id, []).append(animal.id)

        logger.debug(
            "Built lineage index: %d animals, %d founders",
            len(self._animals), len(self._founder_ids),
        )

    def __len__(self) -> int:
        return len(self._animals)

    def __contains__(self, animal_id: int) -> bool:
        return animal_id in self._animals

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, animal_id: int) -> Animal:
        """Return the animal with *animal_id*; raises ``KeyError`` if unknown."""
        try:
            return self._animals[animal_id]
        except KeyError:
            raise KeyError(f"Animal {animal_id} not in herd") from None

    def founders(self) -> List[Animal]:
        return [self._animals[aid] for aid in self._founder_ids]

    def children_of(self, animal_id: int) -> List[Animal]:
        self.get(animal_id)
        return [self._animals[cid] for cid in self._children[animal_id]]

    def parent_of(self, animal_id: int) -> Optional[Animal]:
        animal = self.get(animal_id)
        if animal.parent_id is None:
            return None
        return self._animals[animal.parent_id]

    def unit_members(self, unit: int) -> List[Animal]:
        """All animals descending from (or founding) *unit*, in herd order."""
        return [a for a in self._animals.values() if a.unit == unit]

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def walk(self, root_id: int) -> Iterator[Tuple[Animal, int]]:
        """Depth-first pre-order walk yielding ``(animal, depth)``.

        The root is yielded at depth 0. This is the order a nested tree view
        lays nodes out in.
        """
        root = self.get(root_id)
        stack = [(root, 0)]
        while stack:
            animal, depth = stack.pop()
            yield animal, depth
            # Push in reverse so the first-born child is visited first.
            for child_id in reversed(self._children[animal.id]):
                stack.append((self._animals[child_id], depth + 1))

    def descendants_of(self, animal_id: int) -> List[Animal]:
        """Every descendant of *animal_id*, depth-first, excluding itself."""
        return [animal for animal, depth in self.walk(animal_id) if depth > 0]

    def ancestors_of(self, animal_id: int) -> List[Animal]:
        """Parent, grandparent, ... up to the founder (nearest first)."""
        ancestors = []
        parent = self.parent_of(animal_id)
        while parent is not None:
            ancestors.append(parent)
            parent = self.parent_of(parent.id)
        return ancestors

    def generation_counts(self) -> Dict[int, int]:
        counts: Dict[int, int] = {}
        for animal in self._animals.values():
            counts[animal.generation] = counts.get(animal.generation, 0) + 1
        return dict(sorted(counts.items()))

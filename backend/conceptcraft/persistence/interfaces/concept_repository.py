"""Abstract repository interface for the Concept aggregate."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from conceptcraft.domain.concept.models import Concept


class ConceptRepository(ABC):

    @abstractmethod
    def save_concept(self, concept: Concept) -> None:
        """Insert or update the concept row, keyed by uid."""
        ...

    @abstractmethod
    def get_by_ref(self, ref: str) -> Optional[Concept]:
        """Return the Concept whose uid or slug equals ref, or None."""
        ...

    @abstractmethod
    def get_by_uids(self, uids: List[str]) -> List[Concept]:
        """Return the concepts for the given uids in the same order, skipping missing ones."""
        ...

    @abstractmethod
    def list_all(self) -> List[Concept]:
        """Return all concepts, newest first."""
        ...

    @abstractmethod
    def delete(self, uid: str) -> bool:
        """Delete the concept row only. Returns True if deleted."""
        ...

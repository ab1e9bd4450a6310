"""Abstract repository interface for frameworks and their concept reference lists."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from conceptcraft.domain.framework.models import Framework


class FrameworkRepository(ABC):

    @abstractmethod
    def save_framework(self, framework: Framework) -> None:
        """Insert or update the whole framework document (name + reference list)."""
        ...

    @abstractmethod
    def get_by_id(self, framework_id: str) -> Optional[Framework]:
        ...

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Framework]:
        """Case-insensitive display-name lookup."""
        ...

    @abstractmethod
    def list_all(self) -> List[Framework]:
        """Return all frameworks ordered by creation time."""
        ...

    @abstractmethod
    def list_linking(self, concept_uid: str) -> List[Framework]:
        """Return every framework whose reference list contains concept_uid."""
        ...

    @abstractmethod
    def delete(self, framework_id: str) -> bool:
        """Delete unconditionally. Returns True if deleted."""
        ...

    @abstractmethod
    def move_concept(self, concept_uid: str, target_id: Optional[str]) -> Optional[Framework]:
        """
        Remove concept_uid from every framework, then append it to target_id.
        Both steps commit together or not at all. Returns the target framework,
        or None when target_id is None or does not exist (the concept is then
        left unlinked).
        """
        ...

    @abstractmethod
    def prune_references(self, valid_uids: set[str], apply: bool = True) -> dict[str, List[str]]:
        """
        Drop references whose uid is not in valid_uids. Returns
        {framework_id: [removed uids]}; with apply=False nothing is written.
        """
        ...

"""Application service for frameworks: owns the framework ↔ concept relationship."""
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Tuple

from conceptcraft.domain.common.result import ErrorKind, Result
from conceptcraft.domain.concept.models import Concept
from conceptcraft.domain.framework.models import Framework
from conceptcraft.domain.framework.service import FrameworkDomainService
from conceptcraft.persistence.interfaces.concept_repository import ConceptRepository
from conceptcraft.persistence.interfaces.framework_repository import FrameworkRepository

logger = logging.getLogger(__name__)


class FrameworkAppService:
    def __init__(self, repo: FrameworkRepository, concept_repo: ConceptRepository):
        self._repo = repo
        self._concepts = concept_repo
        self._domain = FrameworkDomainService()

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def get_framework(self, framework_id: str) -> Optional[Framework]:
        return self._repo.get_by_id(framework_id)

    def resolve_framework(self, ref: str) -> Optional[Framework]:
        """Look a framework up by slug, then by display name."""
        ref = ref.strip()
        return self._repo.get_by_id(ref) or self._repo.get_by_id(ref.lower()) or self._repo.find_by_name(ref)

    def list_frameworks(self) -> List[Framework]:
        return self._repo.list_all()

    def populate(self, framework: Framework) -> List[Concept]:
        """Concepts referenced by the framework, in list order. Dangling refs are skipped."""
        return self._concepts.get_by_uids(framework.concepts)

    def list_populated(self) -> List[Tuple[Framework, List[Concept]]]:
        return [(fw, self.populate(fw)) for fw in self._repo.list_all()]

    # ------------------------------------------------------------------
    # CREATE / RENAME / DELETE
    # ------------------------------------------------------------------
    def create_framework(self, data: dict) -> Result[Framework]:
        result = self._domain.create_framework(data)
        if not result.is_success:
            return result
        if self._repo.get_by_id(result.value.id) is not None:
            return Result.fail(f"Framework '{result.value.id}' already exists.", ErrorKind.ALREADY_EXISTS)
        self._repo.save_framework(result.value)
        logger.info("Created framework '%s'", result.value.id)
        return result

    def rename_framework(self, framework_id: str, data: dict) -> Result[Framework]:
        framework = self._repo.get_by_id(framework_id)
        if framework is None:
            return Result.not_found(f"Framework '{framework_id}' not found.")
        result = self._domain.rename(framework, data)
        if not result.is_success:
            return result
        self._repo.save_framework(result.value)
        return result

    def delete_framework(self, framework_id: str) -> Result[bool]:
        framework = self._repo.get_by_id(framework_id)
        if framework is None:
            return Result.not_found(f"Framework '{framework_id}' not found.")
        check = self._domain.check_deletable(framework)
        if not check.is_success:
            return Result.fail(check.error, check.kind)
        self._repo.delete(framework_id)
        logger.info("Deleted framework '%s'", framework_id)
        return Result.ok(True)

    # ------------------------------------------------------------------
    # RELATIONSHIP
    # ------------------------------------------------------------------
    def add_concept(self, framework_id: str, concept_ref: str) -> Result[Framework]:
        framework = self._repo.get_by_id(framework_id)
        if framework is None:
            return Result.not_found(f"Framework '{framework_id}' not found.")
        concept = self._concepts.get_by_ref(concept_ref)
        if concept is None:
            return Result.not_found(f"Concept '{concept_ref}' not found.")

        result = self._domain.link_concept(framework, concept.uid)
        if not result.is_success:
            return result
        self._repo.save_framework(result.value)
        logger.info("Linked concept '%s' to framework '%s'", concept.id, framework_id)
        return result

    def remove_concept(self, framework_id: str, concept_ref: str) -> Result[Framework]:
        framework = self._repo.get_by_id(framework_id)
        if framework is None:
            return Result.not_found(f"Framework '{framework_id}' not found.")

        # A deleted concept can still be unlinked by its raw uid.
        concept = self._concepts.get_by_ref(concept_ref)
        uid = concept.uid if concept is not None else concept_ref

        result = self._domain.unlink_concept(framework, uid)
        if not result.is_success:
            return result
        self._repo.save_framework(result.value)
        logger.info("Unlinked concept '%s' from framework '%s'", concept_ref, framework_id)
        return result

    def move_concept(self, concept: Concept, target_ref: Optional[str]) -> Optional[Framework]:
        """
        Make target the only framework linking the concept. Runs as one
        transaction in the repository; an unknown target leaves the concept unlinked.
        """
        target = self.resolve_framework(target_ref) if target_ref else None
        if target_ref and target is None:
            logger.warning(
                "Reassign target framework '%s' not found; concept '%s' is now unlinked",
                target_ref,
                concept.id,
            )
        return self._repo.move_concept(concept.uid, target.id if target else None)

    # ------------------------------------------------------------------
    # MAINTENANCE
    # ------------------------------------------------------------------
    def prune_dangling_refs(self, apply: bool = True) -> Dict[str, List[str]]:
        valid = {c.uid for c in self._concepts.list_all()}
        removed = self._repo.prune_references(valid, apply=apply)
        if removed and apply:
            logger.info("Pruned dangling concept references: %s", removed)
        return removed

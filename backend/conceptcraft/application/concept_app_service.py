"""Application service: orchestrates validate → domain op → persist for concepts."""
from __future__ import annotations
import asyncio
import logging
from typing import List, Optional

from conceptcraft.ai.concept_generator import ConceptGenerator
from conceptcraft.application.framework_app_service import FrameworkAppService
from conceptcraft.domain.common.result import Result
from conceptcraft.domain.concept.models import Concept, ConceptDraft
from conceptcraft.domain.concept.service import ConceptDomainService
from conceptcraft.domain.framework.models import Framework
from conceptcraft.persistence.interfaces.concept_repository import ConceptRepository

logger = logging.getLogger(__name__)


class ConceptAppService:
    def __init__(self, repo: ConceptRepository, frameworks: FrameworkAppService, generator: ConceptGenerator):
        self._repo = repo
        self._frameworks = frameworks
        self._generator = generator
        self._domain = ConceptDomainService()

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def get_concept(self, ref: str) -> Optional[Concept]:
        return self._repo.get_by_ref(ref)

    def list_concepts(self) -> List[Concept]:
        return self._repo.list_all()

    # ------------------------------------------------------------------
    # CREATE
    # ------------------------------------------------------------------
    def create_concept(self, data: dict) -> Result[Concept]:
        result = self._domain.create_concept(data)
        if not result.is_success:
            return result
        concept = result.value
        available = self._domain.check_slug_available(concept.id, self._repo.get_by_ref(concept.id))
        if not available.is_success:
            return Result.fail(available.error, available.kind)
        self._repo.save_concept(concept)
        return Result.ok(concept)

    async def generate_draft(self, concept_name: str, framework_name: str) -> ConceptDraft:
        return await self._generator.generate(concept_name, framework_name)

    async def auto_create_concept(self, concept_name: str, framework_ref: str) -> Result[Concept]:
        """Generate, persist and link a concept in one go."""
        if not concept_name.strip():
            return Result.fail("Concept name is required and cannot be empty.")
        framework = await asyncio.to_thread(self._frameworks.resolve_framework, framework_ref)
        if framework is None:
            return Result.not_found(f"Framework '{framework_ref}' not found.")

        draft = await self._generator.generate(concept_name, framework.name)
        return await asyncio.to_thread(self._save_draft, draft, framework)

    def _save_draft(self, draft: ConceptDraft, framework: Framework) -> Result[Concept]:
        result = self._domain.create_from_draft(draft, framework.id)
        if not result.is_success:
            return result
        concept = result.value
        available = self._domain.check_slug_available(concept.id, self._repo.get_by_ref(concept.id))
        if not available.is_success:
            return Result.fail(available.error, available.kind)

        self._repo.save_concept(concept)
        linked = self._frameworks.add_concept(framework.id, concept.uid)
        if not linked.is_success:
            return Result.fail(linked.error, linked.kind)
        logger.info("Auto-created concept '%s' in framework '%s'", concept.id, framework.id)
        return Result.ok(concept)

    # ------------------------------------------------------------------
    # UPDATE
    # ------------------------------------------------------------------
    def update_concept(self, ref: str, data: dict) -> Result[Concept]:
        """Partial update. A 'framework' key moves the concept to that framework; a blank one unlinks it."""
        concept = self._repo.get_by_ref(ref)
        if concept is None:
            return Result.not_found(f"Concept '{ref}' not found.")

        result = self._domain.update_concept(concept, data)
        if not result.is_success:
            return result
        updated = result.value
        if updated.id != concept.id:
            available = self._domain.check_slug_available(
                updated.id, self._repo.get_by_ref(updated.id), uid=concept.uid
            )
            if not available.is_success:
                return Result.fail(available.error, available.kind)

        if "framework" in data:
            target = self._frameworks.move_concept(updated, data["framework"] or None)
            updated.framework = target.id if target else None
        self._repo.save_concept(updated)
        return Result.ok(updated)

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------
    def delete_concept(self, ref: str) -> Result[bool]:
        """Deletes the record only; framework references to it are left in place."""
        concept = self._repo.get_by_ref(ref)
        if concept is None or not self._repo.delete(concept.uid):
            return Result.not_found(f"Concept '{ref}' not found.")
        return Result.ok(True)

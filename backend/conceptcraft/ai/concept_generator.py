"""Concept generator: builds a ConceptDraft from three LLM calls plus deterministic rules.

Each step degrades to canned content on its own, so ``generate`` never raises
for string inputs. Nothing is cached; every call goes back to the gateway.
"""
from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from conceptcraft.ai import prompts
from conceptcraft.ai.fallbacks import (
    ConceptInfo,
    canned_concept_info,
    canned_metaphor,
    canned_story,
)
from conceptcraft.ai.gateway import GenerationUnavailable, LLMGateway
from conceptcraft.ai.parser import coerce_str, coerce_str_list, coerce_str_map, extract_json
from conceptcraft.domain.concept.models import ConceptDraft, Story
from conceptcraft.domain.concept.rules import determine_difficulty, estimate_time

logger = logging.getLogger(__name__)


class ConceptGenerator:
    def __init__(self, gateway: LLMGateway):
        self._gateway = gateway

    async def _ask(self, prompt: str, step: str) -> Optional[str]:
        try:
            return await self._gateway.complete(prompt)
        except GenerationUnavailable as exc:
            logger.info("Step '%s' degraded to canned content: %s", step, exc)
            return None

    # ------------------------------------------------------------------
    # Step 1: description, features, use cases
    # ------------------------------------------------------------------
    async def search_concept_info(self, concept: str, framework: str, degraded: List[str]) -> ConceptInfo:
        fallback = canned_concept_info(concept, framework)
        text = await self._ask(prompts.concept_info_prompt(concept, framework), "description")
        parsed = extract_json(text, "object") if text is not None else None
        if parsed is None:
            if text is not None:
                logger.info("Unparseable concept info for %s/%s, using canned content", framework, concept)
            degraded.append("description")
            return fallback

        return ConceptInfo(
            description=coerce_str(parsed.get("description")) or fallback.description,
            features=coerce_str_list(parsed.get("features")) or fallback.features,
            use_cases=coerce_str_list(parsed.get("useCases")) or fallback.use_cases,
        )

    # ------------------------------------------------------------------
    # Step 2: metaphor (plain text)
    # ------------------------------------------------------------------
    async def generate_metaphor(self, concept: str, framework: str, degraded: List[str]) -> str:
        text = await self._ask(prompts.metaphor_prompt(concept, framework), "metaphor")
        metaphor = text.strip() if text else ""
        if not metaphor:
            degraded.append("metaphor")
            return canned_metaphor(concept, framework)
        return metaphor

    # ------------------------------------------------------------------
    # Step 3: interactive story
    # ------------------------------------------------------------------
    async def generate_story(
        self,
        concept: str,
        framework: str,
        features: Sequence[str],
        use_cases: Sequence[str],
        degraded: List[str],
    ) -> Story:
        fallback = canned_story(concept, framework, features)
        text = await self._ask(prompts.story_prompt(concept, framework, features, use_cases), "story")
        parsed = extract_json(text, "object") if text is not None else None
        if parsed is None:
            degraded.append("story")
            return fallback

        # Untrusted shape: take each field only when it has the right type.
        return Story(
            title=coerce_str(parsed.get("title")) or fallback.title,
            scene=coerce_str(parsed.get("scene")) or fallback.scene,
            problem=coerce_str(parsed.get("problem")) or fallback.problem,
            solution=coerce_str(parsed.get("solution")) or fallback.solution,
            characters=coerce_str_map(parsed.get("characters")) or fallback.characters,
            mapping=coerce_str_map(parsed.get("mapping")) or fallback.mapping,
            real_world=coerce_str(parsed.get("realWorld")) or fallback.real_world,
        )

    async def generate(self, concept_name: str, framework_name: str) -> ConceptDraft:
        concept = concept_name.strip()
        framework = framework_name.strip()
        logger.info("Generating AI content for: %s in %s", concept, framework)

        degraded: List[str] = []
        info = await self.search_concept_info(concept, framework, degraded)
        metaphor = await self.generate_metaphor(concept, framework, degraded)
        story = await self.generate_story(concept, framework, info.features, info.use_cases, degraded)

        difficulty = determine_difficulty(concept, info.features)
        draft = ConceptDraft(
            title=f"{concept} in {framework}",
            description=info.description,
            metaphor=metaphor,
            difficulty=difficulty,
            estimated_time=estimate_time(difficulty),
            story=story,
            degraded=tuple(degraded),
        )
        if degraded:
            logger.info("Draft for %s/%s used canned content for: %s", framework, concept, ", ".join(degraded))
        return draft

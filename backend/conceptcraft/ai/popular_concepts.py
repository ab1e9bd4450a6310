"""Popular-concepts finder: asks the LLM for trending concept names of a framework."""
from __future__ import annotations
import logging
from typing import List, Optional

from conceptcraft.ai import prompts
from conceptcraft.ai.fallbacks import canned_popular_concepts
from conceptcraft.ai.gateway import GenerationUnavailable, LLMGateway
from conceptcraft.ai.parser import coerce_str_list, extract_json

logger = logging.getLogger(__name__)


class PopularConceptsFinder:
    """
    Returns concept names only. Filtering out concepts that are already
    attached to the framework is left to the caller.
    """

    def __init__(self, gateway: LLMGateway):
        self._gateway = gateway

    async def find(self, framework_name: str, search: Optional[str] = None) -> List[str]:
        framework = framework_name.strip()
        try:
            text = await self._gateway.complete(prompts.popular_concepts_prompt(framework, search))
        except GenerationUnavailable as exc:
            logger.info("Popular concepts for '%s' degraded to canned list: %s", framework, exc)
            return canned_popular_concepts(framework)

        concepts = coerce_str_list(extract_json(text, "array"))
        if not concepts:
            logger.info("Unparseable popular concepts for '%s', using canned list", framework)
            return canned_popular_concepts(framework)
        return concepts

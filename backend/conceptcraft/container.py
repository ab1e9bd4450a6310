"""Dependency injection container: wires implementations to interfaces."""
from __future__ import annotations
from functools import lru_cache

from conceptcraft.ai.concept_generator import ConceptGenerator
from conceptcraft.ai.gateway import LLMGateway, build_gateway
from conceptcraft.ai.popular_concepts import PopularConceptsFinder
from conceptcraft.application.concept_app_service import ConceptAppService
from conceptcraft.application.framework_app_service import FrameworkAppService
from conceptcraft.core.config import LLMSettings
from conceptcraft.persistence.repositories.sqlite.sqlite_concept_repository import SqliteConceptRepository
from conceptcraft.persistence.repositories.sqlite.sqlite_framework_repository import SqliteFrameworkRepository


@lru_cache(maxsize=1)
def get_concept_repo() -> SqliteConceptRepository:
    return SqliteConceptRepository()


@lru_cache(maxsize=1)
def get_framework_repo() -> SqliteFrameworkRepository:
    return SqliteFrameworkRepository()


@lru_cache(maxsize=1)
def get_llm_gateway() -> LLMGateway:
    return build_gateway(LLMSettings.from_env())


@lru_cache(maxsize=1)
def get_concept_generator() -> ConceptGenerator:
    return ConceptGenerator(get_llm_gateway())


@lru_cache(maxsize=1)
def get_popular_concepts_finder() -> PopularConceptsFinder:
    return PopularConceptsFinder(get_llm_gateway())


@lru_cache(maxsize=1)
def get_framework_app_service() -> FrameworkAppService:
    return FrameworkAppService(repo=get_framework_repo(), concept_repo=get_concept_repo())


@lru_cache(maxsize=1)
def get_concept_app_service() -> ConceptAppService:
    return ConceptAppService(
        repo=get_concept_repo(),
        frameworks=get_framework_app_service(),
        generator=get_concept_generator(),
    )


def reset() -> None:
    """Drop cached singletons (tests swap the gateway or database between runs)."""
    for getter in (
        get_concept_repo,
        get_framework_repo,
        get_llm_gateway,
        get_concept_generator,
        get_popular_concepts_finder,
        get_framework_app_service,
        get_concept_app_service,
    ):
        getter.cache_clear()

"""AI-assisted authoring endpoints."""
from __future__ import annotations
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, StringConstraints

from conceptcraft.ai.popular_concepts import PopularConceptsFinder
from conceptcraft.api.auth import get_current_admin
from conceptcraft.api.serializers import raise_for_result, serialize_concept, serialize_draft
from conceptcraft.application.concept_app_service import ConceptAppService
from conceptcraft.container import get_concept_app_service, get_popular_concepts_finder

router = APIRouter(prefix="/admin", tags=["generation"])

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class GenerateConceptBody(BaseModel):
    concept: Name
    framework: Name


class PopularConceptsBody(BaseModel):
    search: Optional[str] = None


@router.post("/generate-concept")
async def generate_concept(
    body: GenerateConceptBody,
    svc: ConceptAppService = Depends(get_concept_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    draft = await svc.generate_draft(body.concept, body.framework)
    return {"conceptData": serialize_draft(draft)}


@router.post("/auto-create-concept", status_code=status.HTTP_201_CREATED)
async def auto_create_concept(
    body: GenerateConceptBody,
    svc: ConceptAppService = Depends(get_concept_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    result = await svc.auto_create_concept(body.concept, body.framework)
    raise_for_result(result)
    return {"concept": serialize_concept(result.value)}


@router.get("/popular-concepts/{framework}")
async def popular_concepts(
    framework: str,
    finder: PopularConceptsFinder = Depends(get_popular_concepts_finder),
    current_admin: dict = Depends(get_current_admin),
):
    return {"concepts": await finder.find(framework)}


@router.post("/popular-concepts/{framework}")
async def search_popular_concepts(
    framework: str,
    body: PopularConceptsBody,
    finder: PopularConceptsFinder = Depends(get_popular_concepts_finder),
    current_admin: dict = Depends(get_current_admin),
):
    return {"concepts": await finder.find(framework, body.search)}

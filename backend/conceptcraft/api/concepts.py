"""Admin concept CRUD endpoints."""
from __future__ import annotations
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from conceptcraft.api.auth import get_current_admin
from conceptcraft.api.serializers import raise_for_result, serialize_concept
from conceptcraft.application.concept_app_service import ConceptAppService
from conceptcraft.container import get_concept_app_service

router = APIRouter(tags=["concepts"])


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class StoryBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    scene: str = ""
    problem: str = ""
    solution: str = ""
    characters: Dict[str, str] = {}
    mapping: Dict[str, str] = {}
    real_world: str = Field(default="", alias="realWorld")


class ConceptCreateBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    metaphor: str
    difficulty: str
    estimated_time: str = Field(alias="estimatedTime")
    story: Optional[StoryBody] = None
    framework: Optional[str] = None


class ConceptUpdateBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    metaphor: Optional[str] = None
    difficulty: Optional[str] = None
    estimated_time: Optional[str] = Field(default=None, alias="estimatedTime")
    story: Optional[StoryBody] = None
    framework: Optional[str] = None


# ------------------------------------------------------------------
# Health check
# ------------------------------------------------------------------
@router.get("/health")
def health():
    return {"status": "ok"}


# ------------------------------------------------------------------
# Concept endpoints
# ------------------------------------------------------------------
@router.get("/admin/concepts")
def list_concepts(
    svc: ConceptAppService = Depends(get_concept_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    return {"concepts": [serialize_concept(c) for c in svc.list_concepts()]}


@router.get("/admin/concepts/{concept_id}")
def get_concept(
    concept_id: str,
    svc: ConceptAppService = Depends(get_concept_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    concept = svc.get_concept(concept_id)
    if not concept:
        raise HTTPException(status_code=404, detail="Concept not found")
    return {"concept": serialize_concept(concept)}


@router.post("/admin/concepts", status_code=status.HTTP_201_CREATED)
def create_concept(
    body: ConceptCreateBody,
    svc: ConceptAppService = Depends(get_concept_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    result = svc.create_concept(body.model_dump())
    raise_for_result(result)
    return {"concept": serialize_concept(result.value)}


@router.put("/admin/concepts/{concept_id}")
def update_concept(
    concept_id: str,
    body: ConceptUpdateBody,
    svc: ConceptAppService = Depends(get_concept_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    result = svc.update_concept(concept_id, body.model_dump(exclude_unset=True))
    raise_for_result(result)
    return {"concept": serialize_concept(result.value)}


@router.delete("/admin/concepts/{concept_id}")
def delete_concept(
    concept_id: str,
    svc: ConceptAppService = Depends(get_concept_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    raise_for_result(svc.delete_concept(concept_id))
    return {"message": "Concept deleted successfully"}

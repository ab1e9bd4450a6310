"""Admin framework endpoints and framework ↔ concept relationship edits."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from conceptcraft.api.auth import get_current_admin
from conceptcraft.api.serializers import raise_for_result, serialize_framework
from conceptcraft.application.framework_app_service import FrameworkAppService
from conceptcraft.container import get_framework_app_service

router = APIRouter(prefix="/admin/frameworks", tags=["frameworks"])


class FrameworkCreateBody(BaseModel):
    id: str
    name: str


class FrameworkRenameBody(BaseModel):
    name: str


class LinkConceptBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    concept_id: str = Field(alias="conceptId")


@router.get("")
def list_frameworks(
    svc: FrameworkAppService = Depends(get_framework_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    return {"frameworks": [serialize_framework(fw, concepts) for fw, concepts in svc.list_populated()]}


@router.get("/{framework_id}")
def get_framework(
    framework_id: str,
    svc: FrameworkAppService = Depends(get_framework_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    framework = svc.get_framework(framework_id)
    if not framework:
        raise HTTPException(status_code=404, detail=f"Framework '{framework_id}' not found.")
    return {"framework": serialize_framework(framework, svc.populate(framework))}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_framework(
    body: FrameworkCreateBody,
    svc: FrameworkAppService = Depends(get_framework_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    result = svc.create_framework(body.model_dump())
    raise_for_result(result)
    return {"framework": serialize_framework(result.value, [])}


@router.put("/{framework_id}")
def rename_framework(
    framework_id: str,
    body: FrameworkRenameBody,
    svc: FrameworkAppService = Depends(get_framework_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    result = svc.rename_framework(framework_id, body.model_dump())
    raise_for_result(result)
    return {"framework": serialize_framework(result.value, svc.populate(result.value))}


@router.delete("/{framework_id}")
def delete_framework(
    framework_id: str,
    svc: FrameworkAppService = Depends(get_framework_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    raise_for_result(svc.delete_framework(framework_id))
    return {"message": "Framework deleted successfully"}


# ------------------------------------------------------------------
# Relationship endpoints
# ------------------------------------------------------------------
@router.post("/{framework_id}/concepts")
def add_concept(
    framework_id: str,
    body: LinkConceptBody,
    svc: FrameworkAppService = Depends(get_framework_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    result = svc.add_concept(framework_id, body.concept_id)
    raise_for_result(result)
    return {"framework": serialize_framework(result.value, svc.populate(result.value))}


@router.delete("/{framework_id}/concepts/{concept_id}")
def remove_concept(
    framework_id: str,
    concept_id: str,
    svc: FrameworkAppService = Depends(get_framework_app_service),
    current_admin: dict = Depends(get_current_admin),
):
    result = svc.remove_concept(framework_id, concept_id)
    raise_for_result(result)
    return {"framework": serialize_framework(result.value, svc.populate(result.value))}

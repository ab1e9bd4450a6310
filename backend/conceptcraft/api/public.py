"""Public read API consumed by the learner-facing front end. No auth."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from conceptcraft.api.serializers import serialize_public_concept
from conceptcraft.application.concept_app_service import ConceptAppService
from conceptcraft.application.framework_app_service import FrameworkAppService
from conceptcraft.container import get_concept_app_service, get_framework_app_service

router = APIRouter(prefix="/api", tags=["public"])


@router.get("/concepts")
def all_frameworks(svc: FrameworkAppService = Depends(get_framework_app_service)):
    return {
        "frameworks": [
            {
                "id": fw.id,
                "name": fw.name,
                "concepts": [serialize_public_concept(c) for c in concepts],
            }
            for fw, concepts in svc.list_populated()
        ]
    }


@router.get("/concepts/{framework_id}")
def framework_concepts(framework_id: str, svc: FrameworkAppService = Depends(get_framework_app_service)):
    framework = svc.get_framework(framework_id)
    if not framework:
        raise HTTPException(status_code=404, detail="Framework not found")
    return {"concepts": [serialize_public_concept(c) for c in svc.populate(framework)]}


@router.get("/concepts/{framework_id}/{concept_id}")
def concept_detail(
    framework_id: str,
    concept_id: str,
    svc: ConceptAppService = Depends(get_concept_app_service),
):
    # framework_id only scopes the URL; concepts are looked up globally by slug
    concept = svc.get_concept(concept_id)
    if not concept:
        raise HTTPException(status_code=404, detail="Concept not found")
    return serialize_public_concept(concept)

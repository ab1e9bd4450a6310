"""JSON shapes shared by the admin and public routers, plus Result → HTTP mapping."""
from __future__ import annotations
from typing import Iterable, Optional

from fastapi import HTTPException

from conceptcraft.domain.common.result import ErrorKind, Result
from conceptcraft.domain.concept.models import Concept, ConceptDraft, Story
from conceptcraft.domain.framework.models import Framework

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID: 400,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.ALREADY_LINKED: 409,
    ErrorKind.NOT_LINKED: 409,
    ErrorKind.HAS_CONCEPTS: 409,
}


def raise_for_result(result: Result) -> None:
    if not result.is_success:
        raise HTTPException(status_code=_STATUS_BY_KIND.get(result.kind, 400), detail=result.error)


def serialize_story(s: Optional[Story]) -> Optional[dict]:
    if s is None:
        return None
    return {
        "title": s.title,
        "scene": s.scene,
        "problem": s.problem,
        "solution": s.solution,
        "characters": s.characters,
        "mapping": s.mapping,
        "realWorld": s.real_world,
    }


def serialize_concept(c: Concept) -> dict:
    return {
        "_id": c.uid,
        "id": c.id,
        "title": c.title,
        "description": c.description,
        "metaphor": c.metaphor,
        "difficulty": c.difficulty,
        "estimatedTime": c.estimated_time,
        "story": serialize_story(c.story),
        "framework": c.framework,
        "createdAt": c.created_at,
        "updatedAt": c.updated_at,
    }


def serialize_public_concept(c: Concept) -> dict:
    return {
        "id": c.id,
        "title": c.title,
        "description": c.description,
        "metaphor": c.metaphor,
        "difficulty": c.difficulty,
        "estimatedTime": c.estimated_time,
        "story": serialize_story(c.story),
    }


def serialize_draft(d: ConceptDraft) -> dict:
    return {
        "title": d.title,
        "description": d.description,
        "metaphor": d.metaphor,
        "difficulty": d.difficulty,
        "estimatedTime": d.estimated_time,
        "story": serialize_story(d.story),
    }


def serialize_framework(f: Framework, concepts: Iterable[Concept]) -> dict:
    return {
        "id": f.id,
        "name": f.name,
        "concepts": [serialize_concept(c) for c in concepts],
        "createdAt": f.created_at,
        "updatedAt": f.updated_at,
    }

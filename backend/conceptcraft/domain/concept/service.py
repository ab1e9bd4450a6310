"""Domain service: pure business logic for creating and editing concepts."""
from __future__ import annotations
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from conceptcraft.domain.common.result import ErrorKind, Result
from conceptcraft.domain.concept.models import Concept, ConceptDraft, Story
from conceptcraft.domain.concept.rules import slugify, validate_concept_content


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex


def story_from_dict(data: Optional[dict]) -> Optional[Story]:
    if not data:
        return None
    return Story(
        title=data.get("title") or "",
        scene=data.get("scene") or "",
        problem=data.get("problem") or "",
        solution=data.get("solution") or "",
        characters=dict(data.get("characters") or {}),
        mapping=dict(data.get("mapping") or {}),
        real_world=data.get("real_world") or "",
    )


class ConceptDomainService:
    """
    Pure domain operations. No I/O. All methods return Result[T].
    The application layer calls these and then persists via the repository.
    """

    def create_concept(self, data: dict) -> Result[Concept]:
        validation = validate_concept_content(data)
        if not validation.is_success:
            return Result.fail(validation.error)

        now = _now_iso()
        concept = Concept(
            uid=_new_id(),
            id=data["id"],
            title=data["title"].strip(),
            description=data["description"].strip(),
            metaphor=data["metaphor"].strip(),
            difficulty=data["difficulty"],
            estimated_time=data["estimated_time"].strip(),
            story=story_from_dict(data.get("story")),
            framework=data.get("framework"),
            created_at=now,
            updated_at=now,
        )
        return Result.ok(concept)

    def create_from_draft(self, draft: ConceptDraft, framework_id: str) -> Result[Concept]:
        slug = slugify(draft.title)
        if not slug:
            return Result.fail(f"Cannot derive an identifier from title '{draft.title}'.")

        now = _now_iso()
        return Result.ok(
            Concept(
                uid=_new_id(),
                id=slug,
                title=draft.title,
                description=draft.description,
                metaphor=draft.metaphor,
                difficulty=draft.difficulty,
                estimated_time=draft.estimated_time,
                story=draft.story,
                framework=framework_id,
                created_at=now,
                updated_at=now,
            )
        )

    def update_concept(self, concept: Concept, data: dict) -> Result[Concept]:
        """Apply a partial update. The slug may change; uniqueness is checked by the caller."""
        validation = validate_concept_content(data, partial=True)
        if not validation.is_success:
            return Result.fail(validation.error)

        changes = {
            name: data[name].strip() if isinstance(data[name], str) else data[name]
            for name in ("id", "title", "description", "metaphor", "difficulty", "estimated_time")
            if name in data
        }
        if "story" in data:
            changes["story"] = story_from_dict(data["story"])
        if "framework" in data:
            changes["framework"] = data["framework"] or None

        updated = replace(concept, **changes, updated_at=_now_iso())
        return Result.ok(updated)

    def check_slug_available(self, slug: str, existing: Optional[Concept], uid: Optional[str] = None) -> Result[str]:
        if existing is not None and existing.uid != uid:
            return Result.fail(f"Concept '{slug}' already exists.", ErrorKind.ALREADY_EXISTS)
        return Result.ok(slug)

"""Domain service for frameworks and the framework ↔ concept relationship."""
from __future__ import annotations
from dataclasses import replace
from datetime import datetime, timezone

from conceptcraft.domain.common.result import Result
from conceptcraft.domain.framework.models import Framework
from conceptcraft.domain.framework.rules import (
    validate_delete,
    validate_framework_content,
    validate_framework_name,
    validate_link,
    validate_unlink,
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class FrameworkDomainService:
    """
    Pure domain operations. No I/O. Each method returns a new Framework
    value wrapped in a Result; nothing is mutated in place.
    """

    def create_framework(self, data: dict) -> Result[Framework]:
        validation = validate_framework_content(data)
        if not validation.is_success:
            return Result.fail(validation.error)
        now = _now_iso()
        return Result.ok(
            Framework(
                id=data["id"].strip(),
                name=data["name"].strip(),
                concepts=[],
                created_at=now,
                updated_at=now,
            )
        )

    def rename(self, framework: Framework, data: dict) -> Result[Framework]:
        validation = validate_framework_name(data)
        if not validation.is_success:
            return Result.fail(validation.error)
        return Result.ok(replace(framework, name=data["name"].strip(), updated_at=_now_iso()))

    def link_concept(self, framework: Framework, concept_uid: str) -> Result[Framework]:
        validation = validate_link(framework, concept_uid)
        if not validation.is_success:
            return Result.fail(validation.error, validation.kind)
        return Result.ok(
            replace(framework, concepts=[*framework.concepts, concept_uid], updated_at=_now_iso())
        )

    def unlink_concept(self, framework: Framework, concept_uid: str) -> Result[Framework]:
        validation = validate_unlink(framework, concept_uid)
        if not validation.is_success:
            return Result.fail(validation.error, validation.kind)
        return Result.ok(
            replace(
                framework,
                concepts=[uid for uid in framework.concepts if uid != concept_uid],
                updated_at=_now_iso(),
            )
        )

    def check_deletable(self, framework: Framework) -> Result[Framework]:
        return validate_delete(framework)

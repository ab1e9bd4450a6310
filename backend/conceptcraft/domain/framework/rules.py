"""Business rules for frameworks and their concept references."""
from __future__ import annotations
import re

from conceptcraft.domain.common.result import ErrorKind, Result
from conceptcraft.domain.framework.models import Framework

FRAMEWORK_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")


def validate_framework_content(data: dict) -> Result[dict]:
    framework_id = (data.get("id") or "").strip()
    if not FRAMEWORK_ID_PATTERN.match(framework_id):
        return Result.fail(
            f"Framework id '{framework_id}' must be a lowercase slug such as 'react' or 'next.js'."
        )
    return validate_framework_name(data)


def validate_framework_name(data: dict) -> Result[dict]:
    name = (data.get("name") or "").strip()
    if not name:
        return Result.fail("Framework 'name' is required and cannot be empty.")
    return Result.ok(data)


def validate_link(framework: Framework, concept_uid: str) -> Result[str]:
    if concept_uid in framework.concepts:
        return Result.fail(
            f"Concept is already linked to framework '{framework.id}'.", ErrorKind.ALREADY_LINKED
        )
    return Result.ok(concept_uid)


def validate_unlink(framework: Framework, concept_uid: str) -> Result[str]:
    if concept_uid not in framework.concepts:
        return Result.fail(
            f"Concept is not linked to framework '{framework.id}'.", ErrorKind.NOT_LINKED
        )
    return Result.ok(concept_uid)


def validate_delete(framework: Framework) -> Result[Framework]:
    if framework.concepts:
        return Result.fail(
            f"Framework '{framework.id}' still has {len(framework.concepts)} concept(s). "
            "Remove them before deleting the framework.",
            ErrorKind.HAS_CONCEPTS,
        )
    return Result.ok(framework)

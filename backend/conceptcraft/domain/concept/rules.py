"""Business rules for the Concept domain: content validation and difficulty heuristics."""
from __future__ import annotations
import re
from typing import Iterable

from conceptcraft.domain.common.result import Result

VALID_DIFFICULTIES = ("beginner", "intermediate", "advanced")

REQUIRED_FIELDS = ("id", "title", "description", "metaphor", "difficulty", "estimated_time")

# Checked in this order; the first family with a hit wins.
ADVANCED_KEYWORDS = ("advanced", "complex", "enterprise", "scalable", "optimization")
INTERMEDIATE_KEYWORDS = ("intermediate", "moderate", "standard", "common")

TIME_ESTIMATES: dict[str, str] = {
    "beginner": "15 min",
    "intermediate": "25 min",
    "advanced": "40 min",
}
DEFAULT_TIME_ESTIMATE = "20 min"

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def determine_difficulty(concept_name: str, features: Iterable[str]) -> str:
    """
    Classify by keyword membership over the concept name and its feature list.
    Case-insensitive substring match; advanced beats intermediate.
    """
    text = " ".join([concept_name.lower(), *(f.lower() for f in features)])
    if any(keyword in text for keyword in ADVANCED_KEYWORDS):
        return "advanced"
    if any(keyword in text for keyword in INTERMEDIATE_KEYWORDS):
        return "intermediate"
    return "beginner"


def estimate_time(difficulty: str) -> str:
    return TIME_ESTIMATES.get(difficulty, DEFAULT_TIME_ESTIMATE)


def slugify(text: str) -> str:
    """'Signals in Angular' -> 'signals-in-angular'."""
    return _SLUG_STRIP.sub("-", text.lower()).strip("-")


def validate_concept_content(data: dict, partial: bool = False) -> Result[dict]:
    """
    Validates concept fields. With partial=True only the keys present are checked,
    which is what an update body carries.
    """
    fields = [f for f in REQUIRED_FIELDS if f in data] if partial else list(REQUIRED_FIELDS)
    for name in fields:
        value = data.get(name)
        if not isinstance(value, str) or not value.strip():
            return Result.fail(f"Concept '{name}' is required and cannot be empty.")

    if "id" in fields and slugify(data["id"]) != data["id"]:
        return Result.fail(
            f"Concept id '{data['id']}' must be a lowercase slug (letters, digits and dashes)."
        )

    if "difficulty" in fields and data["difficulty"] not in VALID_DIFFICULTIES:
        return Result.fail(
            f"'{data['difficulty']}' is not a valid difficulty. Must be one of {list(VALID_DIFFICULTIES)}."
        )
    return Result.ok(data)

"""Framework domain model."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass
class Framework:
    id: str  # human-chosen slug, immutable
    name: str
    concepts: List[str] = field(default_factory=list)  # Concept.uid values, insertion ordered
    created_at: str = ""
    updated_at: str = ""

"""Concept domain models: pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass
class Story:
    title: str
    scene: str
    problem: str
    solution: str
    characters: Dict[str, str] = field(default_factory=dict)
    mapping: Dict[str, str] = field(default_factory=dict)
    real_world: str = ""


@dataclass
class Concept:
    uid: str  # internal id, what framework reference lists hold
    id: str  # unique slug
    title: str
    description: str
    metaphor: str
    difficulty: str  # beginner | intermediate | advanced
    estimated_time: str
    story: Optional[Story] = None
    framework: Optional[str] = None  # display label, not the relationship
    created_at: str = ""
    updated_at: str = ""


@dataclass
class ConceptDraft:
    """Generated concept content that has not been persisted yet."""
    title: str
    description: str
    metaphor: str
    difficulty: str
    estimated_time: str
    story: Story
    # Steps that fell back to canned content
    degraded: Tuple[str, ...] = ()

"""Canned content used when the LLM providers fail or return something unusable.

Every table is keyed by FrameworkKey. A framework name that does not resolve
to a key gets the generic template of each table.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence

from conceptcraft.domain.concept.models import Story


class FrameworkKey(str, Enum):
    NEXT = "next.js"
    REACT = "react"
    ANGULAR = "angular"
    VUE = "vue"
    TYPESCRIPT = "typescript"
    NODE = "node.js"
    MONGODB = "mongodb"
    POSTGRESQL = "postgresql"

    @classmethod
    def from_name(cls, name: str) -> Optional["FrameworkKey"]:
        key = (name or "").strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None


_ALIASES: Dict[str, str] = {
    "nextjs": "next.js",
    "next": "next.js",
    "react.js": "react",
    "reactjs": "react",
    "angularjs": "angular",
    "vue.js": "vue",
    "vuejs": "vue",
    "ts": "typescript",
    "node": "node.js",
    "nodejs": "node.js",
    "mongo": "mongodb",
    "postgres": "postgresql",
}


# ------------------------------------------------------------------
# Concept info
# ------------------------------------------------------------------
@dataclass
class ConceptInfo:
    description: str
    features: List[str] = field(default_factory=list)
    use_cases: List[str] = field(default_factory=list)


DEFAULT_FEATURES = ["Enhanced performance", "Better developer experience", "Improved type safety"]
DEFAULT_USE_CASES = ["Building scalable applications", "Server-side rendering"]


def canned_concept_info(concept: str, framework: str) -> ConceptInfo:
    return ConceptInfo(
        description=f"Latest {concept} features in {framework} for modern web development",
        features=list(DEFAULT_FEATURES),
        use_cases=list(DEFAULT_USE_CASES),
    )


# ------------------------------------------------------------------
# Metaphors
# ------------------------------------------------------------------
METAPHORS: Dict[FrameworkKey, str] = {
    FrameworkKey.NEXT: "Like upgrading from a bicycle to a high-speed train with smart navigation!",
    FrameworkKey.REACT: "Like having a master chef who can cook any dish with the right ingredients!",
    FrameworkKey.ANGULAR: "Like a well-organized kitchen where every tool has its perfect place!",
    FrameworkKey.VUE: "Like a friendly restaurant where everything is intuitive and welcoming!",
    FrameworkKey.TYPESCRIPT: "Like having a smart assistant who catches mistakes before they happen!",
    FrameworkKey.NODE: "Like a powerful engine that can handle any road condition!",
    FrameworkKey.MONGODB: "Like a flexible storage system that adapts to any data shape!",
    FrameworkKey.POSTGRESQL: "Like a reliable bank vault that keeps your data safe and organized!",
}


def canned_metaphor(concept: str, framework: str) -> str:
    key = FrameworkKey.from_name(framework)
    if key in METAPHORS:
        return METAPHORS[key]
    return f"Like discovering a new tool that makes {concept} development easier and more efficient!"


# ------------------------------------------------------------------
# Stories
# ------------------------------------------------------------------
STORY_TEMPLATES: Dict[FrameworkKey, Story] = {
    FrameworkKey.NEXT: Story(
        title="The Smart City Transportation System",
        scene="A city upgrading its transportation infrastructure to handle modern needs.",
        problem="Old transportation methods are slow and inefficient for today's demands.",
        solution="Implement a smart transportation system with multiple routes and real-time updates.",
        characters={
            "city": "Your Application",
            "transportation": "Next.js Features",
            "routes": "API Routes",
            "stations": "Pages",
            "passengers": "Users",
        },
        mapping={
            "routing": "Smart route planning",
            "ssr": "Pre-built stations",
            "api": "Transportation hubs",
            "optimization": "Efficient scheduling",
        },
        real_world="Building fast, scalable applications with server-side rendering and API routes",
    ),
    FrameworkKey.REACT: Story(
        title="The Master Chef's Kitchen",
        scene="A professional kitchen where chefs create amazing dishes efficiently.",
        problem="Chefs need to coordinate and share ingredients while maintaining quality.",
        solution="Create a well-organized kitchen with specialized tools and clear communication.",
        characters={
            "kitchen": "React Application",
            "chef": "Component",
            "ingredients": "Props",
            "recipes": "Hooks",
            "dishes": "UI Elements",
        },
        mapping={
            "components": "Specialized cooking stations",
            "hooks": "Kitchen tools",
            "state": "Ingredient storage",
            "props": "Recipe sharing",
        },
        real_world="Building reusable components and managing application state efficiently",
    ),
    FrameworkKey.ANGULAR: Story(
        title="The Grand Hotel Operations Desk",
        scene="A large hotel where every department follows the same playbook.",
        problem="Guests' requests get lost when departments do not know who handles what.",
        solution="Run a central operations desk that routes every request to the right specialist.",
        characters={
            "hotel": "Angular Application",
            "operations desk": "Dependency Injection",
            "departments": "Modules",
            "concierges": "Services",
            "guests": "Users",
        },
        mapping={
            "room panels": "Components",
            "house rules": "Directives",
            "status board": "Change Detection",
            "guest requests": "Observables",
        },
        real_world="Structuring large applications with services, dependency injection and strong conventions",
    ),
    FrameworkKey.VUE: Story(
        title="The Neighborhood Café",
        scene="A cozy café where the menu board updates itself as dishes run out.",
        problem="Staff waste time rewriting the board every time an ingredient changes.",
        solution="Connect the menu board directly to the pantry so changes show up instantly.",
        characters={
            "café": "Vue Application",
            "pantry": "Reactive State",
            "menu board": "Template",
            "baristas": "Components",
            "customers": "Users",
        },
        mapping={
            "pantry sensors": "Reactivity",
            "daily specials": "Computed Properties",
            "order tickets": "Events",
            "recipe cards": "Composables",
        },
        real_world="Building approachable, reactive interfaces that stay in sync with application state",
    ),
}


def _copy_story(story: Story) -> Story:
    return replace(story, characters=dict(story.characters), mapping=dict(story.mapping))


def canned_story(concept: str, framework: str, features: Sequence[str] = ()) -> Story:
    key = FrameworkKey.from_name(framework)
    template = STORY_TEMPLATES.get(key) if key else None
    if template is not None:
        story = _copy_story(template)
        story.real_world = f"Latest {concept} features in {framework}: {', '.join(features)}"
        return story

    return Story(
        title=f"The {concept} Workshop",
        scene=f"A workshop where developers learn to use {concept} in {framework}.",
        problem=f"Developers struggle with understanding {concept} and its benefits.",
        solution="Create a comprehensive learning environment with hands-on examples.",
        characters={
            "workshop": f"{framework} Application",
            "instructor": f"{concept} Features",
            "students": "Developers",
            "tools": "Development Tools",
        },
        mapping={
            "features": "Workshop tools",
            "benefits": "Learning outcomes",
            "implementation": "Hands-on practice",
        },
        real_world=f"Implementing {concept} in {framework} for better development experience",
    )


# ------------------------------------------------------------------
# Popular concepts
# ------------------------------------------------------------------
POPULAR_CONCEPTS: Dict[FrameworkKey, List[str]] = {
    FrameworkKey.NEXT: [
        "App Router",
        "Server Components",
        "Turbopack",
        "Middleware",
        "Image Optimization",
        "Internationalization",
    ],
    FrameworkKey.REACT: [
        "Concurrent Features",
        "Suspense",
        "Server Components",
        "Hooks",
        "Context API",
        "Virtual DOM",
    ],
    FrameworkKey.ANGULAR: [
        "Standalone Components",
        "Signals",
        "Control Flow",
        "Deferrable Views",
        "Dependency Injection",
        "Change Detection",
    ],
    FrameworkKey.VUE: [
        "Composition API",
        "Teleport",
        "Suspense",
        "Fragments",
        "Reactivity",
        "Custom Directives",
    ],
}


def canned_popular_concepts(framework: str) -> List[str]:
    key = FrameworkKey.from_name(framework)
    return list(POPULAR_CONCEPTS.get(key, [])) if key else []

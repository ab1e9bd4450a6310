"""Prompt templates sent to the LLM gateway."""
from __future__ import annotations
from typing import Optional, Sequence


def concept_info_prompt(concept: str, framework: str) -> str:
    return f"""
Provide detailed information about {concept} in the {framework} framework. Include:
1. A clear description of what it is
2. Key features and capabilities
3. Difficulty level (beginner/intermediate/advanced)
4. Common use cases
5. Latest updates or improvements

Format the response as JSON with these fields:
{{
  "description": "clear description",
  "features": ["feature1", "feature2", "feature3"],
  "difficulty": "beginner/intermediate/advanced",
  "useCases": ["use case 1", "use case 2"]
}}
""".strip()


def metaphor_prompt(concept: str, framework: str) -> str:
    return f"""
Create a creative and engaging metaphor for {concept} in the {framework} framework.
The metaphor should be relatable and help developers understand the concept easily.
Make it fun and memorable, like comparing it to everyday activities or objects.

Return only the metaphor as one paragraph, no additional text.
""".strip()


def story_prompt(concept: str, framework: str, features: Sequence[str], use_cases: Sequence[str] = ()) -> str:
    feature_lines = "\n".join(f"- {f}" for f in features) or "- (none provided)"
    use_case_lines = "\n".join(f"- {u}" for u in use_cases) or "- (none provided)"
    return f"""
Create an engaging interactive story for learning {concept} in {framework}.
The story should illustrate these features:
{feature_lines}
and these use cases:
{use_case_lines}

Include these elements:
- Title: A catchy title
- Scene: A relatable setting
- Problem: A challenge that needs solving
- Solution: How the concept solves the problem
- Characters: Map story characters to programming concepts
- Mapping: Connect story elements to technical features
- RealWorld: How this applies to actual programming

Format as JSON:
{{
  "title": "Story title",
  "scene": "Setting description",
  "problem": "Challenge description",
  "solution": "Solution description",
  "characters": {{"character1": "programming concept1", "character2": "programming concept2"}},
  "mapping": {{"story element1": "technical feature1", "story element2": "technical feature2"}},
  "realWorld": "Real-world application"
}}
""".strip()


def popular_concepts_prompt(framework: str, search: Optional[str] = None) -> str:
    focus = ""
    if search and search.strip():
        focus = f"\nOnly include concepts related to: {search.strip()}."
    return f"""
List the most popular and trending concepts/features in the {framework} framework.
Focus on the latest features, important concepts, and commonly used patterns.{focus}
Return only a JSON array of concept names, no additional text.
Example: ["Concept 1", "Concept 2", "Concept 3"]
""".strip()

"""Tests for the dangling-reference sweep CLI."""
from conceptcraft import container
from conceptcraft.maintenance import main


def _framework_with_deleted_concept():
    frameworks = container.get_framework_app_service()
    concepts = container.get_concept_app_service()
    frameworks.create_framework({"id": "react", "name": "React"})
    concept = concepts.create_concept(
        {
            "id": "hooks",
            "title": "Hooks",
            "description": "Reuse stateful logic.",
            "metaphor": "Like a toolbelt.",
            "difficulty": "beginner",
            "estimated_time": "15 min",
        }
    ).value
    frameworks.add_concept("react", "hooks")
    concepts.delete_concept("hooks")
    return frameworks, concept


def test_dry_run_only_lists(temp_db, capsys):
    frameworks, concept = _framework_with_deleted_concept()

    assert main([]) == 0

    out = capsys.readouterr().out
    assert "dry-run" in out
    assert concept.uid in out
    assert frameworks.get_framework("react").concepts == [concept.uid]


def test_apply_rewrites_frameworks(temp_db, capsys):
    frameworks, concept = _framework_with_deleted_concept()

    assert main(["--apply"]) == 0

    assert "Removed references:" in capsys.readouterr().out
    assert frameworks.get_framework("react").concepts == []


def test_clean_database_reports_nothing(temp_db, capsys):
    assert main(["--apply"]) == 0
    assert "No dangling concept references found." in capsys.readouterr().out

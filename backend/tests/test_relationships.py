"""Tests for the framework ↔ concept relationship against a throwaway SQLite file."""
import sqlite3
import threading

import pytest

from conceptcraft import container
from conceptcraft.domain.common.result import ErrorKind
from conceptcraft.persistence.db import get_connection


def _concept_data(slug: str, **overrides) -> dict:
    data = {
        "id": slug,
        "title": slug.replace("-", " ").title(),
        "description": f"About {slug}",
        "metaphor": "Like a thing",
        "difficulty": "beginner",
        "estimated_time": "15 min",
    }
    data.update(overrides)
    return data


@pytest.fixture
def frameworks(temp_db):
    return container.get_framework_app_service()


@pytest.fixture
def concepts(temp_db):
    return container.get_concept_app_service()


def test_vue_framework_lifecycle(frameworks, concepts):
    assert frameworks.create_framework({"id": "vue", "name": "Vue.js"}).is_success
    assert frameworks.delete_framework("vue").is_success

    frameworks.create_framework({"id": "vue", "name": "Vue.js"})
    concept = concepts.create_concept(_concept_data("reactivity")).value
    assert frameworks.add_concept("vue", "reactivity").is_success

    blocked = frameworks.delete_framework("vue")
    assert not blocked.is_success
    assert blocked.kind == ErrorKind.HAS_CONCEPTS
    assert frameworks.get_framework("vue").concepts == [concept.uid]

    assert frameworks.remove_concept("vue", "reactivity").is_success
    assert frameworks.delete_framework("vue").is_success
    assert frameworks.get_framework("vue") is None


def test_add_twice_is_rejected_without_duplicating(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    concept = concepts.create_concept(_concept_data("hooks")).value

    assert frameworks.add_concept("react", "hooks").is_success
    again = frameworks.add_concept("react", concept.uid)
    assert again.kind == ErrorKind.ALREADY_LINKED
    assert frameworks.get_framework("react").concepts == [concept.uid]


def test_remove_then_add_restores_membership(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    first = concepts.create_concept(_concept_data("hooks")).value
    second = concepts.create_concept(_concept_data("suspense")).value
    frameworks.add_concept("react", "hooks")
    frameworks.add_concept("react", "suspense")

    frameworks.remove_concept("react", "hooks")
    frameworks.add_concept("react", "hooks")

    assert set(frameworks.get_framework("react").concepts) == {first.uid, second.uid}


def test_remove_unlinked_concept_is_not_linked(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    concepts.create_concept(_concept_data("hooks"))

    result = frameworks.remove_concept("react", "hooks")
    assert result.kind == ErrorKind.NOT_LINKED


def test_missing_entities_are_not_found(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    concepts.create_concept(_concept_data("hooks"))

    assert frameworks.add_concept("svelte", "hooks").kind == ErrorKind.NOT_FOUND
    assert frameworks.add_concept("react", "missing").kind == ErrorKind.NOT_FOUND
    assert frameworks.remove_concept("svelte", "hooks").kind == ErrorKind.NOT_FOUND
    assert frameworks.delete_framework("svelte").kind == ErrorKind.NOT_FOUND


def test_duplicate_framework_id_is_rejected(frameworks):
    frameworks.create_framework({"id": "react", "name": "React"})
    result = frameworks.create_framework({"id": "react", "name": "React again"})
    assert result.kind == ErrorKind.ALREADY_EXISTS


def test_populate_keeps_order_and_skips_dangling_refs(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    for slug in ("hooks", "suspense", "context"):
        concepts.create_concept(_concept_data(slug))
        frameworks.add_concept("react", slug)

    concepts.delete_concept("suspense")

    populated = frameworks.populate(frameworks.get_framework("react"))
    assert [c.id for c in populated] == ["hooks", "context"]
    # the deleted concept is still referenced until pruned
    assert len(frameworks.get_framework("react").concepts) == 3


def test_dangling_ref_can_be_removed_by_raw_uid(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    concept = concepts.create_concept(_concept_data("hooks")).value
    frameworks.add_concept("react", "hooks")
    concepts.delete_concept("hooks")

    assert frameworks.remove_concept("react", concept.uid).is_success
    assert frameworks.get_framework("react").concepts == []


def test_prune_dangling_refs_preview_then_apply(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    kept = concepts.create_concept(_concept_data("hooks")).value
    gone = concepts.create_concept(_concept_data("suspense")).value
    frameworks.add_concept("react", "hooks")
    frameworks.add_concept("react", "suspense")
    concepts.delete_concept("suspense")

    assert frameworks.prune_dangling_refs(apply=False) == {"react": [gone.uid]}
    assert len(frameworks.get_framework("react").concepts) == 2

    assert frameworks.prune_dangling_refs() == {"react": [gone.uid]}
    assert frameworks.get_framework("react").concepts == [kept.uid]
    assert frameworks.prune_dangling_refs() == {}


def test_update_with_framework_moves_concept(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    frameworks.create_framework({"id": "next.js", "name": "Next.js"})
    frameworks.create_framework({"id": "vue", "name": "Vue.js"})
    concept = concepts.create_concept(_concept_data("server-components")).value
    frameworks.add_concept("react", "server-components")
    frameworks.add_concept("vue", "server-components")

    result = concepts.update_concept("server-components", {"framework": "Next.js"})

    assert result.is_success
    assert result.value.framework == "next.js"
    assert frameworks.get_framework("next.js").concepts == [concept.uid]
    assert frameworks.get_framework("react").concepts == []
    assert frameworks.get_framework("vue").concepts == []
    assert concepts.get_concept("server-components").framework == "next.js"


def test_update_with_unknown_framework_leaves_concept_unlinked(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    concepts.create_concept(_concept_data("hooks"))
    frameworks.add_concept("react", "hooks")

    result = concepts.update_concept("hooks", {"framework": "svelte"})

    assert result.is_success
    assert result.value.framework is None
    assert frameworks.get_framework("react").concepts == []


def test_move_rolls_back_when_a_write_fails(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    frameworks.create_framework({"id": "vue", "name": "Vue.js"})
    concept = concepts.create_concept(_concept_data("hooks")).value
    frameworks.add_concept("react", "hooks")

    conn = get_connection()
    try:
        conn.execute(
            """
            CREATE TRIGGER block_vue BEFORE UPDATE ON frameworks
            WHEN NEW.id = 'vue' BEGIN SELECT RAISE(ABORT, 'blocked'); END
            """
        )
        conn.commit()
    finally:
        conn.close()

    with pytest.raises(sqlite3.Error):
        frameworks.move_concept(concept, "vue")
    assert frameworks.get_framework("react").concepts == [concept.uid]


def test_update_rejects_slug_taken_by_another_concept(concepts):
    concepts.create_concept(_concept_data("hooks"))
    concepts.create_concept(_concept_data("suspense"))

    result = concepts.update_concept("suspense", {"id": "hooks"})
    assert result.kind == ErrorKind.ALREADY_EXISTS


def test_create_rejects_duplicate_slug(concepts):
    concepts.create_concept(_concept_data("hooks"))
    assert concepts.create_concept(_concept_data("hooks")).kind == ErrorKind.ALREADY_EXISTS


def test_create_validates_fields(concepts):
    result = concepts.create_concept(_concept_data("hooks", difficulty="expert"))
    assert result.kind == ErrorKind.INVALID
    assert concepts.create_concept(_concept_data("Not A Slug")).kind == ErrorKind.INVALID


@pytest.mark.asyncio
async def test_auto_create_links_generated_concept(frameworks, concepts):
    frameworks.create_framework({"id": "angular", "name": "Angular"})

    result = await concepts.auto_create_concept("Signals", "angular")

    assert result.is_success
    concept = result.value
    assert concept.id == "signals-in-angular"
    assert concept.framework == "angular"
    assert frameworks.get_framework("angular").concepts == [concept.uid]

    again = await concepts.auto_create_concept("Signals", "Angular")
    assert again.kind == ErrorKind.ALREADY_EXISTS
    assert frameworks.get_framework("angular").concepts == [concept.uid]


@pytest.mark.asyncio
async def test_auto_create_unknown_framework_is_not_found(concepts):
    result = await concepts.auto_create_concept("Signals", "angular")
    assert result.kind == ErrorKind.NOT_FOUND


def test_update_with_blank_framework_unlinks_everywhere(frameworks, concepts):
    frameworks.create_framework({"id": "react", "name": "React"})
    frameworks.create_framework({"id": "vue", "name": "Vue.js"})
    concepts.create_concept(_concept_data("hooks"))
    frameworks.add_concept("react", "hooks")
    frameworks.add_concept("vue", "hooks")

    result = concepts.update_concept("hooks", {"framework": ""})

    assert result.value.framework is None
    assert frameworks.get_framework("react").concepts == []
    assert frameworks.get_framework("vue").concepts == []


def test_list_linking_finds_only_frameworks_holding_the_concept(frameworks, concepts):
    for framework_id in ("react", "next.js", "vue"):
        frameworks.create_framework({"id": framework_id, "name": framework_id.title()})
    concept = concepts.create_concept(_concept_data("server-components")).value
    concepts.create_concept(_concept_data("reactivity"))
    frameworks.add_concept("react", "server-components")
    frameworks.add_concept("next.js", "server-components")
    frameworks.add_concept("vue", "reactivity")

    linking = container.get_framework_repo().list_linking(concept.uid)

    assert sorted(f.id for f in linking) == ["next.js", "react"]
    assert container.get_framework_repo().list_linking("missing") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "])
async def test_auto_create_rejects_blank_concept_name(frameworks, concepts, name):
    frameworks.create_framework({"id": "angular", "name": "Angular"})

    result = await concepts.auto_create_concept(name, "angular")

    assert result.kind == ErrorKind.INVALID
    assert concepts.list_concepts() == []
    assert frameworks.get_framework("angular").concepts == []


@pytest.mark.asyncio
async def test_auto_create_keeps_sqlite_off_the_event_loop(frameworks, concepts, monkeypatch):
    frameworks.create_framework({"id": "angular", "name": "Angular"})
    repo = container.get_concept_repo()
    save = repo.save_concept
    threads = []

    def recording_save(concept):
        threads.append(threading.get_ident())
        save(concept)

    monkeypatch.setattr(repo, "save_concept", recording_save)

    result = await concepts.auto_create_concept("Signals", "angular")

    assert result.is_success
    assert threads and threading.get_ident() not in threads

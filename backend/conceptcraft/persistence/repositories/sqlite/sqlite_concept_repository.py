"""SQLite implementation of ConceptRepository."""
from __future__ import annotations
import json
from dataclasses import asdict
from typing import List, Optional

from conceptcraft.domain.concept.models import Concept
from conceptcraft.domain.concept.service import story_from_dict
from conceptcraft.persistence.interfaces.concept_repository import ConceptRepository
from conceptcraft.persistence.db import get_connection


def _row_to_concept(row) -> Concept:
    return Concept(
        uid=row["uid"],
        id=row["id"],
        title=row["title"],
        description=row["description"],
        metaphor=row["metaphor"],
        difficulty=row["difficulty"],
        estimated_time=row["estimated_time"],
        story=story_from_dict(json.loads(row["story"])) if row["story"] else None,
        framework=row["framework"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class SqliteConceptRepository(ConceptRepository):

    def save_concept(self, concept: Concept) -> None:
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO concepts (
                    uid, id, title, description, metaphor, difficulty,
                    estimated_time, story, framework, created_at, updated_at
                ) VALUES (
                    :uid, :id, :title, :description, :metaphor, :difficulty,
                    :estimated_time, :story, :framework, :created_at, :updated_at
                )
                ON CONFLICT(uid) DO UPDATE SET
                    id             = excluded.id,
                    title          = excluded.title,
                    description    = excluded.description,
                    metaphor       = excluded.metaphor,
                    difficulty     = excluded.difficulty,
                    estimated_time = excluded.estimated_time,
                    story          = excluded.story,
                    framework      = excluded.framework,
                    updated_at     = excluded.updated_at
                """,
                {
                    "uid": concept.uid,
                    "id": concept.id,
                    "title": concept.title,
                    "description": concept.description,
                    "metaphor": concept.metaphor,
                    "difficulty": concept.difficulty,
                    "estimated_time": concept.estimated_time,
                    "story": json.dumps(asdict(concept.story)) if concept.story else None,
                    "framework": concept.framework,
                    "created_at": concept.created_at,
                    "updated_at": concept.updated_at,
                },
            )
            conn.commit()
        finally:
            conn.close()

    def get_by_ref(self, ref: str) -> Optional[Concept]:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM concepts WHERE uid = ? OR id = ? ORDER BY uid = ? DESC LIMIT 1",
                (ref, ref, ref),
            ).fetchone()
        finally:
            conn.close()
        return _row_to_concept(row) if row else None

    def get_by_uids(self, uids: List[str]) -> List[Concept]:
        if not uids:
            return []
        placeholders = ", ".join("?" for _ in uids)
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT * FROM concepts WHERE uid IN ({placeholders})", list(uids)
            ).fetchall()
        finally:
            conn.close()
        by_uid = {r["uid"]: _row_to_concept(r) for r in rows}
        return [by_uid[uid] for uid in uids if uid in by_uid]

    def list_all(self) -> List[Concept]:
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM concepts ORDER BY created_at DESC"
            ).fetchall()
        finally:
            conn.close()
        return [_row_to_concept(r) for r in rows]

    def delete(self, uid: str) -> bool:
        conn = get_connection()
        try:
            cur = conn.execute("DELETE FROM concepts WHERE uid = ?", (uid,))
            conn.commit()
        finally:
            conn.close()
        return cur.rowcount > 0

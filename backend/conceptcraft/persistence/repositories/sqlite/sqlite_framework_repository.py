"""SQLite implementation of FrameworkRepository.

The reference list is stored as a JSON array column, so each framework is a
single document row: every relationship edit rewrites exactly one row, except
move_concept which rewrites several inside one transaction.
"""
from __future__ import annotations
import json
from datetime import datetime, timezone
from typing import List, Optional

from conceptcraft.domain.framework.models import Framework
from conceptcraft.persistence.interfaces.framework_repository import FrameworkRepository
from conceptcraft.persistence.db import get_connection


def _row_to_framework(row) -> Framework:
    return Framework(
        id=row["id"],
        name=row["name"],
        concepts=json.loads(row["concepts"] or "[]"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _write_refs(conn, framework_id: str, concepts: List[str]) -> None:
    conn.execute(
        "UPDATE frameworks SET concepts = ?, updated_at = ? WHERE id = ?",
        (json.dumps(concepts), datetime.now(timezone.utc).isoformat(), framework_id),
    )


_LINKING_SQL = """
    SELECT frameworks.* FROM frameworks
    WHERE EXISTS (
        SELECT 1 FROM json_each(frameworks.concepts) WHERE json_each.value = ?
    )
    ORDER BY created_at ASC
"""


class SqliteFrameworkRepository(FrameworkRepository):

    def save_framework(self, framework: Framework) -> None:
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO frameworks (id, name, concepts, created_at, updated_at)
                VALUES (:id, :name, :concepts, :created_at, :updated_at)
                ON CONFLICT(id) DO UPDATE SET
                    name       = excluded.name,
                    concepts   = excluded.concepts,
                    updated_at = excluded.updated_at
                """,
                {
                    "id": framework.id,
                    "name": framework.name,
                    "concepts": json.dumps(framework.concepts),
                    "created_at": framework.created_at,
                    "updated_at": framework.updated_at,
                },
            )
            conn.commit()
        finally:
            conn.close()

    def get_by_id(self, framework_id: str) -> Optional[Framework]:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM frameworks WHERE id = ?", (framework_id,)
            ).fetchone()
        finally:
            conn.close()
        return _row_to_framework(row) if row else None

    def find_by_name(self, name: str) -> Optional[Framework]:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM frameworks WHERE lower(name) = lower(?) ORDER BY created_at LIMIT 1",
                (name.strip(),),
            ).fetchone()
        finally:
            conn.close()
        return _row_to_framework(row) if row else None

    def list_all(self) -> List[Framework]:
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM frameworks ORDER BY created_at ASC"
            ).fetchall()
        finally:
            conn.close()
        return [_row_to_framework(r) for r in rows]

    def list_linking(self, concept_uid: str) -> List[Framework]:
        conn = get_connection()
        try:
            rows = conn.execute(_LINKING_SQL, (concept_uid,)).fetchall()
        finally:
            conn.close()
        return [_row_to_framework(r) for r in rows]

    def delete(self, framework_id: str) -> bool:
        conn = get_connection()
        try:
            cur = conn.execute("DELETE FROM frameworks WHERE id = ?", (framework_id,))
            conn.commit()
        finally:
            conn.close()
        return cur.rowcount > 0

    def move_concept(self, concept_uid: str, target_id: Optional[str]) -> Optional[Framework]:
        conn = get_connection()
        try:
            conn.execute("BEGIN IMMEDIATE")
            for row in conn.execute(_LINKING_SQL, (concept_uid,)).fetchall():
                framework = _row_to_framework(row)
                _write_refs(conn, framework.id, [u for u in framework.concepts if u != concept_uid])

            target = None
            if target_id is not None:
                row = conn.execute("SELECT * FROM frameworks WHERE id = ?", (target_id,)).fetchone()
                if row is not None:
                    target = _row_to_framework(row)
                    target.concepts.append(concept_uid)
                    _write_refs(conn, target.id, target.concepts)
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
        return target

    def prune_references(self, valid_uids: set[str], apply: bool = True) -> dict[str, List[str]]:
        removed: dict[str, List[str]] = {}
        conn = get_connection()
        try:
            conn.execute("BEGIN IMMEDIATE")
            for row in conn.execute("SELECT * FROM frameworks").fetchall():
                framework = _row_to_framework(row)
                dangling = [u for u in framework.concepts if u not in valid_uids]
                if not dangling:
                    continue
                removed[framework.id] = dangling
                if apply:
                    _write_refs(conn, framework.id, [u for u in framework.concepts if u in valid_uids])
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
        return removed

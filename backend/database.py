"""SQLite database setup and project storage.

Table: projects
- id (integer, primary key)
- name (text)
- website_url (text, nullable)
- seo_audit (text, serialized AuditResult, nullable)
- created_at (datetime)
- audited_at (datetime, nullable)
"""

import json
import sqlite3
from datetime import datetime, timezone

import config


class ProjectNotFoundError(LookupError):
    """No project with the requested id."""


def get_connection() -> sqlite3.Connection:
    """Return a connection to the SQLite database."""
    conn = sqlite3.connect(config.DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def init_db() -> None:
    """Create the projects table if it does not exist."""
    conn = get_connection()
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS projects (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                website_url TEXT,
                seo_audit TEXT,
                created_at TEXT NOT NULL,
                audited_at TEXT
            )
            """
        )
        conn.commit()
    finally:
        conn.close()


def insert_project(name: str, website_url: str | None = None) -> int:
    """Store a new project and return its id."""
    conn = get_connection()
    try:
        cursor = conn.execute(
            "INSERT INTO projects (name, website_url, created_at) VALUES (?, ?, ?)",
            (name, website_url, _now()),
        )
        conn.commit()
        return cursor.lastrowid
    finally:
        conn.close()


def _parse_audit(raw: str | None) -> dict | None:
    if not raw:
        return None
    try:
        parsed = json.loads(raw)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def get_project(project_id: int) -> dict | None:
    """Fetch a project by id. Returns parsed seo_audit or None."""
    conn = get_connection()
    try:
        row = conn.execute(
            """
            SELECT id, name, website_url, seo_audit, created_at, audited_at
            FROM projects WHERE id = ?
            """,
            (project_id,),
        ).fetchone()
        if row is None:
            return None
        return {
            "id": row["id"],
            "name": row["name"],
            "website_url": row["website_url"],
            "seo_audit": _parse_audit(row["seo_audit"]),
            "created_at": row["created_at"],
            "audited_at": row["audited_at"],
        }
    finally:
        conn.close()


def save_seo_audit(project_id: int, result_json: dict) -> None:
    """Store a serialized audit result verbatim on the project."""
    conn = get_connection()
    try:
        cursor = conn.execute(
            "UPDATE projects SET seo_audit = ?, audited_at = ? WHERE id = ?",
            (json.dumps(result_json), _now(), project_id),
        )
        conn.commit()
        if cursor.rowcount == 0:
            raise ProjectNotFoundError(project_id)
    finally:
        conn.close()


def get_seo_audit(project_id: int) -> dict | None:
    """Return the stored audit for a project, or None when it was never audited."""
    project = get_project(project_id)
    if project is None:
        raise ProjectNotFoundError(project_id)
    return project["seo_audit"]


def list_projects(limit: int = 20) -> list[dict]:
    """Return recent projects for history view."""
    safe_limit = max(1, min(100, int(limit)))
    conn = get_connection()
    try:
        rows = conn.execute(
            """
            SELECT id, name, website_url, seo_audit, created_at, audited_at
            FROM projects
            ORDER BY id DESC
            LIMIT ?
            """,
            (safe_limit,),
        ).fetchall()

        out: list[dict] = []
        for row in rows:
            audit = _parse_audit(row["seo_audit"]) or {}
            score = audit.get("overallScore")
            out.append(
                {
                    "id": row["id"],
                    "name": row["name"],
                    "website_url": row["website_url"],
                    "overall_score": score if isinstance(score, int) else None,
                    "created_at": row["created_at"],
                    "audited_at": row["audited_at"],
                }
            )
        return out
    finally:
        conn.close()

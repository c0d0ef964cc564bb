"""Bulk loading of blog posts and projects from a YAML (or JSON) seed file.

Every entry goes through the same validation as the HTTP surface. Entries that
fail validation or collide with existing content are reported and skipped; the
rest are committed together.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from sqlmodel import Session, col, select

from folio.core.utils.slug import slugify
from folio.core.validation import validate_blog_create, validate_project_create
from folio.crud.blogs import create_blog, slug_exists
from folio.crud.projects import create_project
from folio.crud.tables import Project
from folio.errors import ContentValidationError


def load_seed_file(path: Path) -> dict[str, list[dict[str, Any]]]:
    """Parse a seed file with optional top-level `blogs` and `projects` lists."""
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid seed file {path}: {e}") from e
    data = data or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid seed file {path}: expected a mapping, got {type(data).__name__}")
    for key in ("blogs", "projects"):
        if not isinstance(data.get(key, []), list):
            raise ValueError(f"Invalid seed file {path}: '{key}' must be a list")
    return {"blogs": data.get("blogs") or [], "projects": data.get("projects") or []}


def _project_exists(session: Session, title: str, date) -> bool:
    stmt = select(Project.id).where(col(Project.title) == title).where(col(Project.date) == date)
    return session.exec(stmt).first() is not None


def run_seed(engine, data: dict[str, list[dict[str, Any]]]) -> tuple[dict[str, int], list[tuple[str, str]]]:
    """Create every valid, non-duplicate entry.

    Returns (counts, changes) where counts has created/skipped/invalid totals and
    changes lists (status, label) per entry.
    """
    counts = {"created": 0, "skipped": 0, "invalid": 0}
    changes: list[tuple[str, str]] = []

    def _record(status: str, label: str) -> None:
        counts[status] += 1
        changes.append((status, label))

    with Session(engine) as session:
        for entry in data.get("blogs", []):
            payload = dict(entry) if isinstance(entry, dict) else entry
            if isinstance(payload, dict) and not payload.get("slug") and isinstance(payload.get("title"), str):
                payload["slug"] = slugify(payload["title"])
            label = f"blog {payload.get('slug') if isinstance(payload, dict) else payload!r}"
            try:
                blog = validate_blog_create(payload)
            except ContentValidationError as e:
                _record("invalid", f"{label} ({e})")
                continue
            if slug_exists(session, blog.slug):
                _record("skipped", label)
                continue
            create_blog(session, blog)
            _record("created", label)

        for entry in data.get("projects", []):
            label = f"project {entry.get('title') if isinstance(entry, dict) else entry!r}"
            try:
                project = validate_project_create(entry)
            except ContentValidationError as e:
                _record("invalid", f"{label} ({e})")
                continue
            if _project_exists(session, project.title, project.date):
                _record("skipped", label)
                continue
            create_project(session, project)
            _record("created", label)

        session.commit()
    return counts, changes

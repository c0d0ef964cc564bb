"""Shared fixtures for crud unit tests"""

from datetime import datetime

import pytest
from sqlmodel import SQLModel, Session

from folio.core.validation import validate_blog_create, validate_project_create
from folio.crud.blogs import create_blog
from folio.crud.database import init_db, make_engine
from folio.crud.projects import create_project
from folio.crud.tables import Blog


def make_doc(value: str) -> dict:
    return {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": value}]}]}


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="add_blog")
def add_blog_fixture(session):
    """Factory: create a blog post, optionally pinning created_at for ordering tests."""

    def _add(slug: str, created_at: datetime = None, **fields):
        payload = {"title": slug.replace("-", " ").title(), "slug": slug, "content": make_doc(slug)}
        payload.update(fields)
        blog = create_blog(session, validate_blog_create(payload))
        if created_at is not None:
            row = session.get(Blog, blog.id)
            row.created_at = created_at
            session.add(row)
            session.flush()
        return blog

    return _add


@pytest.fixture(name="add_project")
def add_project_fixture(session):
    """Factory: create a project with the given title, tags, and date."""

    def _add(title: str, tags: list[str], date: str = "2024-01-01", **fields):
        payload = {"title": title, "description": make_doc(title), "tags": tags, "date": date}
        payload.update(fields)
        return create_project(session, validate_project_create(payload))

    return _add


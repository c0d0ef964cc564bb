"""Shared fixtures for HTTP surface tests"""

import pytest
from fastapi.testclient import TestClient

from folio.api.app import create_app
from folio.api.auth import issue_token
from folio.config import Settings
from folio.media import MemoryMediaStore


ADMIN_EMAIL = "admin@example.com"


def make_doc(value: str) -> dict:
    return {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": value}]}]}


@pytest.fixture(name="settings")
def settings_fixture(tmp_path):
    return Settings(
        db_url="sqlite://",
        admin_email=ADMIN_EMAIL,
        secret_key="test-secret-key-with-at-least-32-bytes",
        media_dir=str(tmp_path / "media"),
    )


@pytest.fixture(name="media_store")
def media_store_fixture():
    return MemoryMediaStore()


@pytest.fixture(name="client")
def client_fixture(settings, media_store):
    """TestClient over a fresh in-memory database."""
    app = create_app(settings, media_store=media_store)
    with TestClient(app) as c:
        yield c


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(settings):
    return {"Authorization": f"Bearer {issue_token(ADMIN_EMAIL, settings)}"}


@pytest.fixture(name="create_post")
def create_post_fixture(client, admin_headers):
    """Factory: POST a blog post as the admin and return the response body."""

    def _create(slug: str, **fields):
        payload = {"title": slug.replace("-", " ").title(), "slug": slug, "content": make_doc(slug)}
        payload.update(fields)
        resp = client.post("/api/blog", json=payload, headers=admin_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture(name="create_project")
def create_project_fixture(client, admin_headers):
    """Factory: POST a project as the admin and return the response body."""

    def _create(title: str, tags: list[str], date: str = "2024-01-01", **fields):
        payload = {"title": title, "description": make_doc(title), "tags": tags, "date": date}
        payload.update(fields)
        resp = client.post("/api/projects", json=payload, headers=admin_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create

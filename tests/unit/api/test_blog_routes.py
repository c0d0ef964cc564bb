"""HTTP tests for the /api/blog routes"""

from folio.api.auth import issue_token


CONTENT = {
    "type": "doc",
    "content": [
        {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "Hi"}]},
        {"type": "paragraph", "content": [{"type": "text", "text": "World", "marks": [{"type": "bold"}]}]},
    ],
}


# --- admin gate ---

def test_create_requires_auth(client):
    """Unauthenticated writes are rejected before the payload is looked at."""
    resp = client.post("/api/blog", json={"anything": "goes"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized: Admin access required"}


def test_create_rejects_non_admin_token(client, settings):
    token = issue_token("intruder@example.com", settings)
    resp = client.post(
        "/api/blog",
        json={"title": "T", "slug": "t", "content": CONTENT},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 401


def test_create_rejects_bad_token(client):
    resp = client.post("/api/blog", json={}, headers={"Authorization": "Bearer nonsense"})
    assert resp.status_code == 401


def test_update_and_delete_require_auth(client, create_post):
    create_post("guarded", published=True)
    assert client.put("/api/blog/guarded", json={"title": "x"}).status_code == 401
    assert client.delete("/api/blog/guarded").status_code == 401
    assert client.get("/api/blog/guarded").json()["title"] == "Guarded"


# --- create ---

def test_create_blog_post(client, admin_headers):
    resp = client.post(
        "/api/blog",
        json={"title": "Hello", "slug": "hello", "content": CONTENT, "tags": ["a", "b"], "published": True},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["slug"] == "hello"
    assert body["tags"] == ["a", "b"]
    assert body["content"] == CONTENT
    assert body["content_html"] == "<h1>Hi</h1><p><strong>World</strong></p>"


def test_create_duplicate_slug_conflict(client, admin_headers, create_post):
    create_post("dup")
    resp = client.post("/api/blog", json={"title": "Again", "slug": "dup", "content": CONTENT}, headers=admin_headers)
    assert resp.status_code == 409
    assert resp.json() == {"error": "Blog post with this slug already exists"}


def test_create_invalid_payload(client, admin_headers):
    """Validation failures list every field with its path."""
    resp = client.post(
        "/api/blog",
        json={"title": "", "slug": "Not A Slug", "content": {"type": "doc", "content": []}},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation failed"
    assert {d["path"] for d in body["details"]} == {"title", "slug", "content"}


def test_create_non_object_body(client, admin_headers):
    resp = client.post("/api/blog", json=["a"], headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["details"] == [{"path": "", "message": "Expected a JSON object"}]


# --- public reads ---

def test_list_excludes_drafts_and_content(client, create_post):
    create_post("live", published=True)
    create_post("draft")
    resp = client.get("/api/blog")
    assert resp.status_code == 200
    posts = resp.json()
    assert [p["slug"] for p in posts] == ["live"]
    assert "content" not in posts[0]


def test_list_all_for_admin_only(client, admin_headers, create_post):
    """?all=true includes drafts only for the admin."""
    create_post("live", published=True)
    create_post("draft")
    assert len(client.get("/api/blog", params={"all": "true"}).json()) == 1
    assert len(client.get("/api/blog", params={"all": "true"}, headers=admin_headers).json()) == 2


def test_filter_route(client, create_post):
    create_post("python-tips", tags=["python"], published=True)
    create_post("go-tips", tags=["go"], published=True)
    create_post("rust-tips", tags=["rust"], published=True, excerpt="Faster than python")
    resp = client.get("/api/blog/filter", params={"search": "PYTHON", "tags": "python, go"})
    assert resp.status_code == 200
    assert [p["slug"] for p in resp.json()] == ["python-tips"]


def test_filter_route_without_params(client, create_post):
    create_post("one", published=True)
    assert [p["slug"] for p in client.get("/api/blog/filter").json()] == ["one"]


def test_get_by_slug(client, create_post):
    create_post("readme", published=True, content=CONTENT)
    body = client.get("/api/blog/readme").json()
    assert body["content_html"] == "<h1>Hi</h1><p><strong>World</strong></p>"


def test_get_draft_hidden_from_public(client, admin_headers, create_post):
    create_post("hidden")
    resp = client.get("/api/blog/hidden")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Blog post not found"}
    assert client.get("/api/blog/hidden", headers=admin_headers).status_code == 200


# --- update ---

def test_update_blog_post(client, admin_headers, create_post):
    create_post("post", tags=["a"])
    resp = client.put("/api/blog/post", json={"published": True, "tags": ["b", "c"]}, headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["published"] is True
    assert body["tags"] == ["b", "c"]
    assert body["title"] == "Post"


def test_update_rename_conflict(client, admin_headers, create_post):
    create_post("first")
    create_post("second")
    resp = client.put("/api/blog/first", json={"slug": "second"}, headers=admin_headers)
    assert resp.status_code == 409


def test_update_missing_post(client, admin_headers):
    resp = client.put("/api/blog/ghost", json={"title": "x"}, headers=admin_headers)
    assert resp.status_code == 404


def test_update_invalid_payload(client, admin_headers, create_post):
    create_post("post")
    resp = client.put("/api/blog/post", json={"title": None}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["details"] == [{"path": "title", "message": "Field may not be null"}]


# --- delete ---

def test_delete_blog_post(client, admin_headers, create_post):
    create_post("bye", published=True)
    resp = client.delete("/api/blog/bye", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Blog post deleted successfully"}
    assert client.get("/api/blog/bye").status_code == 404


def test_delete_missing_post(client, admin_headers):
    assert client.delete("/api/blog/ghost", headers=admin_headers).status_code == 404

"""Blog routes: public listing/filter/detail and admin create/update/delete"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlmodel import Session

from folio.api.auth import current_admin_identity, require_admin
from folio.api.deps import get_session
from folio.core.filters import parse_tag_param
from folio.core.models import BlogRead, BlogSummary
from folio.core.validation import validate_blog_create, validate_blog_update
from folio.crud.blogs import create_blog, delete_blog, filter_blogs, get_blog_by_slug, update_blog


router = APIRouter(prefix="/api/blog", tags=["Blog"])


@router.get("", response_model=list[BlogSummary])
def list_blog_posts(
    include_drafts: bool = Query(False, alias="all"),
    identity: Optional[str] = Depends(current_admin_identity),
    session: Session = Depends(get_session),
    ):
    """Published posts, newest first. Admins may pass ?all=true to include drafts."""
    return filter_blogs(session, include_unpublished=include_drafts and identity is not None)


@router.get("/filter", response_model=list[BlogSummary])
def filter_blog_posts(
    search: Optional[str] = None,
    tags: Optional[str] = None,
    session: Session = Depends(get_session),
    ):
    """Published posts whose title or excerpt contains search and whose tags match any of tags."""
    return filter_blogs(session, search=search, tags=parse_tag_param(tags))


@router.get("/{slug}", response_model=BlogRead)
def get_blog_post(
    slug: str,
    identity: Optional[str] = Depends(current_admin_identity),
    session: Session = Depends(get_session),
    ):
    return get_blog_by_slug(session, slug, include_unpublished=identity is not None)


@router.post("", response_model=BlogRead, status_code=201)
def create_blog_post(
    admin: str = Depends(require_admin),
    payload: Any = Body(...),
    session: Session = Depends(get_session),
    ):
    data = validate_blog_create(payload)
    blog = create_blog(session, data)
    session.commit()
    return blog


@router.put("/{slug}", response_model=BlogRead)
def update_blog_post(
    slug: str,
    admin: str = Depends(require_admin),
    payload: Any = Body(...),
    session: Session = Depends(get_session),
    ):
    data = validate_blog_update(payload)
    blog = update_blog(session, slug, data)
    session.commit()
    return blog


@router.delete("/{slug}")
def delete_blog_post(
    slug: str,
    admin: str = Depends(require_admin),
    session: Session = Depends(get_session),
    ):
    delete_blog(session, slug)
    session.commit()
    return {"message": "Blog post deleted successfully"}

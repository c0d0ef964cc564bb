"""Blog post persistence: slug lookup, filtered listing, create/update/delete"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from folio.core.filters import blog_filter_statement
from folio.core.models import BlogRead, BlogSummary
from folio.core.render import render_html
from folio.core.validation import BlogCreate, BlogUpdate
from folio.crud.tables import Blog, BlogTag
from folio.crud.tags import replace_tags, tags_by_owner
from folio.errors import NotFoundError, SlugConflictError


logger = logging.getLogger(__name__)


def _get_row(session: Session, slug: str) -> Optional[Blog]:
    return session.exec(select(Blog).where(Blog.slug == slug)).one_or_none()


def _summary(blog: Blog, tags: list[str]) -> BlogSummary:
    return BlogSummary(**blog.model_dump(exclude={"content"}), tags=tags)


def _read(session: Session, blog: Blog) -> BlogRead:
    tags = tags_by_owner(session, BlogTag, [blog.id]).get(blog.id, [])
    return BlogRead(
        **blog.model_dump(),
        tags=tags,
        content_html=render_html(blog.content),
    )


def _flush_or_conflict(session: Session, slug: str) -> None:
    """Flush pending writes; a unique-constraint failure on slug becomes SlugConflictError."""
    try:
        session.flush()
    except IntegrityError as e:
        session.rollback()
        logger.warning("Slug conflict on flush for '%s': %s", slug, e.orig)
        raise SlugConflictError(slug) from e


def slug_exists(session: Session, slug: str) -> bool:
    return _get_row(session, slug) is not None


def get_blog_by_slug(session: Session, slug: str, include_unpublished: bool = False) -> BlogRead:
    """Return the full post for slug. Unpublished posts are visible only with include_unpublished."""
    blog = _get_row(session, slug)
    if blog is None or (not blog.published and not include_unpublished):
        raise NotFoundError("Blog post not found")
    return _read(session, blog)


def filter_blogs(
    session: Session,
    search: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    include_unpublished: bool = False,
    ) -> list[BlogSummary]:
    """Summaries (no content) of posts matching search/tags, newest first."""
    rows = session.exec(blog_filter_statement(search, tags, include_unpublished)).all()
    tag_map = tags_by_owner(session, BlogTag, [b.id for b in rows])
    return [_summary(b, tag_map.get(b.id, [])) for b in rows]


def create_blog(session: Session, data: BlogCreate) -> BlogRead:
    """Insert a new post. Raises SlugConflictError if the slug is taken.

    Flushes but does not commit; caller controls the transaction.
    """
    if slug_exists(session, data.slug):
        raise SlugConflictError(data.slug)

    blog = Blog(
        title=data.title,
        slug=data.slug,
        content=data.content.model_dump(exclude_none=True),
        excerpt=data.excerpt,
        published=data.published,
    )
    session.add(blog)
    _flush_or_conflict(session, data.slug)
    replace_tags(session, BlogTag, blog.id, data.tags)
    logger.info("Created blog post '%s'", blog.slug)
    return _read(session, blog)


def update_blog(session: Session, slug: str, data: BlogUpdate) -> BlogRead:
    """Apply the fields present in data to the post at slug.

    Raises NotFoundError for an unknown slug and SlugConflictError when renaming
    onto an existing slug. Flushes but does not commit.
    """
    blog = _get_row(session, slug)
    if blog is None:
        raise NotFoundError("Blog post not found")

    changes = data.model_dump(exclude_unset=True, exclude={"content", "tags"})
    new_slug = changes.get("slug")
    if new_slug and new_slug != slug and slug_exists(session, new_slug):
        raise SlugConflictError(new_slug)

    for field, value in changes.items():
        setattr(blog, field, value)
    if "content" in data.model_fields_set:
        blog.content = data.content.model_dump(exclude_none=True)
    blog.updated_at = datetime.now()
    session.add(blog)
    _flush_or_conflict(session, blog.slug)

    if "tags" in data.model_fields_set:
        replace_tags(session, BlogTag, blog.id, data.tags)
    logger.info("Updated blog post '%s'", blog.slug)
    return _read(session, blog)


def delete_blog(session: Session, slug: str) -> None:
    """Remove the post and its tag links. Flushes but does not commit."""
    blog = _get_row(session, slug)
    if blog is None:
        raise NotFoundError("Blog post not found")
    replace_tags(session, BlogTag, blog.id, [])
    session.delete(blog)
    session.flush()
    logger.info("Deleted blog post '%s'", slug)

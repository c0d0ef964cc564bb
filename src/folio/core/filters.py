"""Query construction for filtered blog and project listings.

Both builders take an optional free-text search and an optional tag set; empty
values do not narrow the result. Tags match any (set intersection), and the
search and tag filters combine with AND.
"""

from typing import Iterable, Optional

from sqlalchemy import or_
from sqlmodel import col, select

from folio.crud.tables import Blog, BlogTag, Project, ProjectTag


def normalize_search(search: Optional[str]) -> str:
    return (search or "").strip()


def normalize_tags(tags: Optional[Iterable[str]]) -> list[str]:
    """Strip, drop blanks, and de-duplicate tags keeping first occurrence order."""
    if not tags:
        return []
    cleaned = (t.strip() for t in tags if isinstance(t, str))
    return list(dict.fromkeys(t for t in cleaned if t))


def parse_tag_param(raw: Optional[str]) -> list[str]:
    """Split a comma-separated query-string value ("a, b,,c") into tags."""
    if not raw:
        return []
    return normalize_tags(raw.split(","))


def blog_filter_statement(
    search: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    include_unpublished: bool = False,
    ):
    """SELECT blogs matching the filters, newest first."""
    stmt = select(Blog)
    if not include_unpublished:
        stmt = stmt.where(col(Blog.published).is_(True))

    tag_list = normalize_tags(tags)
    if tag_list:
        tagged = select(BlogTag.blog_id).where(col(BlogTag.tag_name).in_(tag_list))
        stmt = stmt.where(col(Blog.id).in_(tagged))

    term = normalize_search(search)
    if term:
        stmt = stmt.where(or_(
            col(Blog.title).icontains(term, autoescape=True),
            col(Blog.excerpt).icontains(term, autoescape=True),
        ))

    return stmt.order_by(col(Blog.created_at).desc())


def project_filter_statement(
    search: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    ):
    """SELECT projects matching the filters, most recent project date first."""
    stmt = select(Project)

    tag_list = normalize_tags(tags)
    if tag_list:
        tagged = select(ProjectTag.project_id).where(col(ProjectTag.tag_name).in_(tag_list))
        stmt = stmt.where(col(Project.id).in_(tagged))

    term = normalize_search(search)
    if term:
        stmt = stmt.where(col(Project.title).icontains(term, autoescape=True))

    return stmt.order_by(col(Project.date).desc(), col(Project.created_at).desc())

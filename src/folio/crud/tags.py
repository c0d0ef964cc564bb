"""Tag link persistence shared by blog posts and projects"""

from collections import defaultdict
from typing import Iterable, Type, Union
from uuid import UUID

from sqlmodel import Session, col, select

from folio.crud.tables import BlogTag, ProjectTag, Tag


LinkModel = Type[Union[BlogTag, ProjectTag]]


def _owner_column(link: LinkModel):
    return link.blog_id if link is BlogTag else link.project_id


def replace_tags(session: Session, link: LinkModel, owner_id: UUID, tags: list[str]) -> None:
    """Delete the owner's tag links and insert new ones in list order.

    Tag rows are created on first use and reused afterwards.
    Flushes but does not commit.
    """
    owner = _owner_column(link)
    for row in session.exec(select(link).where(owner == owner_id)).all():
        session.delete(row)
    session.flush()

    for position, name in enumerate(tags):
        if not session.get(Tag, name):
            session.add(Tag(name=name))
            session.flush()
        session.add(link(**{owner.key: owner_id, "tag_name": name, "position": position}))
    session.flush()


def tags_by_owner(session: Session, link: LinkModel, owner_ids: Iterable[UUID]) -> dict[UUID, list[str]]:
    """Return {owner_id: [tag, ...]} ordered by link position; owners without tags are absent."""
    ids = list(owner_ids)
    if not ids:
        return {}
    owner = _owner_column(link)
    rows = session.exec(
        select(link).where(col(owner).in_(ids)).order_by(col(link.position).asc())
    ).all()
    grouped: dict[UUID, list[str]] = defaultdict(list)
    for row in rows:
        grouped[getattr(row, owner.key)].append(row.tag_name)
    return dict(grouped)


def distinct_tags(session: Session, link: LinkModel) -> list[str]:
    """Sorted distinct tag names in use by the given link table."""
    names = session.exec(select(link.tag_name).distinct()).all()
    return sorted(names)

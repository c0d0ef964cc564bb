"""Project persistence: id lookup, filtered listing, tag listing, create/update/delete"""

import logging
from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from sqlmodel import Session

from folio.core.filters import project_filter_statement
from folio.core.models import ProjectRead
from folio.core.plaintext import preview
from folio.core.render import render_html
from folio.core.validation import ProjectCreate, ProjectUpdate
from folio.crud.tables import Project, ProjectTag
from folio.crud.tags import distinct_tags, replace_tags, tags_by_owner
from folio.errors import NotFoundError


logger = logging.getLogger(__name__)

PREVIEW_CHARS = 200


def _get_row(session: Session, project_id) -> Optional[Project]:
    """Lookup by id; ids that are not valid UUIDs simply do not exist."""
    if not isinstance(project_id, UUID):
        try:
            project_id = UUID(str(project_id))
        except ValueError:
            return None
    return session.get(Project, project_id)


def _read(project: Project, tags: list[str]) -> ProjectRead:
    return ProjectRead(
        **project.model_dump(),
        tags=tags,
        description_html=render_html(project.description),
        description_text=preview(project.description, PREVIEW_CHARS),
    )


def get_project_by_id(session: Session, project_id) -> ProjectRead:
    project = _get_row(session, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return _read(project, tags_by_owner(session, ProjectTag, [project.id]).get(project.id, []))


def filter_projects(
    session: Session,
    search: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    ) -> list[ProjectRead]:
    """Projects whose title contains search and whose tags intersect tags, latest date first."""
    rows = session.exec(project_filter_statement(search, tags)).all()
    tag_map = tags_by_owner(session, ProjectTag, [p.id for p in rows])
    return [_read(p, tag_map.get(p.id, [])) for p in rows]


def list_project_tags(session: Session) -> list[str]:
    """Sorted distinct tags across all projects."""
    return distinct_tags(session, ProjectTag)


def create_project(session: Session, data: ProjectCreate) -> ProjectRead:
    """Insert a new project. Flushes but does not commit."""
    project = Project(
        title=data.title,
        description=data.description.model_dump(exclude_none=True),
        image=data.image,
        github=data.github,
        date=data.date,
    )
    session.add(project)
    session.flush()
    replace_tags(session, ProjectTag, project.id, data.tags)
    logger.info("Created project '%s' (%s)", project.title, project.id)
    return _read(project, data.tags)


def update_project(session: Session, project_id, data: ProjectUpdate) -> ProjectRead:
    """Apply the fields present in data. Raises NotFoundError; flushes but does not commit."""
    project = _get_row(session, project_id)
    if project is None:
        raise NotFoundError("Project not found")

    for field, value in data.model_dump(exclude_unset=True, exclude={"description", "tags"}).items():
        setattr(project, field, value)
    if "description" in data.model_fields_set:
        project.description = data.description.model_dump(exclude_none=True)
    project.updated_at = datetime.now()
    session.add(project)
    session.flush()

    if "tags" in data.model_fields_set:
        replace_tags(session, ProjectTag, project.id, data.tags)
    logger.info("Updated project '%s' (%s)", project.title, project.id)
    return get_project_by_id(session, project.id)


def delete_project(session: Session, project_id) -> None:
    """Remove the project and its tag links. Flushes but does not commit."""
    project = _get_row(session, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    pid = project.id
    replace_tags(session, ProjectTag, pid, [])
    session.delete(project)
    session.flush()
    logger.info("Deleted project %s", pid)

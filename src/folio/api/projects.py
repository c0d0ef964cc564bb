"""Project routes: public listing/filter/tags/detail and admin create/update/delete"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from sqlmodel import Session

from folio.api.auth import require_admin
from folio.api.deps import get_session
from folio.core.filters import parse_tag_param
from folio.core.models import ProjectRead
from folio.core.validation import validate_project_create, validate_project_update
from folio.crud.projects import (
    create_project,
    delete_project,
    filter_projects,
    get_project_by_id,
    list_project_tags,
    update_project,
)


router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.get("", response_model=list[ProjectRead])
def list_projects(tags: Optional[str] = None, session: Session = Depends(get_session)):
    """All projects by date, optionally narrowed to any of the comma-separated tags."""
    return filter_projects(session, tags=parse_tag_param(tags))


@router.get("/filter", response_model=list[ProjectRead])
def filter_project_list(
    search: Optional[str] = None,
    tags: Optional[str] = None,
    session: Session = Depends(get_session),
    ):
    return filter_projects(session, search=search, tags=parse_tag_param(tags))


@router.get("/tags")
def project_tags(session: Session = Depends(get_session)):
    return {"tags": list_project_tags(session)}


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(project_id: str, session: Session = Depends(get_session)):
    return get_project_by_id(session, project_id)


@router.post("", response_model=ProjectRead, status_code=201)
def create_project_entry(
    admin: str = Depends(require_admin),
    payload: Any = Body(...),
    session: Session = Depends(get_session),
    ):
    data = validate_project_create(payload)
    project = create_project(session, data)
    session.commit()
    return project


@router.put("/{project_id}", response_model=ProjectRead)
def update_project_entry(
    project_id: str,
    admin: str = Depends(require_admin),
    payload: Any = Body(...),
    session: Session = Depends(get_session),
    ):
    data = validate_project_update(payload)
    project = update_project(session, project_id, data)
    session.commit()
    return project


@router.delete("/{project_id}")
def delete_project_entry(
    project_id: str,
    admin: str = Depends(require_admin),
    session: Session = Depends(get_session),
    ):
    delete_project(session, project_id)
    session.commit()
    return {"message": "Project deleted successfully"}

"""
Projects router — the public featured list and the owner's project CRUD.

Endpoints:
  GET    /api/projects/featured  — Featured projects, owner stripped   (public)
  GET    /api/projects           — Your projects, filterable/sortable  (bearer)
  POST   /api/projects           — Create a project                    (bearer)
  PUT    /api/projects/{id}      — Update a project you own            (bearer + owner)
  DELETE /api/projects/{id}      — Delete a project you own            (bearer + owner)
"""

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database import get_db
from portfolio.dependencies import AuthenticatedUser, get_current_user
from portfolio.models.project import ProjectStatus
from portfolio.schemas.common import DeletedResponse
from portfolio.schemas.project import (
    OwnedProjectResponse,
    ProjectCreateRequest,
    ProjectFilters,
    ProjectResponse,
    ProjectUpdateRequest,
)
from portfolio.services import project_service

router = APIRouter()


def _split_technologies(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    names = [name.strip() for name in raw.split(",") if name.strip()]
    return names or None


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------

@router.get(
    "/featured",
    response_model=list[ProjectResponse],
    summary="List featured projects",
)
async def get_featured_projects(db: AsyncSession = Depends(get_db)):
    """
    Projects flagged for the landing page, most recent start date first.

    The response schema has no owner field.
    """
    return await project_service.get_featured_projects(db)


# ---------------------------------------------------------------------------
# Owner endpoints
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=list[OwnedProjectResponse],
    summary="List your projects",
)
async def get_projects(
    search: str | None = Query(None, description="Substring of title, description or a technology"),
    project_status: ProjectStatus | None = Query(None, alias="status", description="Exact status"),
    technologies: str | None = Query(None, description="Comma-separated technologies (any match)"),
    start_year: int | None = Query(None, alias="startDate", description="Earliest start year"),
    end_year: int | None = Query(None, alias="endDate", description="Latest start year"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List the authenticated user's projects.

    sortBy accepts title, status, startDate, endDate, createdAt or updatedAt
    with sortOrder asc or desc. Anything else sorts by start date, newest first.
    """
    filters = ProjectFilters(
        search=search.strip() if search and search.strip() else None,
        status=project_status,
        technologies=_split_technologies(technologies),
        start_year=start_year,
        end_year=end_year,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return await project_service.get_projects(db, user.id, filters)


@router.post(
    "",
    response_model=OwnedProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
async def create_project(
    request: ProjectCreateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a project owned by the authenticated user.

    - **title**, **description**, **startDate**: required
    - everything else is optional; status defaults to Planning and
      featured to false
    """
    return await project_service.create_project(db, user.id, request)


@router.put(
    "/{project_id}",
    response_model=OwnedProjectResponse,
    summary="Update a project",
)
async def update_project(
    project_id: uuid.UUID,
    request: ProjectUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Apply the provided fields to a project you own.

    Returns 400 if the project doesn't exist and 401 if it isn't yours.
    """
    return await project_service.update_project(db, project_id, user.id, request)


@router.delete(
    "/{project_id}",
    response_model=DeletedResponse,
    summary="Delete a project",
)
async def delete_project(
    project_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a project you own. The response carries the deleted id."""
    deleted_id = await project_service.delete_project(db, project_id, user.id)
    return DeletedResponse(id=deleted_id)

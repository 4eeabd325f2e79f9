"""
Project service — business logic for portfolio projects.

This module handles:
  - The public featured list (landing page)
  - The owner's private list with search, filters and sorting
  - Creation, update and deletion with ownership enforcement

Ownership enforcement:
  Every private query is scoped by the `user_id` passed in from the
  authorization gate, and every mutation loads the project first, then
  checks its owner before touching it. A missing project is reported
  before ownership, so a wrong id never reveals anything about ownership.

Filtering:
  Owner, status and the start-year range are applied in SQL, and so is the
  sort order. The free-text search and the technology filter need to look
  inside the JSON technologies list, so they run over the SQL result in
  Python. The result keeps the SQL order.
"""

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.exceptions import InvalidRequestError, ResourceNotFoundError
from portfolio.models.project import Project, ProjectStatus
from portfolio.schemas.project import ProjectCreateRequest, ProjectFilters, ProjectUpdateRequest
from portfolio.services.ownership import ensure_owner

logger = logging.getLogger(__name__)

# Wire names accepted by ?sortBy=
SORT_FIELDS = {
    "title": Project.title,
    "status": Project.status,
    "startDate": Project.start_date,
    "endDate": Project.end_date,
    "createdAt": Project.created_at,
    "updatedAt": Project.updated_at,
}
DEFAULT_SORT = ("startDate", "desc")

REQUIRED_FIELDS = ("title", "description", "start_date")

# Values used when an optional field is omitted on create or sent as null on update
FIELD_DEFAULTS = {
    "technologies": list,
    "github_url": str,
    "demo_url": str,
    "status": lambda: ProjectStatus.PLANNING,
    "featured": bool,
    "images": list,
    "body1": str,
    "body2": str,
    "body3": str,
    "tags": list,
    "team_size": lambda: 1,
}


def _order_by(sort_by: str | None, sort_order: str | None):
    """Build the ORDER BY clause, falling back to start date descending."""
    order = (sort_order or "desc").lower()
    if sort_by not in SORT_FIELDS or order not in ("asc", "desc"):
        sort_by, order = DEFAULT_SORT
    column = SORT_FIELDS[sort_by]
    primary = column.asc() if order == "asc" else column.desc()
    return [primary, Project.created_at.desc(), Project.id]


def _year_start(year: int, label: str, offset: int = 0) -> date:
    try:
        return date(year + offset, 1, 1)
    except (ValueError, OverflowError):
        raise InvalidRequestError(f"Invalid {label} year: {year}")


def _matches_search(project: Project, term: str) -> bool:
    term = term.lower()
    if term in project.title.lower() or term in project.description.lower():
        return True
    return any(term in tech.lower() for tech in project.technologies or [])


def _uses_any(project: Project, wanted: set[str]) -> bool:
    return any(tech.lower() in wanted for tech in project.technologies or [])


async def get_featured_projects(db: AsyncSession) -> list[Project]:
    """
    List featured projects for the public landing page, newest start first.

    Callers must serialize these with the public (owner-free) schema.
    """
    result = await db.execute(
        select(Project)
        .where(Project.featured.is_(True))
        .order_by(Project.start_date.desc(), Project.created_at.desc())
    )
    return list(result.scalars().all())


async def get_projects(
    db: AsyncSession,
    user_id: uuid.UUID,
    filters: ProjectFilters | None = None,
) -> list[Project]:
    """
    List the projects owned by `user_id`, filtered and sorted.

    With no filters this returns every owned project, start date descending.
    """
    filters = filters or ProjectFilters()

    stmt = select(Project).where(Project.user_id == user_id)
    if filters.status is not None:
        stmt = stmt.where(Project.status == filters.status)
    if filters.start_year is not None:
        stmt = stmt.where(Project.start_date >= _year_start(filters.start_year, "start"))
    if filters.end_year is not None:
        # Exclusive bound at the start of the following year
        stmt = stmt.where(Project.start_date < _year_start(filters.end_year, "end", offset=1))
    stmt = stmt.order_by(*_order_by(filters.sort_by, filters.sort_order))

    result = await db.execute(stmt)
    projects = list(result.scalars().all())

    if filters.search:
        projects = [p for p in projects if _matches_search(p, filters.search)]
    if filters.technologies:
        wanted = {tech.lower() for tech in filters.technologies}
        projects = [p for p in projects if _uses_any(p, wanted)]
    return projects


async def get_project(db: AsyncSession, project_id: uuid.UUID) -> Project:
    """
    Raises:
        ResourceNotFoundError: If the project doesn't exist.
    """
    result = await db.execute(select(Project).where(Project.id == project_id))
    project = result.scalar_one_or_none()
    if project is None:
        raise ResourceNotFoundError("Project")
    return project


async def create_project(
    db: AsyncSession,
    user_id: uuid.UUID,
    data: ProjectCreateRequest,
) -> Project:
    """
    Create a project owned by `user_id`.

    Raises:
        InvalidRequestError: If title, description or start date is missing.
    """
    if not data.title or not data.description or not data.start_date:
        raise InvalidRequestError("Please add title, description, and start date fields")

    values = data.model_dump(exclude_none=True)
    for field, default in FIELD_DEFAULTS.items():
        values.setdefault(field, default())

    project = Project(user_id=user_id, **values)
    db.add(project)
    await db.flush()
    return project


async def update_project(
    db: AsyncSession,
    project_id: uuid.UUID,
    user_id: uuid.UUID,
    data: ProjectUpdateRequest,
) -> Project:
    """
    Apply the fields present in `data` to a project the caller owns.

    Raises:
        ResourceNotFoundError: If the project doesn't exist.
        NotAuthorizedError: If the project belongs to someone else.
        InvalidRequestError: If a required field is cleared.
    """
    project = await get_project(db, project_id)
    ensure_owner(project.user_id, user_id)

    changes = data.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in changes and not changes[field]:
            raise InvalidRequestError("Title, description, and start date cannot be empty")

    for field, value in changes.items():
        if value is None and field in FIELD_DEFAULTS:
            value = FIELD_DEFAULTS[field]()
        setattr(project, field, value)

    await db.flush()
    return project


async def delete_project(
    db: AsyncSession,
    project_id: uuid.UUID,
    user_id: uuid.UUID,
) -> uuid.UUID:
    """
    Delete a project the caller owns and return its id.

    Raises:
        ResourceNotFoundError: If the project doesn't exist.
        NotAuthorizedError: If the project belongs to someone else.
    """
    project = await get_project(db, project_id)
    ensure_owner(project.user_id, user_id)

    await db.delete(project)
    await db.flush()
    logger.info("Deleted project %s", project_id)
    return project_id

"""
Pydantic schemas for Project endpoints.

Two response shapes exist:
  - ProjectResponse: the public shape, used by GET /api/projects/featured.
    It has no owner field, so the owner can never leak from the landing page.
  - OwnedProjectResponse: adds the owner as "user", used by the owner's
    private endpoints.

Dates travel as "YYYY-MM-DD". "YYYY-MM" (month picker) and full ISO
timestamps are accepted on input and truncated to a date.
"""

import re
import uuid
from dataclasses import dataclass
from datetime import date, datetime

from pydantic import Field, field_validator

from portfolio.models.project import ProjectStatus
from portfolio.schemas.common import CamelModel

_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def _coerce_date(value):
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if _MONTH_RE.match(value):
            return f"{value}-01"
        if "T" in value:
            return value.split("T", 1)[0]
    return value


class ProjectFields(CamelModel):
    """Every writable project field, all optional."""
    title: str | None = None
    description: str | None = None
    technologies: list[str] | None = None
    github_url: str | None = None
    demo_url: str | None = None
    status: ProjectStatus | None = None
    featured: bool | None = None
    start_date: date | None = None
    end_date: date | None = None
    images: list[str] | None = None
    body1: str | None = None
    body2: str | None = None
    body3: str | None = None
    tags: list[str] | None = None
    team_size: int | None = Field(default=None, ge=1)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def accept_month_and_timestamp(cls, value):
        return _coerce_date(value)


class ProjectCreateRequest(ProjectFields):
    """Request body for POST /api/projects. title, description and startDate are required."""


class ProjectUpdateRequest(ProjectFields):
    """Request body for PUT /api/projects/{id}. Only the fields sent are applied."""


class ProjectResponse(CamelModel):
    """Public representation of a project (no owner)."""
    id: uuid.UUID = Field(alias="_id")
    title: str
    description: str
    technologies: list[str]
    github_url: str
    demo_url: str
    status: ProjectStatus
    featured: bool
    start_date: date
    end_date: date | None
    images: list[str]
    body1: str
    body2: str
    body3: str
    tags: list[str]
    team_size: int
    created_at: datetime
    updated_at: datetime


class OwnedProjectResponse(ProjectResponse):
    """Private representation of a project, including its owner."""
    user_id: uuid.UUID = Field(alias="user")


@dataclass
class ProjectFilters:
    """
    Filters for the owner's project list (GET /api/projects).

    Attributes:
        search: Case-insensitive substring of title, description or any technology.
        status: Exact status match.
        technologies: Matches projects using any of these (case-insensitive).
        start_year: Projects starting on or after Jan 1 of this year.
        end_year: Projects starting before Jan 1 of the following year.
        sort_by: Wire name of the sort field (see project_service.SORT_FIELDS).
        sort_order: "asc" or "desc".
    """
    search: str | None = None
    status: ProjectStatus | None = None
    technologies: list[str] | None = None
    start_year: int | None = None
    end_year: int | None = None
    sort_by: str | None = None
    sort_order: str | None = None

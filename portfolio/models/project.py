"""
Project model — a portfolio project owned by one User.

Besides the listing fields (title, description, technologies, links, status,
dates) a project carries blog-like detail content: three free-text body
sections, image URLs, tags and a team size.

Visibility:
  A project is private to its owner unless `featured` is true, in which case
  it also appears on the public landing page. Public responses never include
  the owner reference.

Dates:
  start_date is required. end_date is NULL for ongoing projects.

List fields (technologies, images, tags) are JSON columns holding ordered
lists of strings.
"""

import enum
import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Boolean, Integer, Date, DateTime, Enum, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.database import Base


class ProjectStatus(str, enum.Enum):
    """
    Development status of a project.

    Inherits from str so the value serializes naturally to JSON.
    """
    PLANNING = "Planning"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    # Owner of this project
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    technologies: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    github_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    demo_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    # values_callable stores "In Progress" rather than the member name
    status: Mapped[ProjectStatus] = mapped_column(
        Enum(
            ProjectStatus,
            values_callable=lambda members: [m.value for m in members],
            validate_strings=True,
        ),
        nullable=False,
        default=ProjectStatus.PLANNING,
    )

    # Shown on the public landing page when true
    featured: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)

    # --- Detail content ---
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    body1: Mapped[str] = mapped_column(Text, nullable=False, default="")
    body2: Mapped[str] = mapped_column(Text, nullable=False, default="")
    body3: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    team_size: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

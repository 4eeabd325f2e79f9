"""
Skill model — a named skill in one of a fixed set of categories.

Uniqueness:
  No two skills may share the same case-insensitive name within a category.
  This is enforced by an existence check in skill_service before each write,
  not by a database constraint, so two concurrent creates can both pass the
  check and both be stored.

Ownership:
  user_id is nullable. Skills created through the API always record their
  creator; rows inserted by other means may have no owner.
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.database import Base


class SkillCategory(str, enum.Enum):
    LANGUAGES = "Languages"
    FRONTEND = "Frontend"
    BACKEND = "Backend"
    AI_ML = "AI/ML"
    DEVOPS_TOOLS = "DevOps & Tools"
    ADDITIONAL_TOOLS = "Additional Tools"


class Skill(Base):
    __tablename__ = "skills"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id"),
        nullable=True,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    category: Mapped[SkillCategory] = mapped_column(
        Enum(
            SkillCategory,
            values_callable=lambda members: [m.value for m in members],
            validate_strings=True,
        ),
        nullable=False,
        index=True,
    )

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

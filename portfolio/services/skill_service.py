"""
Skill service — business logic for the skills list.

Skills are public to read and owner-only to change. Within a category, a
skill name may appear once, compared case-insensitively: "React" and "react"
collide in Frontend, but "react" in Backend is a different skill.

The duplicate check loads the names already in the category and compares
them with str.casefold(), so non-ASCII capitals ("Élixir" and "élixir")
collide too. It runs before the write, inside the same request transaction.
The table has no unique constraint on the folded name, so two requests
racing past the check can both insert.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.exceptions import DuplicateSkillError, InvalidRequestError, ResourceNotFoundError
from portfolio.models.skill import Skill, SkillCategory
from portfolio.schemas.skill import SkillRequest
from portfolio.services.ownership import ensure_owner

logger = logging.getLogger(__name__)


async def _ensure_unique(
    db: AsyncSession,
    name: str,
    category: SkillCategory,
    exclude_id: uuid.UUID | None = None,
) -> None:
    stmt = select(Skill.name).where(Skill.category == category)
    if exclude_id is not None:
        stmt = stmt.where(Skill.id != exclude_id)

    # SQLite's lower() folds ASCII only
    wanted = name.casefold()
    result = await db.execute(stmt)
    if any(existing.casefold() == wanted for existing in result.scalars()):
        logger.info("Duplicate skill %r in %s", name, category.value)
        raise DuplicateSkillError(name, category.value)


async def get_all_skills(db: AsyncSession) -> list[Skill]:
    """Every skill, by category then name."""
    result = await db.execute(select(Skill).order_by(Skill.category, Skill.name))
    return list(result.scalars().all())


async def get_skills_by_category(db: AsyncSession, category: str) -> list[Skill]:
    """Skills in one category, by name. An unknown category has no skills."""
    try:
        wanted = SkillCategory(category)
    except ValueError:
        return []
    result = await db.execute(
        select(Skill).where(Skill.category == wanted).order_by(Skill.name)
    )
    return list(result.scalars().all())


async def get_user_skills(db: AsyncSession, user_id: uuid.UUID) -> list[Skill]:
    result = await db.execute(
        select(Skill)
        .where(Skill.user_id == user_id)
        .order_by(Skill.category, Skill.name)
    )
    return list(result.scalars().all())


async def get_skill(db: AsyncSession, skill_id: uuid.UUID) -> Skill:
    result = await db.execute(select(Skill).where(Skill.id == skill_id))
    skill = result.scalar_one_or_none()
    if skill is None:
        raise ResourceNotFoundError("Skill")
    return skill


async def add_skill(db: AsyncSession, user_id: uuid.UUID, data: SkillRequest) -> Skill:
    """
    Create a skill owned by `user_id`.

    Raises:
        InvalidRequestError: If name or category is missing.
        DuplicateSkillError: If the name already exists in the category.
    """
    if not data.name or data.category is None:
        raise InvalidRequestError("Please add name and category fields")

    await _ensure_unique(db, data.name, data.category)

    skill = Skill(user_id=user_id, name=data.name, category=data.category)
    db.add(skill)
    await db.flush()
    return skill


async def update_skill(
    db: AsyncSession,
    skill_id: uuid.UUID,
    user_id: uuid.UUID,
    data: SkillRequest,
) -> Skill:
    """
    Rename or recategorize a skill the caller owns.

    The duplicate check runs against the resulting (name, category) pair and
    ignores the skill itself, so changing only the case of a name succeeds.

    Raises:
        ResourceNotFoundError, NotAuthorizedError, InvalidRequestError,
        DuplicateSkillError
    """
    skill = await get_skill(db, skill_id)
    ensure_owner(skill.user_id, user_id)

    changes = data.model_dump(exclude_unset=True)
    if "name" in changes and not changes["name"]:
        raise InvalidRequestError("Skill name cannot be empty")
    if "category" in changes and changes["category"] is None:
        raise InvalidRequestError("Skill category cannot be empty")

    name = changes.get("name", skill.name)
    category = changes.get("category", skill.category)
    await _ensure_unique(db, name, category, exclude_id=skill.id)

    skill.name = name
    skill.category = category
    await db.flush()
    return skill


async def delete_skill(db: AsyncSession, skill_id: uuid.UUID, user_id: uuid.UUID) -> uuid.UUID:
    skill = await get_skill(db, skill_id)
    ensure_owner(skill.user_id, user_id)

    await db.delete(skill)
    await db.flush()
    return skill_id

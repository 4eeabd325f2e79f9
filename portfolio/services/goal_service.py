"""
Goal service — owner-scoped CRUD for the dashboard's goal list.

Same rules as projects: list only your own, not-found before ownership,
owner-only updates and deletes.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.exceptions import InvalidRequestError, ResourceNotFoundError
from portfolio.models.goal import Goal
from portfolio.schemas.goal import GoalRequest
from portfolio.services.ownership import ensure_owner


async def get_goals(db: AsyncSession, user_id: uuid.UUID) -> list[Goal]:
    result = await db.execute(
        select(Goal)
        .where(Goal.user_id == user_id)
        .order_by(Goal.created_at.desc(), Goal.id)
    )
    return list(result.scalars().all())


async def get_goal(db: AsyncSession, goal_id: uuid.UUID) -> Goal:
    result = await db.execute(select(Goal).where(Goal.id == goal_id))
    goal = result.scalar_one_or_none()
    if goal is None:
        raise ResourceNotFoundError("Goal")
    return goal


async def create_goal(db: AsyncSession, user_id: uuid.UUID, data: GoalRequest) -> Goal:
    if not data.title:
        raise InvalidRequestError("Please add a title field")

    goal = Goal(user_id=user_id, title=data.title, description=data.description or "")
    db.add(goal)
    await db.flush()
    return goal


async def update_goal(
    db: AsyncSession,
    goal_id: uuid.UUID,
    user_id: uuid.UUID,
    data: GoalRequest,
) -> Goal:
    goal = await get_goal(db, goal_id)
    ensure_owner(goal.user_id, user_id)

    changes = data.model_dump(exclude_unset=True)
    if "title" in changes:
        if not changes["title"]:
            raise InvalidRequestError("Goal title cannot be empty")
        goal.title = changes["title"]
    if "description" in changes:
        goal.description = changes["description"] or ""

    await db.flush()
    return goal


async def delete_goal(db: AsyncSession, goal_id: uuid.UUID, user_id: uuid.UUID) -> uuid.UUID:
    goal = await get_goal(db, goal_id)
    ensure_owner(goal.user_id, user_id)

    await db.delete(goal)
    await db.flush()
    return goal_id

"""
Goals router — the dashboard's original owner-scoped list.

Endpoints (all bearer; PUT/DELETE also owner-only):
  GET    /api/goals
  POST   /api/goals
  PUT    /api/goals/{id}
  DELETE /api/goals/{id}
"""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database import get_db
from portfolio.dependencies import AuthenticatedUser, get_current_user
from portfolio.schemas.common import DeletedResponse
from portfolio.schemas.goal import GoalRequest, GoalResponse
from portfolio.services import goal_service

router = APIRouter()


@router.get("", response_model=list[GoalResponse], summary="List your goals")
async def get_goals(
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await goal_service.get_goals(db, user.id)


@router.post(
    "",
    response_model=GoalResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a goal",
)
async def create_goal(
    request: GoalRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await goal_service.create_goal(db, user.id, request)


@router.put("/{goal_id}", response_model=GoalResponse, summary="Update a goal")
async def update_goal(
    goal_id: uuid.UUID,
    request: GoalRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await goal_service.update_goal(db, goal_id, user.id, request)


@router.delete("/{goal_id}", response_model=DeletedResponse, summary="Delete a goal")
async def delete_goal(
    goal_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await goal_service.delete_goal(db, goal_id, user.id)
    return DeletedResponse(id=deleted_id)

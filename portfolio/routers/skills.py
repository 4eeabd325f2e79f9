"""
Skills router — public skill listing and owner-only skill management.

Endpoints:
  GET    /api/skills                       — All skills              (public)
  GET    /api/skills/category/{category}   — Skills in one category  (public)
  GET    /api/skills/me                    — Your skills             (bearer)
  POST   /api/skills                       — Add a skill             (bearer)
  PUT    /api/skills/{id}                  — Update a skill you own  (bearer + owner)
  DELETE /api/skills/{id}                  — Delete a skill you own  (bearer + owner)

The category segment is a path converter so "AI/ML" can be requested
as /api/skills/category/AI/ML.
"""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database import get_db
from portfolio.dependencies import AuthenticatedUser, get_current_user
from portfolio.schemas.common import DeletedResponse
from portfolio.schemas.skill import OwnedSkillResponse, SkillRequest, SkillResponse
from portfolio.services import skill_service

router = APIRouter()


@router.get(
    "",
    response_model=list[SkillResponse],
    summary="List all skills",
)
async def get_all_skills(db: AsyncSession = Depends(get_db)):
    """All skills, sorted by category and then name."""
    return await skill_service.get_all_skills(db)


@router.get(
    "/category/{category:path}",
    response_model=list[SkillResponse],
    summary="List skills in a category",
)
async def get_skills_by_category(category: str, db: AsyncSession = Depends(get_db)):
    return await skill_service.get_skills_by_category(db, category)


@router.get(
    "/me",
    response_model=list[OwnedSkillResponse],
    summary="List your skills",
)
async def get_my_skills(
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await skill_service.get_user_skills(db, user.id)


@router.post(
    "",
    response_model=OwnedSkillResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a skill",
)
async def add_skill(
    request: SkillRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Add a skill owned by the authenticated user.

    Returns 400 if the same name (ignoring case) already exists in the category.
    """
    return await skill_service.add_skill(db, user.id, request)


@router.put(
    "/{skill_id}",
    response_model=OwnedSkillResponse,
    summary="Update a skill",
)
async def update_skill(
    skill_id: uuid.UUID,
    request: SkillRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await skill_service.update_skill(db, skill_id, user.id, request)


@router.delete(
    "/{skill_id}",
    response_model=DeletedResponse,
    summary="Delete a skill",
)
async def delete_skill(
    skill_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await skill_service.delete_skill(db, skill_id, user.id)
    return DeletedResponse(id=deleted_id)

"""
Skills API - Skill and skill category library endpoints.

POST /skills is idempotent by name: submitting an existing skill name
returns the stored skill instead of failing, so the resume editor can
"type a skill and get it either way".
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from resume_builder.database import get_db
from resume_builder.auth import get_current_user
from resume_builder.schemas import (
    SkillCreate,
    SkillUpdate,
    SkillResponse,
    SkillCategoryCreate,
    SkillCategoryUpdate,
    SkillCategoryResponse,
)
from resume_builder.services.library import LibraryStore

router = APIRouter()


# ==============================================================================
# Skills
# ==============================================================================

@router.get("/skills", response_model=list[SkillResponse])
async def list_skills(
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).list_skills()


@router.post("/skills", response_model=SkillResponse)
async def create_skill(
    payload: SkillCreate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).create_skill(payload)


@router.put("/skills/{skill_id}", response_model=SkillResponse)
async def update_skill(
    skill_id: int,
    payload: SkillUpdate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).update_skill(skill_id, payload)


@router.delete("/skills/{skill_id}")
async def delete_skill(
    skill_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    await LibraryStore(db).delete_skill(skill_id)
    return {"success": True}


# ==============================================================================
# Skill categories
# ==============================================================================

@router.get("/skill-categories", response_model=list[SkillCategoryResponse])
async def list_skill_categories(
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).list_skill_categories()


@router.post("/skill-categories", response_model=SkillCategoryResponse)
async def create_skill_category(
    payload: SkillCategoryCreate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).create_skill_category(payload)


@router.put("/skill-categories/{category_id}", response_model=SkillCategoryResponse)
async def update_skill_category(
    category_id: int,
    payload: SkillCategoryUpdate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).update_skill_category(category_id, payload)


@router.delete("/skill-categories/{category_id}")
async def delete_skill_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    # Skills in this category are kept and become uncategorized
    await LibraryStore(db).delete_skill_category(category_id)
    return {"success": True}

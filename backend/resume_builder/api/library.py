from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from resume_builder.database import get_db
from resume_builder.auth import get_current_user
from resume_builder.schemas import (
    ExperienceCreate,
    ExperienceUpdate,
    ExperienceResponse,
    EducationCreate,
    EducationUpdate,
    EducationResponse,
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ContactCreate,
    ContactUpdate,
    ContactResponse,
    SocialCreate,
    SocialUpdate,
    SocialResponse,
)
from resume_builder.services.library import LibraryStore

router = APIRouter()


# ==============================================================================
# Experiences
# ==============================================================================

@router.get("/experiences", response_model=list[ExperienceResponse])
async def list_experiences(
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).list_experiences()


@router.post("/experiences", response_model=ExperienceResponse)
async def create_experience(
    payload: ExperienceCreate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).create_experience(payload)


@router.put("/experiences/{experience_id}", response_model=ExperienceResponse)
async def update_experience(
    experience_id: int,
    payload: ExperienceUpdate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).update_experience(experience_id, payload)


@router.delete("/experiences/{experience_id}")
async def delete_experience(
    experience_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    await LibraryStore(db).delete_experience(experience_id)
    return {"success": True}


# ==============================================================================
# Education
# ==============================================================================

@router.get("/education", response_model=list[EducationResponse])
async def list_education(
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).list_education()


@router.post("/education", response_model=EducationResponse)
async def create_education(
    payload: EducationCreate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).create_education(payload)


@router.put("/education/{education_id}", response_model=EducationResponse)
async def update_education(
    education_id: int,
    payload: EducationUpdate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).update_education(education_id, payload)


@router.delete("/education/{education_id}")
async def delete_education(
    education_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    await LibraryStore(db).delete_education(education_id)
    return {"success": True}


# ==============================================================================
# Projects
# ==============================================================================

@router.get("/projects", response_model=list[ProjectResponse])
async def list_projects(
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).list_projects()


@router.post("/projects", response_model=ProjectResponse)
async def create_project(
    payload: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).create_project(payload)


@router.put("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    payload: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).update_project(project_id, payload)


@router.delete("/projects/{project_id}")
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    await LibraryStore(db).delete_project(project_id)
    return {"success": True}


# ==============================================================================
# Contacts
# ==============================================================================

@router.get("/contacts", response_model=list[ContactResponse])
async def list_contacts(
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).list_contacts()


@router.post("/contacts", response_model=ContactResponse)
async def create_contact(
    payload: ContactCreate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).create_contact(payload)


@router.put("/contacts/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: int,
    payload: ContactUpdate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).update_contact(contact_id, payload)


@router.delete("/contacts/{contact_id}")
async def delete_contact(
    contact_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    await LibraryStore(db).delete_contact(contact_id)
    return {"success": True}


# ==============================================================================
# Socials
# ==============================================================================

@router.get("/socials", response_model=list[SocialResponse])
async def list_socials(
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).list_socials()


@router.post("/socials", response_model=SocialResponse)
async def create_social(
    payload: SocialCreate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).create_social(payload)


@router.put("/socials/{social_id}", response_model=SocialResponse)
async def update_social(
    social_id: int,
    payload: SocialUpdate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await LibraryStore(db).update_social(social_id, payload)


@router.delete("/socials/{social_id}")
async def delete_social(
    social_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    await LibraryStore(db).delete_social(social_id)
    return {"success": True}

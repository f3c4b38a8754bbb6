from resume_builder.schemas.library import (
    SkillCategoryCreate,
    SkillCategoryUpdate,
    SkillCategoryResponse,
    SkillCreate,
    SkillUpdate,
    SkillResponse,
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
from resume_builder.schemas.resume import (
    ContactSnapshot,
    SocialSnapshot,
    ResumeCreate,
    ResumeUpdate,
    ResumeSummary,
    ResumeResponse,
)
from resume_builder.schemas.auth import LoginRequest, LoginResponse, AuthStatus

__all__ = [
    "SkillCategoryCreate",
    "SkillCategoryUpdate",
    "SkillCategoryResponse",
    "SkillCreate",
    "SkillUpdate",
    "SkillResponse",
    "ExperienceCreate",
    "ExperienceUpdate",
    "ExperienceResponse",
    "EducationCreate",
    "EducationUpdate",
    "EducationResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ContactCreate",
    "ContactUpdate",
    "ContactResponse",
    "SocialCreate",
    "SocialUpdate",
    "SocialResponse",
    "ContactSnapshot",
    "SocialSnapshot",
    "ResumeCreate",
    "ResumeUpdate",
    "ResumeSummary",
    "ResumeResponse",
    "LoginRequest",
    "LoginResponse",
    "AuthStatus",
]

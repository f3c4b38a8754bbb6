from pydantic import BaseModel, Field, StrictInt
from datetime import datetime
from typing import Any, Dict, Optional, Union

from resume_builder.schemas.library import (
    ExperienceResponse,
    EducationResponse,
    ProjectResponse,
)


# A partition entry is a library id or an inline entity object; booleans and
# numeric strings are not ids
EntryValue = Union[StrictInt, Dict[str, Any]]

# Hex colors or CSS color keywords; the value is written into the stylesheet
ACCENT_COLOR_PATTERN = r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]+)$"


class ContactSnapshot(BaseModel):
    """Contact details copied into a resume at write time."""

    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    location: Optional[str] = None

    class Config:
        extra = "allow"


class SocialSnapshot(BaseModel):
    label: str
    url: str


class ResumeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    label: str = ""
    title: str = ""
    summary: str = ""
    contact: Optional[ContactSnapshot] = None
    socials: list[SocialSnapshot] = []
    accent_color: Optional[str] = Field(None, pattern=ACCENT_COLOR_PATTERN)
    sidebar_title: Optional[str] = None
    sidebar_text: Optional[str] = None
    skills: Optional[list[EntryValue]] = None
    experiences: Optional[list[EntryValue]] = None
    education: Optional[list[EntryValue]] = None
    projects: Optional[list[EntryValue]] = None


class ResumeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    label: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    contact: Optional[ContactSnapshot] = None
    socials: Optional[list[SocialSnapshot]] = None
    accent_color: Optional[str] = Field(None, pattern=ACCENT_COLOR_PATTERN)
    sidebar_title: Optional[str] = None
    sidebar_text: Optional[str] = None
    skills: Optional[list[EntryValue]] = None
    experiences: Optional[list[EntryValue]] = None
    education: Optional[list[EntryValue]] = None
    projects: Optional[list[EntryValue]] = None


class ResumeSummary(BaseModel):
    id: int
    name: str
    label: str
    title: str
    accent_color: str
    updated_at: datetime

    class Config:
        from_attributes = True


class ResumeResponse(BaseModel):
    id: int
    name: str
    label: str
    title: str
    summary: str
    contact: Optional[ContactSnapshot] = None
    socials: list[SocialSnapshot]
    accent_color: str
    sidebar_title: Optional[str] = None
    sidebar_text: Optional[str] = None
    updated_at: datetime
    # Skills stay as bare ids; clients resolve names from the skill list
    skills: list[int]
    experiences: list[ExperienceResponse]
    education: list[EducationResponse]
    projects: list[ProjectResponse]

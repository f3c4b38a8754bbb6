from pydantic import BaseModel, Field
from typing import Literal, Optional


WorkType = Literal["remote", "on-site", "hybrid"]
ContactType = Literal["email", "phone", "website", "linkedin", "github", "location"]


# Skill categories

class SkillCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    ord: int = 0

    class Config:
        str_strip_whitespace = True


class SkillCategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    ord: Optional[int] = None

    class Config:
        str_strip_whitespace = True


class SkillCategoryResponse(BaseModel):
    id: int
    name: str
    ord: int

    class Config:
        from_attributes = True


# Skills

class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category_id: Optional[int] = None

    class Config:
        str_strip_whitespace = True


class SkillUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    category_id: Optional[int] = None

    class Config:
        str_strip_whitespace = True


class SkillResponse(BaseModel):
    id: int
    name: str
    category_id: Optional[int] = None

    class Config:
        from_attributes = True


# Experiences

class ExperienceBase(BaseModel):
    role: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: Optional[str] = None
    work_type: Optional[WorkType] = None
    start: str
    end: str
    bullets: list[str] = []


class ExperienceCreate(ExperienceBase):
    pass


class ExperienceUpdate(BaseModel):
    role: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    work_type: Optional[WorkType] = None
    start: Optional[str] = None
    end: Optional[str] = None
    bullets: Optional[list[str]] = None


class ExperienceResponse(ExperienceBase):
    id: int

    class Config:
        from_attributes = True


# Education

class EducationBase(BaseModel):
    institution: str = Field(..., min_length=1)
    degree: str = Field(..., min_length=1)
    end: str = ""


class EducationCreate(EducationBase):
    pass


class EducationUpdate(BaseModel):
    institution: Optional[str] = Field(None, min_length=1)
    degree: Optional[str] = Field(None, min_length=1)
    end: Optional[str] = None


class EducationResponse(EducationBase):
    id: int

    class Config:
        from_attributes = True


# Projects

class ProjectBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    link: Optional[str] = None
    bullets: list[str] = []


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    link: Optional[str] = None
    bullets: Optional[list[str]] = None


class ProjectResponse(ProjectBase):
    id: int

    class Config:
        from_attributes = True


# Contacts

class ContactBase(BaseModel):
    type: ContactType
    value: str = Field(..., min_length=1)
    label: Optional[str] = None


class ContactCreate(ContactBase):
    pass


class ContactUpdate(BaseModel):
    type: Optional[ContactType] = None
    value: Optional[str] = Field(None, min_length=1)
    label: Optional[str] = None


class ContactResponse(ContactBase):
    id: int

    class Config:
        from_attributes = True


# Socials

class SocialBase(BaseModel):
    label: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)


class SocialCreate(SocialBase):
    pass


class SocialUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1)
    url: Optional[str] = Field(None, min_length=1)


class SocialResponse(SocialBase):
    id: int

    class Config:
        from_attributes = True

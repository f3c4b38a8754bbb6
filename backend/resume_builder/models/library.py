"""
Library Models - Reusable resume components

Each library entity is owned independently of any resume. Resumes reference
skills, experiences, education entries and projects through the ordered join
tables in resume.py; contacts and socials are copied into the resume row as
snapshots instead.

Delete Rules (enforced by the database):
    - Deleting a skill category sets skills.category_id to NULL
    - Deleting a skill/experience/education/project removes its join rows
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, DateTime, JSON
from sqlalchemy.sql import func
from resume_builder.database import Base


WORK_TYPES = ("remote", "on-site", "hybrid")
CONTACT_TYPES = ("email", "phone", "website", "linkedin", "github", "location")


class SkillCategory(Base):
    """
    Display grouping for skills.

    Attributes:
        name: Category label (unique)
        ord: Display order, ascending
    """

    __tablename__ = "skill_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, unique=True)
    ord = Column(Integer, nullable=False, default=0)


class Skill(Base):
    """
    A single skill name, optionally grouped under a category.

    Attributes:
        name: Skill label (unique, creation is idempotent by name)
        category_id: Weak reference to SkillCategory, nulled when it is deleted
    """

    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, unique=True)
    category_id = Column(
        Integer,
        ForeignKey("skill_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )


class Experience(Base):
    """
    A work history entry.

    Attributes:
        role: Job title held
        company: Employer name
        location: Free-form location (nullable)
        work_type: One of WORK_TYPES (nullable)
        start/end: Free-form period labels (e.g. "Aug 2022", "Present")
        bullets: Ordered list of accomplishment strings (JSON)
    """

    __tablename__ = "experiences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    role = Column(String(300), nullable=False)
    company = Column(String(300), nullable=False)
    location = Column(String(300), nullable=True)
    work_type = Column(String(20), nullable=True)
    start = Column(String(50), nullable=False, default="")
    end = Column(String(50), nullable=False, default="")
    bullets = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, server_default=func.now())


class Education(Base):
    __tablename__ = "education"

    id = Column(Integer, primary_key=True, autoincrement=True)
    institution = Column(String(300), nullable=False)
    degree = Column(String(300), nullable=False)
    end = Column(String(50), nullable=False, default="")
    created_at = Column(DateTime, server_default=func.now())


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    link = Column(String(2000), nullable=True)
    bullets = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, server_default=func.now())


class Contact(Base):
    """
    A contact method such as an email address or phone number.

    Attributes:
        type: One of CONTACT_TYPES
        value: The address/number/URL itself
        label: Optional qualifier (e.g. "work", "personal")
    """

    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(20), nullable=False)
    value = Column(String(500), nullable=False)
    label = Column(String(100), nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Social(Base):
    __tablename__ = "socials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    label = Column(String(100), nullable=False)
    url = Column(String(2000), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

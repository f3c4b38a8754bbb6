"""
Resume Models - Resume base rows and their ordered join tables

A resume is a base row plus four join partitions (skills, experiences,
education, projects). Each join row is keyed by (resume_id, entity_id) and
carries an `ord` column; reads sort on `ord` ascending. Join rows cascade
away when either side is deleted.

Contact and socials live on the base row as JSON snapshots taken at write
time; they are not linked to the library tables.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, DateTime, JSON
from sqlalchemy.sql import func
from resume_builder.database import Base


class Resume(Base):
    """
    Resume document base row.

    Attributes:
        name: Person name printed in the header
        label: Application-specific nickname (e.g. "Backend - ACME")
        title: Headline under the name
        summary: Profile paragraph
        contact: Snapshot dict of contact type -> value (JSON, nullable)
        socials: Snapshot list of {label, url} (JSON)
        accent_color: CSS color used by the rendered document
        sidebar_title/sidebar_text: Optional custom sidebar section
    """

    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False)
    label = Column(String(300), nullable=False, default="")
    title = Column(String(300), nullable=False, default="")
    summary = Column(Text, nullable=False, default="")
    contact = Column(JSON, nullable=True)
    socials = Column(JSON, nullable=False, default=list)
    accent_color = Column(String(20), nullable=False)
    sidebar_title = Column(String(300), nullable=True)
    sidebar_text = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, index=True)


class ResumeSkill(Base):
    __tablename__ = "resume_skills"

    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), primary_key=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True)
    ord = Column(Integer, nullable=False, default=0)


class ResumeExperience(Base):
    __tablename__ = "resume_experiences"

    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), primary_key=True)
    experience_id = Column(Integer, ForeignKey("experiences.id", ondelete="CASCADE"), primary_key=True)
    ord = Column(Integer, nullable=False, default=0)


class ResumeEducation(Base):
    __tablename__ = "resume_education"

    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), primary_key=True)
    education_id = Column(Integer, ForeignKey("education.id", ondelete="CASCADE"), primary_key=True)
    ord = Column(Integer, nullable=False, default=0)


class ResumeProject(Base):
    __tablename__ = "resume_projects"

    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), primary_key=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True)
    ord = Column(Integer, nullable=False, default=0)

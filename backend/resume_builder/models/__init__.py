from resume_builder.models.library import (
    SkillCategory,
    Skill,
    Experience,
    Education,
    Project,
    Contact,
    Social,
)
from resume_builder.models.resume import (
    Resume,
    ResumeSkill,
    ResumeExperience,
    ResumeEducation,
    ResumeProject,
)

__all__ = [
    "SkillCategory",
    "Skill",
    "Experience",
    "Education",
    "Project",
    "Contact",
    "Social",
    "Resume",
    "ResumeSkill",
    "ResumeExperience",
    "ResumeEducation",
    "ResumeProject",
]

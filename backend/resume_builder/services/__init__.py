from resume_builder.services.library import LibraryStore
from resume_builder.services.resumes import ResumeStore
from resume_builder.services.table_admin import TableAdmin

__all__ = ["LibraryStore", "ResumeStore", "TableAdmin"]

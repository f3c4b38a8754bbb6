from fastapi import APIRouter
from resume_builder.api import admin, auth, library, resumes, skills

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(resumes.router, prefix="/resumes", tags=["resumes"])
api_router.include_router(skills.router, tags=["skills"])
api_router.include_router(library.router, tags=["library"])
api_router.include_router(admin.router, prefix="/db", tags=["database"])

from fastapi import APIRouter, Depends, Response
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
from resume_builder.database import get_db
from resume_builder.schemas import ResumeCreate, ResumeUpdate, ResumeResponse, ResumeSummary
from resume_builder.services.resumes import ResumeStore
from resume_builder.services.export import render_resume, render_pdf
from resume_builder.auth import get_current_user

router = APIRouter()


@router.get("", response_model=list[ResumeSummary])
async def list_resumes(
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await ResumeStore(db).list_resumes()


@router.get("/{resume_id}", response_model=ResumeResponse)
async def get_resume(
    resume_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await ResumeStore(db).get_resume(resume_id)


@router.post("", response_model=ResumeResponse)
async def create_resume(
    payload: ResumeCreate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await ResumeStore(db).create_resume(payload)


@router.put("/{resume_id}", response_model=ResumeResponse)
async def update_resume(
    resume_id: int,
    payload: ResumeUpdate,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await ResumeStore(db).update_resume(resume_id, payload)


@router.delete("/{resume_id}")
async def delete_resume(
    resume_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    await ResumeStore(db).delete_resume(resume_id)
    return {"success": True}


@router.get("/{resume_id}/html", response_class=HTMLResponse)
async def preview_resume(
    resume_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return HTMLResponse(await render_resume(ResumeStore(db), resume_id))


@router.get("/{resume_id}/pdf")
async def export_resume_pdf(
    resume_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    html = await render_resume(ResumeStore(db), resume_id)
    # WeasyPrint is CPU bound; keep it off the event loop
    pdf = await run_in_threadpool(render_pdf, html)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="resume.pdf"'},
    )

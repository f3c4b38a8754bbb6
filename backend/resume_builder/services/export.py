"""
Resume Export - HTML rendering and PDF conversion

Renders an assembled resume into a self-contained HTML document (Jinja2,
autoescaped) and converts that document into PDF bytes with WeasyPrint.
The same HTML serves as the in-browser preview.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from resume_builder.middleware.metrics import record_pdf_export_latency
from resume_builder.schemas import ResumeResponse, SkillCategoryResponse, SkillResponse
from resume_builder.services.library import LibraryStore
from resume_builder.services.resumes import ResumeStore

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
UNCATEGORIZED = "Other"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def group_skills(
    skills: list[SkillResponse],
    categories: list[SkillCategoryResponse],
) -> list[tuple[str, list[str]]]:
    """
    Group skill names under their category, in category display order.

    Skills keep their resume order inside each group; skills without a
    category (or with a category that no longer exists) go last under
    "Other".
    """
    names = {category.id: category.name for category in categories}
    grouped: dict[int | None, list[str]] = {}
    for skill in skills:
        key = skill.category_id if skill.category_id in names else None
        grouped.setdefault(key, []).append(skill.name)

    groups = [(category.name, grouped[category.id]) for category in categories if category.id in grouped]
    if None in grouped:
        groups.append((UNCATEGORIZED, grouped[None]))
    return groups


def render_resume_html(
    resume: ResumeResponse,
    skills: list[SkillResponse],
    categories: list[SkillCategoryResponse],
) -> str:
    """Render a resume aggregate to a standalone HTML document."""
    template = _env.get_template("resume.html")
    return template.render(
        resume=resume,
        contact=resume.contact.model_dump(exclude_none=True) if resume.contact else {},
        skill_groups=group_skills(skills, categories),
    )


def render_pdf(html: str) -> bytes:
    """Convert rendered HTML to PDF bytes."""
    start = time.perf_counter()
    pdf = _html_to_pdf(html)
    record_pdf_export_latency(time.perf_counter() - start)
    logger.info("Rendered PDF (%d bytes)", len(pdf))
    return pdf


def _html_to_pdf(html: str) -> bytes:
    # WeasyPrint pulls in pango/cairo; import only when exporting
    from weasyprint import HTML

    return HTML(string=html).write_pdf()


async def render_resume(store: ResumeStore, resume_id: int) -> str:
    """Load a resume with its skill names and categories, and render it to HTML."""
    resume = await store.get_resume(resume_id)
    library: LibraryStore = store.library
    skills = await library.get_skills(resume.skills)
    categories = await library.list_skill_categories()
    return render_resume_html(resume, skills, categories)

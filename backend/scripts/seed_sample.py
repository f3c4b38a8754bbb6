#!/usr/bin/env python3
"""
Sample Data Seed Script

Loads a sample library (skill categories, skills, contacts, socials) and one
resume into the local database. Experiences and education entries are
submitted inline in the resume payload, so the script goes through the
same quick-add path as the resume editor.

Usage:
    # Seed when the database has no resumes yet
    python scripts/seed_sample.py --seed

    # Seed even if resumes already exist
    python scripts/seed_sample.py --seed --force

    # Print table counts
    python scripts/seed_sample.py --verify
"""

import asyncio
import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select, func

from resume_builder.database import async_session, init_db
from resume_builder.models import Resume
from resume_builder.services.library import LibraryStore
from resume_builder.services.resumes import ResumeStore
from resume_builder.services.table_admin import TableAdmin

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ==============================================================================
# Seed Data
# ==============================================================================

SEED_CATEGORIES = [
    {"name": "Languages", "ord": 0},
    {"name": "Frameworks & Tools", "ord": 1},
    {"name": "Professional", "ord": 2},
]

SEED_SKILLS = {
    "Languages": ["Java", "JavaScript", "TypeScript", "SQL", "PL/SQL", "HTML", "CSS"],
    "Frameworks & Tools": ["React.js", "Tailwind CSS", "jQuery", "Firestore", "AWS", "JSON"],
    "Professional": ["Critical Thinking", "Team Collaboration", "Agile Development", "Client Interaction"],
}

SEED_CONTACTS = [
    {"type": "email", "value": "ian@example.com"},
    {"type": "location", "value": "Connecticut, USA"},
    {"type": "github", "value": "github.com/example"},
]

SEED_SOCIALS = [
    {"label": "LinkedIn", "url": "https://www.linkedin.com/in/example"},
    {"label": "GitHub", "url": "https://github.com/example"},
]

SEED_RESUME = {
    "name": "Ian Skelskey",
    "label": "General - Software Engineer",
    "title": "Software Engineer",
    "summary": (
        "Innovative software engineer specializing in full-stack development with expertise in "
        "SQL, React, and RESTful APIs. Experienced in managing and optimizing large-scale library "
        "systems, contributing to open-source software, and developing client-centric solutions."
    ),
    "experiences": [
        {
            "role": "Evergreen Systems Specialist",
            "company": "Bibliomation, Inc.",
            "location": "Waterbury, CT",
            "work_type": "hybrid",
            "start": "July 2024",
            "end": "Present",
            "bullets": [
                "Managed and optimized the Evergreen SQL database for Connecticut's largest library consortium.",
                "Developed custom configurations and features based on user feedback.",
                "Provided Help Desk support, troubleshooting configurations, debugging, and deploying software patches.",
            ],
        },
        {
            "role": "Professional Tutor",
            "company": "Tunxis Community College",
            "location": "Farmington, CT",
            "work_type": "on-site",
            "start": "Aug 2018",
            "end": "Present",
            "bullets": [
                "Guided students in HTML, CSS, JavaScript, networking, and database topics to improve academic performance.",
            ],
        },
        {
            "role": "SI Leader",
            "company": "Arizona State University",
            "work_type": "remote",
            "start": "Aug 2022",
            "end": "Jan 2023",
            "bullets": [
                'Led supplemental instruction for "Distributed Software Systems" covering client-server '
                "architecture, multithreading, and socket programming.",
            ],
        },
    ],
    "education": [
        {"degree": "BS Software Engineering", "institution": "Arizona State University", "end": "Dec 2023"},
        {"degree": "AS Mathematics/Computer Science", "institution": "CT State Tunxis", "end": "2018"},
    ],
    "projects": [],
}


# ==============================================================================
# Seeding
# ==============================================================================

async def seed(force: bool = False) -> None:
    """Create the sample library and resume."""
    await init_db()

    async with async_session() as db:
        count = (await db.execute(select(func.count(Resume.id)))).scalar() or 0
        if count and not force:
            logger.info(f"Database already has {count} resumes, skipping (use --force)")
            return

        library = LibraryStore(db)
        skill_ids = []
        existing_categories = {c.name: c.id for c in await library.list_skill_categories()}
        for category in SEED_CATEGORIES:
            category_id = existing_categories.get(category["name"])
            if category_id is None:
                category_id = (await library.create_skill_category(category)).id
            for name in SEED_SKILLS[category["name"]]:
                skill = await library.create_skill({"name": name, "category_id": category_id})
                skill_ids.append(skill.id)

        for contact in SEED_CONTACTS:
            await library.create_contact(contact)
        socials = [await library.create_social(social) for social in SEED_SOCIALS]

        payload = dict(SEED_RESUME)
        payload["skills"] = skill_ids
        payload["socials"] = [{"label": s.label, "url": s.url} for s in socials]

        resume = await ResumeStore(db, library).create_resume(payload)
        logger.info(
            f"Seeded resume {resume.id}: {len(resume.skills)} skills, "
            f"{len(resume.experiences)} experiences, {len(resume.education)} education entries"
        )


async def verify() -> None:
    """Log the row count of every table."""
    async with async_session() as db:
        admin = TableAdmin(db)
        for name in admin.table_names():
            records = await admin.list_records(name)
            logger.info(f"  {name}: {len(records)} rows")


async def run(args) -> None:
    if args.seed:
        await seed(force=args.force)
    if args.verify:
        await verify()


def main():
    parser = argparse.ArgumentParser(description="Seed the resume builder database with sample data")
    parser.add_argument("--seed", action="store_true", help="Load the sample library and resume")
    parser.add_argument("--force", action="store_true", help="Seed even if resumes already exist")
    parser.add_argument("--verify", action="store_true", help="Print table row counts")
    args = parser.parse_args()

    if not (args.seed or args.verify):
        parser.print_help()
        return

    # One event loop for both steps; the engine pool is bound to it
    asyncio.run(run(args))


if __name__ == "__main__":
    main()

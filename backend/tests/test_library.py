"""
Tests for the Library Store

Tests cover:
- Idempotent skill creation by name, including a name inserted concurrently
- Skill category delete rule (skills survive, category nulled)
- Skill listing order
- Unique name constraints
- Partial updates and NotFound handling
- Contact snapshot built from the library
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select

from resume_builder.models import Skill
from resume_builder.services.library import LibraryStore
from resume_builder.services.errors import (
    ConstraintViolation,
    InvalidPayload,
    NotFound,
    UnknownReference,
)


def experience(role="Dev", company="X", **extra):
    data = {"role": role, "company": company, "start": "2020", "end": "2021"}
    data.update(extra)
    return data


class TestSkills:
    """Test skill creation, ordering and constraints."""

    @pytest.mark.asyncio
    async def test_create_skill_is_idempotent_by_name(self, library):
        """Creating a skill twice returns the same row."""
        first = await library.create_skill({"name": "Python"})
        second = await library.create_skill({"name": "Python"})

        assert first.id == second.id
        assert [s.name for s in await library.list_skills()] == ["Python"]

    @pytest.mark.asyncio
    async def test_create_skill_strips_whitespace(self, library):
        """Names are trimmed before the idempotency lookup."""
        first = await library.create_skill({"name": "SQL"})
        second = await library.create_skill({"name": "  SQL "})
        assert first.id == second.id

    @pytest.mark.asyncio
    async def test_create_skill_requires_name(self, library):
        """An empty name is rejected."""
        with pytest.raises(InvalidPayload):
            await library.create_skill({"name": ""})

    @pytest.mark.asyncio
    async def test_create_skill_after_concurrent_insert(self, session_factory, db, library):
        """A name inserted between lookup and insert resolves to that row."""
        async with session_factory() as other:
            winner = await LibraryStore(other).create_skill({"name": "Go"})

        # The lookup ran before the other writer committed
        with patch.object(library, "_find_skill", AsyncMock(return_value=None)):
            skill = await library.create_skill({"name": "Go"})

        assert skill.id == winner.id
        total = await db.execute(select(func.count()).select_from(Skill).where(Skill.name == "Go"))
        assert total.scalar() == 1

    @pytest.mark.asyncio
    async def test_concurrent_insert_keeps_later_writes(self, session_factory, library):
        """The failed insert only rolls back its savepoint."""
        async with session_factory() as other:
            await LibraryStore(other).create_skill({"name": "Go"})

        with patch.object(library, "_find_skill", AsyncMock(return_value=None)):
            await library.create_skill({"name": "Go"})
        await library.create_skill({"name": "Rust"})

        assert [s.name for s in await library.list_skills()] == ["Go", "Rust"]

    @pytest.mark.asyncio
    async def test_create_skill_unknown_category(self, library):
        """A category_id that does not exist is an unknown reference."""
        with pytest.raises(UnknownReference):
            await library.create_skill({"name": "Go", "category_id": 999})

    @pytest.mark.asyncio
    async def test_rename_onto_existing_name_rejected(self, library):
        """Skill names stay unique on update."""
        await library.create_skill({"name": "Java"})
        kotlin = await library.create_skill({"name": "Kotlin"})

        with pytest.raises(ConstraintViolation):
            await library.update_skill(kotlin.id, {"name": "Java"})

    @pytest.mark.asyncio
    async def test_list_skills_grouped_by_category_order(self, library):
        """Skills sort by category ord, then name; uncategorized last."""
        tools = await library.create_skill_category({"name": "Tools", "ord": 1})
        languages = await library.create_skill_category({"name": "Languages", "ord": 0})
        await library.create_skill({"name": "Vim", "category_id": tools.id})
        await library.create_skill({"name": "Rust", "category_id": languages.id})
        await library.create_skill({"name": "C", "category_id": languages.id})
        await library.create_skill({"name": "Cooking"})

        names = [s.name for s in await library.list_skills()]
        assert names == ["C", "Rust", "Vim", "Cooking"]

    @pytest.mark.asyncio
    async def test_get_skills_keeps_requested_order(self, library):
        """get_skills returns rows in the order of the ids given."""
        a = await library.create_skill({"name": "A"})
        b = await library.create_skill({"name": "B"})

        skills = await library.get_skills([b.id, 999, a.id])
        assert [s.id for s in skills] == [b.id, a.id]

    @pytest.mark.asyncio
    async def test_delete_missing_skill(self, library):
        """Deleting an unknown id raises NotFound."""
        with pytest.raises(NotFound):
            await library.delete_skill(42)


class TestSkillCategories:
    """Test the skill category delete rule and uniqueness."""

    @pytest.mark.asyncio
    async def test_delete_category_nulls_skills(self, library):
        """Skills survive category deletion with category_id set to NULL."""
        category = await library.create_skill_category({"name": "Backend"})
        for name in ("Django", "Flask", "FastAPI"):
            await library.create_skill({"name": name, "category_id": category.id})

        await library.delete_skill_category(category.id)

        skills = await library.list_skills()
        assert len(skills) == 3
        assert all(s.category_id is None for s in skills)
        assert await library.list_skill_categories() == []

    @pytest.mark.asyncio
    async def test_duplicate_category_name(self, library):
        """Category names are unique."""
        await library.create_skill_category({"name": "Frontend"})
        with pytest.raises(ConstraintViolation):
            await library.create_skill_category({"name": "Frontend"})

    @pytest.mark.asyncio
    async def test_categories_listed_by_ord(self, library):
        await library.create_skill_category({"name": "Second", "ord": 2})
        await library.create_skill_category({"name": "First", "ord": 1})

        names = [c.name for c in await library.list_skill_categories()]
        assert names == ["First", "Second"]


class TestExperiences:
    """Test experience CRUD."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, library):
        """Experiences are listed newest first."""
        first = await library.create_experience(experience(role="Intern"))
        second = await library.create_experience(experience(role="Engineer", bullets=["shipped"]))

        listed = await library.list_experiences()
        assert [e.id for e in listed] == [second.id, first.id]
        assert listed[0].bullets == ["shipped"]

    @pytest.mark.asyncio
    async def test_create_requires_role_and_company(self, library):
        with pytest.raises(InvalidPayload) as exc_info:
            await library.create_experience({"role": "Dev", "start": "2020", "end": "2021"})
        assert "company" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_rejects_unknown_work_type(self, library):
        with pytest.raises(InvalidPayload):
            await library.create_experience(experience(work_type="underwater"))

    @pytest.mark.asyncio
    async def test_partial_update(self, library):
        """Only the fields sent are changed."""
        created = await library.create_experience(experience(location="Remote", bullets=["a"]))

        updated = await library.update_experience(created.id, {"role": "Lead"})

        assert updated.role == "Lead"
        assert updated.company == "X"
        assert updated.location == "Remote"
        assert updated.bullets == ["a"]

    @pytest.mark.asyncio
    async def test_update_ignores_null_on_required_field(self, library):
        created = await library.create_experience(experience())
        updated = await library.update_experience(created.id, {"role": None, "location": "Paris"})

        assert updated.role == "Dev"
        assert updated.location == "Paris"

    @pytest.mark.asyncio
    async def test_update_missing(self, library):
        with pytest.raises(NotFound):
            await library.update_experience(123, {"role": "Lead"})


class TestOtherLibraryKinds:
    """Test education, project, contact and social CRUD."""

    @pytest.mark.asyncio
    async def test_education_roundtrip(self, library):
        created = await library.create_education({"institution": "ASU", "degree": "BS", "end": "2023"})
        updated = await library.update_education(created.id, {"end": "Dec 2023"})

        assert updated.institution == "ASU"
        assert updated.end == "Dec 2023"

        await library.delete_education(created.id)
        assert await library.list_education() == []

    @pytest.mark.asyncio
    async def test_project_defaults(self, library):
        project = await library.create_project({"name": "Site"})
        assert project.bullets == []
        assert project.link is None

    @pytest.mark.asyncio
    async def test_contact_type_validated(self, library):
        with pytest.raises(InvalidPayload):
            await library.create_contact({"type": "fax", "value": "123"})

    @pytest.mark.asyncio
    async def test_social_update_and_delete(self, library):
        social = await library.create_social({"label": "GitHub", "url": "https://github.com/a"})
        updated = await library.update_social(social.id, {"url": "https://github.com/b"})
        assert updated.label == "GitHub"
        assert updated.url == "https://github.com/b"

        await library.delete_social(social.id)
        with pytest.raises(NotFound):
            await library.delete_social(social.id)


class TestContactSnapshot:
    """Test the contact snapshot used for new resumes."""

    @pytest.mark.asyncio
    async def test_empty_library(self, library):
        assert await library.contact_snapshot() == {}

    @pytest.mark.asyncio
    async def test_first_contact_of_each_type_wins(self, library):
        await library.create_contact({"type": "email", "value": "first@example.com"})
        await library.create_contact({"type": "phone", "value": "555-0100"})
        await library.create_contact({"type": "email", "value": "second@example.com"})

        assert await library.contact_snapshot() == {
            "email": "first@example.com",
            "phone": "555-0100",
        }

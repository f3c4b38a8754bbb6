"""
Library Store - CRUD for reusable resume components

Owns the seven library entity kinds (skills, skill categories, experiences,
education, projects, contacts, socials). Entities live independently of any
resume; deleting one relies on the database foreign keys to clean up join
rows (cascade) or to null out skill categories (set null).

Skill creation is idempotent by name: creating a skill whose name already
exists returns the existing row, which is what the quick-add form in the
resume editor relies on.

Usage:
    async with async_session() as db:
        library = LibraryStore(db)
        skill = await library.create_skill({"name": "Python"})
        experiences = await library.list_experiences()
"""

import logging
from typing import Any, List, Mapping, Optional, Type, Union

from pydantic import BaseModel, ValidationError
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from resume_builder.database import Base, transaction
from resume_builder.models import (
    SkillCategory,
    Skill,
    Experience,
    Education,
    Project,
    Contact,
    Social,
)
from resume_builder.schemas import (
    SkillCategoryCreate,
    SkillCategoryUpdate,
    SkillCategoryResponse,
    SkillCreate,
    SkillUpdate,
    SkillResponse,
    ExperienceCreate,
    ExperienceUpdate,
    ExperienceResponse,
    EducationCreate,
    EducationUpdate,
    EducationResponse,
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ContactCreate,
    ContactUpdate,
    ContactResponse,
    SocialCreate,
    SocialUpdate,
    SocialResponse,
)
from resume_builder.services.errors import (
    NotFound,
    UnknownReference,
    ConstraintViolation,
    InvalidPayload,
)

logger = logging.getLogger(__name__)

Payload = Union[BaseModel, Mapping[str, Any]]


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors into 'field: message' pairs."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "payload"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


class LibraryStore:
    """
    Store for library entities.

    Every public method takes or returns plain data (dicts or pydantic
    models); ORM objects never leave the store. Writes run inside
    `transaction()`, so when a resume write calls `create_experience` the
    insert joins the resume's atomic unit instead of committing on its own.

    Attributes:
        session: AsyncSession for database operations
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------

    @staticmethod
    def validate(schema: Type[BaseModel], data: Payload) -> BaseModel:
        if isinstance(data, schema):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        try:
            return schema.model_validate(data)
        except ValidationError as exc:
            raise InvalidPayload(describe_validation_error(exc)) from exc

    async def _fetch(self, query) -> list:
        # Cascades and set-null happen in SQLite, behind the identity map
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return list(result.scalars().all())

    async def _get(self, model: Type[Base], entity_id: int):
        rows = await self._fetch(select(model).where(model.id == entity_id))
        if not rows:
            raise NotFound(f"{model.__name__} {entity_id} not found")
        return rows[0]

    async def _create(self, model: Type[Base], values: BaseModel):
        async with transaction(self.session):
            entity = model(**values.model_dump())
            self.session.add(entity)
        return entity

    async def _update(self, model: Type[Base], entity_id: int, values: BaseModel):
        async with transaction(self.session):
            entity = await self._get(model, entity_id)
            columns = model.__table__.columns
            for field, value in values.model_dump(exclude_unset=True).items():
                # An explicit null on a required column means "leave as is"
                if value is None and not columns[field].nullable:
                    continue
                setattr(entity, field, value)
        return entity

    async def _delete(self, model: Type[Base], entity_id: int) -> None:
        async with transaction(self.session):
            result = await self.session.execute(delete(model).where(model.id == entity_id))
            if result.rowcount == 0:
                raise NotFound(f"{model.__name__} {entity_id} not found")
        logger.info("Deleted %s %s", model.__name__, entity_id)

    async def missing_ids(self, model: Type[Base], ids: List[int]) -> List[int]:
        """Return the ids from `ids` that have no row in the model's table."""
        if not ids:
            return []
        result = await self.session.execute(select(model.id).where(model.id.in_(ids)))
        found = set(result.scalars().all())
        return [entity_id for entity_id in ids if entity_id not in found]

    async def _require_category(self, category_id: Optional[int]) -> None:
        if category_id is not None and await self.missing_ids(SkillCategory, [category_id]):
            raise UnknownReference(f"SkillCategory {category_id} not found")

    # ------------------------------------------------------------------
    # Skill categories
    # ------------------------------------------------------------------

    async def list_skill_categories(self) -> List[SkillCategoryResponse]:
        rows = await self._fetch(select(SkillCategory).order_by(SkillCategory.ord, SkillCategory.name))
        return [SkillCategoryResponse.model_validate(row) for row in rows]

    async def create_skill_category(self, data: Payload) -> SkillCategoryResponse:
        values = self.validate(SkillCategoryCreate, data)
        await self._ensure_category_name_free(values.name)
        category = await self._create(SkillCategory, values)
        return SkillCategoryResponse.model_validate(category)

    async def update_skill_category(self, category_id: int, data: Payload) -> SkillCategoryResponse:
        values = self.validate(SkillCategoryUpdate, data)
        if values.name is not None:
            await self._ensure_category_name_free(values.name, exclude_id=category_id)
        category = await self._update(SkillCategory, category_id, values)
        return SkillCategoryResponse.model_validate(category)

    async def delete_skill_category(self, category_id: int) -> None:
        """Delete a category; its skills survive with category_id set to NULL."""
        await self._delete(SkillCategory, category_id)

    async def _ensure_category_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        query = select(SkillCategory).where(SkillCategory.name == name)
        if exclude_id is not None:
            query = query.where(SkillCategory.id != exclude_id)
        if await self._fetch(query):
            raise ConstraintViolation(f"Skill category {name!r} already exists")

    # ------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------

    async def list_skills(self) -> List[SkillResponse]:
        """List skills grouped by category display order, then by name."""
        query = (
            select(Skill)
            .outerjoin(SkillCategory, Skill.category_id == SkillCategory.id)
            .order_by(
                SkillCategory.ord.is_(None),
                SkillCategory.ord,
                SkillCategory.name,
                Skill.name,
            )
        )
        return [SkillResponse.model_validate(row) for row in await self._fetch(query)]

    async def get_skills(self, skill_ids: List[int]) -> List[SkillResponse]:
        """Fetch skills by id, returned in the order of `skill_ids`."""
        if not skill_ids:
            return []
        rows = await self._fetch(select(Skill).where(Skill.id.in_(skill_ids)))
        by_id = {row.id: row for row in rows}
        return [SkillResponse.model_validate(by_id[i]) for i in skill_ids if i in by_id]

    async def create_skill(self, data: Payload) -> SkillResponse:
        """
        Create a skill, or return the existing one with the same name.

        Args:
            data: SkillCreate or dict with `name` and optional `category_id`

        Returns:
            SkillResponse for the new or already existing row

        Raises:
            InvalidPayload: name missing or empty
            UnknownReference: category_id does not exist
        """
        values = self.validate(SkillCreate, data)
        existing = await self._find_skill(values.name)
        if existing is not None:
            logger.debug("Skill %r already exists as id=%s", values.name, existing.id)
            return SkillResponse.model_validate(existing)

        await self._require_category(values.category_id)
        async with transaction(self.session):
            try:
                async with self.session.begin_nested():
                    skill = Skill(**values.model_dump())
                    self.session.add(skill)
            except IntegrityError:
                # Another writer inserted the same name after our lookup
                rows = await self._fetch(select(Skill).where(Skill.name == values.name))
                if not rows:
                    raise ConstraintViolation(f"Skill {values.name!r} could not be created")
                skill = rows[0]
                logger.debug("Skill %r created concurrently as id=%s", values.name, skill.id)
        return SkillResponse.model_validate(skill)

    async def _find_skill(self, name: str) -> Optional[Skill]:
        rows = await self._fetch(select(Skill).where(Skill.name == name))
        return rows[0] if rows else None

    async def update_skill(self, skill_id: int, data: Payload) -> SkillResponse:
        values = self.validate(SkillUpdate, data)
        if values.name is not None:
            clash = await self._fetch(select(Skill).where(Skill.name == values.name, Skill.id != skill_id))
            if clash:
                raise ConstraintViolation(f"Skill {values.name!r} already exists")
        await self._require_category(values.category_id)
        skill = await self._update(Skill, skill_id, values)
        return SkillResponse.model_validate(skill)

    async def delete_skill(self, skill_id: int) -> None:
        await self._delete(Skill, skill_id)

    # ------------------------------------------------------------------
    # Experiences
    # ------------------------------------------------------------------

    async def list_experiences(self) -> List[ExperienceResponse]:
        rows = await self._fetch(select(Experience).order_by(Experience.id.desc()))
        return [ExperienceResponse.model_validate(row) for row in rows]

    async def create_experience(self, data: Payload) -> ExperienceResponse:
        experience = await self._create(Experience, self.validate(ExperienceCreate, data))
        return ExperienceResponse.model_validate(experience)

    async def update_experience(self, experience_id: int, data: Payload) -> ExperienceResponse:
        values = self.validate(ExperienceUpdate, data)
        experience = await self._update(Experience, experience_id, values)
        return ExperienceResponse.model_validate(experience)

    async def delete_experience(self, experience_id: int) -> None:
        await self._delete(Experience, experience_id)

    # ------------------------------------------------------------------
    # Education
    # ------------------------------------------------------------------

    async def list_education(self) -> List[EducationResponse]:
        rows = await self._fetch(select(Education).order_by(Education.id.desc()))
        return [EducationResponse.model_validate(row) for row in rows]

    async def create_education(self, data: Payload) -> EducationResponse:
        education = await self._create(Education, self.validate(EducationCreate, data))
        return EducationResponse.model_validate(education)

    async def update_education(self, education_id: int, data: Payload) -> EducationResponse:
        values = self.validate(EducationUpdate, data)
        education = await self._update(Education, education_id, values)
        return EducationResponse.model_validate(education)

    async def delete_education(self, education_id: int) -> None:
        await self._delete(Education, education_id)

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    async def list_projects(self) -> List[ProjectResponse]:
        rows = await self._fetch(select(Project).order_by(Project.id.desc()))
        return [ProjectResponse.model_validate(row) for row in rows]

    async def create_project(self, data: Payload) -> ProjectResponse:
        project = await self._create(Project, self.validate(ProjectCreate, data))
        return ProjectResponse.model_validate(project)

    async def update_project(self, project_id: int, data: Payload) -> ProjectResponse:
        values = self.validate(ProjectUpdate, data)
        project = await self._update(Project, project_id, values)
        return ProjectResponse.model_validate(project)

    async def delete_project(self, project_id: int) -> None:
        await self._delete(Project, project_id)

    # ------------------------------------------------------------------
    # Contacts
    # ------------------------------------------------------------------

    async def list_contacts(self) -> List[ContactResponse]:
        rows = await self._fetch(select(Contact).order_by(Contact.id.desc()))
        return [ContactResponse.model_validate(row) for row in rows]

    async def create_contact(self, data: Payload) -> ContactResponse:
        contact = await self._create(Contact, self.validate(ContactCreate, data))
        return ContactResponse.model_validate(contact)

    async def update_contact(self, contact_id: int, data: Payload) -> ContactResponse:
        values = self.validate(ContactUpdate, data)
        contact = await self._update(Contact, contact_id, values)
        return ContactResponse.model_validate(contact)

    async def delete_contact(self, contact_id: int) -> None:
        await self._delete(Contact, contact_id)

    async def contact_snapshot(self) -> dict:
        """
        Build a contact snapshot from the library.

        Maps each contact type to the value of its oldest contact, e.g.
        {"email": "me@example.com", "github": "github.com/me"}.
        """
        rows = await self._fetch(select(Contact).order_by(Contact.id))
        snapshot = {}
        for row in rows:
            snapshot.setdefault(row.type, row.value)
        return snapshot

    # ------------------------------------------------------------------
    # Socials
    # ------------------------------------------------------------------

    async def list_socials(self) -> List[SocialResponse]:
        rows = await self._fetch(select(Social).order_by(Social.id.desc()))
        return [SocialResponse.model_validate(row) for row in rows]

    async def create_social(self, data: Payload) -> SocialResponse:
        social = await self._create(Social, self.validate(SocialCreate, data))
        return SocialResponse.model_validate(social)

    async def update_social(self, social_id: int, data: Payload) -> SocialResponse:
        values = self.validate(SocialUpdate, data)
        social = await self._update(Social, social_id, values)
        return SocialResponse.model_validate(social)

    async def delete_social(self, social_id: int) -> None:
        await self._delete(Social, social_id)

"""
Aggregate Assembly - Resolve and materialize resume join partitions

A resume aggregate is the base row plus four ordered partitions:

    skills       -> resume_skills       -> skills       (returned as bare ids)
    experiences  -> resume_experiences  -> experiences  (returned as objects)
    education    -> resume_education    -> education    (returned as objects)
    projects     -> resume_projects     -> projects     (returned as objects)

Write path:
    Payload lists mix library ids and inline objects. Each element becomes a
    tagged entry (Reference or Inline); Inline entries are created in the
    library first, then the partition is deleted and re-inserted with
    ord = position. All of this runs inside the caller's transaction.

Read path:
    Join rows are inner-joined to their library table and ordered by ord,
    then entity id. Join rows whose entity no longer exists drop out of the
    join and are simply not shown.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Type, Union

from pydantic import BaseModel
from sqlalchemy import select, delete, insert
from sqlalchemy.ext.asyncio import AsyncSession

from resume_builder.database import Base
from resume_builder.middleware.metrics import record_inline_entity
from resume_builder.models import (
    Skill,
    Experience,
    Education,
    Project,
    Resume,
    ResumeSkill,
    ResumeExperience,
    ResumeEducation,
    ResumeProject,
)
from resume_builder.schemas import (
    ExperienceResponse,
    EducationResponse,
    ProjectResponse,
    ResumeResponse,
)
from resume_builder.services.errors import (
    InvalidPayload,
    MalformedInlineEntity,
    UnknownReference,
)
from resume_builder.services.library import LibraryStore

logger = logging.getLogger(__name__)


# Columns of the resume base row that payloads may set
BASE_FIELDS = (
    "name",
    "label",
    "title",
    "summary",
    "contact",
    "socials",
    "accent_color",
    "sidebar_title",
    "sidebar_text",
)


@dataclass(frozen=True)
class Reference:
    """Partition entry pointing at an existing library entity."""

    id: int


@dataclass(frozen=True)
class Inline:
    """Partition entry carrying a new entity to create in the library."""

    data: Mapping[str, Any]


Entry = Union[Reference, Inline]


def to_entry(value: Any) -> Entry:
    """
    Tag a raw payload element as a Reference or an Inline entry.

    Bare integers are references. Objects that carry an integer `id` are
    references too, since clients send back the objects they read. Any other
    object is an inline entity.

    Raises:
        InvalidPayload: value is neither an id nor an object
    """
    if isinstance(value, (Reference, Inline)):
        return value
    if isinstance(value, BaseModel):
        value = value.model_dump(exclude_unset=True)
    if isinstance(value, int) and not isinstance(value, bool):
        return Reference(value)
    if isinstance(value, Mapping):
        entity_id = value.get("id")
        if isinstance(entity_id, int) and not isinstance(entity_id, bool):
            return Reference(entity_id)
        return Inline(dict(value))
    raise InvalidPayload(f"expected a library id or an object, got {type(value).__name__}")


@dataclass(frozen=True)
class Partition:
    """
    Describes one join partition of the resume aggregate.

    Attributes:
        name: Payload/response key
        kind: Metric label for inline creations
        entity: Library ORM model
        join: Join-table ORM model
        entity_fk: Join column referencing the library table
        creator: LibraryStore method used for inline entries
        view: Response model for the read path; None returns bare ids
    """

    name: str
    kind: str
    entity: Type[Base]
    join: Type[Base]
    entity_fk: str
    creator: str
    view: Optional[Type[BaseModel]]

    @property
    def fk_column(self):
        return getattr(self.join, self.entity_fk)


PARTITIONS = (
    Partition("skills", "skill", Skill, ResumeSkill, "skill_id", "create_skill", None),
    Partition(
        "experiences", "experience", Experience, ResumeExperience,
        "experience_id", "create_experience", ExperienceResponse,
    ),
    Partition(
        "education", "education", Education, ResumeEducation,
        "education_id", "create_education", EducationResponse,
    ),
    Partition(
        "projects", "project", Project, ResumeProject,
        "project_id", "create_project", ProjectResponse,
    ),
)


async def resolve_partition(
    library: LibraryStore,
    partition: Partition,
    values: Sequence[Any],
) -> List[int]:
    """
    Turn a submitted partition list into an ordered list of library ids.

    Inline entries are created through the library store (skills reuse an
    existing row with the same name). Duplicate ids keep their first
    position.

    Raises:
        MalformedInlineEntity: an element is not an id/object, or an inline
            object fails validation
        UnknownReference: a referenced id does not exist
    """
    create = getattr(library, partition.creator)
    ids: List[int] = []
    references: List[int] = []

    for position, value in enumerate(values):
        try:
            entry = to_entry(value)
            if isinstance(entry, Inline):
                created = await create(entry.data)
                record_inline_entity(partition.kind)
                logger.debug("Created %s %s from inline %s[%d]", partition.kind, created.id, partition.name, position)
                entity_id = created.id
            else:
                entity_id = entry.id
                references.append(entity_id)
        except InvalidPayload as exc:
            raise MalformedInlineEntity(partition.name, position, exc.message) from exc

        if entity_id not in ids:
            ids.append(entity_id)

    missing = await library.missing_ids(partition.entity, references)
    if missing:
        raise UnknownReference(f"{partition.name}: {partition.entity.__name__} ids {missing} not found")
    return ids


async def replace_partition(
    session: AsyncSession,
    resume_id: int,
    partition: Partition,
    entity_ids: Sequence[int],
) -> None:
    """Replace a resume's join partition with `entity_ids`, ord = position."""
    join = partition.join
    await session.execute(delete(join).where(join.resume_id == resume_id))
    if entity_ids:
        await session.execute(
            insert(join),
            [
                {"resume_id": resume_id, partition.entity_fk: entity_id, "ord": ord}
                for ord, entity_id in enumerate(entity_ids)
            ],
        )


async def load_partition(session: AsyncSession, resume_id: int, partition: Partition) -> list:
    """Load one partition in display order, skipping dangling join rows."""
    entity = partition.entity
    target = entity.id if partition.view is None else entity
    query = (
        select(target)
        .join(partition.join, partition.fk_column == entity.id)
        .where(partition.join.resume_id == resume_id)
        .order_by(partition.join.ord, entity.id)
        .execution_options(populate_existing=True)
    )
    rows = (await session.execute(query)).scalars().all()
    if partition.view is None:
        return list(rows)
    return [partition.view.model_validate(row) for row in rows]


async def assemble(session: AsyncSession, resume: Resume) -> ResumeResponse:
    """Build the nested resume view from a base row."""
    view = {field: getattr(resume, field) for field in ("id", *BASE_FIELDS, "updated_at")}
    view["socials"] = view["socials"] or []
    for partition in PARTITIONS:
        view[partition.name] = await load_partition(session, resume.id, partition)
    return ResumeResponse.model_validate(view)

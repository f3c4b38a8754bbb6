"""
Resume Aggregate Store - Resume documents and their join partitions

A resume write is one transaction:
    1. Insert or update the base row (updated_at = now)
    2. For each partition in the payload, resolve inline objects into new
       library rows and replace the join rows for this resume

If anything fails along the way (an inline object missing required fields,
a reference to a deleted entity) the whole write is rolled back, leaving the
previous associations untouched.

Update Semantics:
    - Base fields present in the payload overwrite stored values
    - A partition key that is absent (or null) leaves that partition alone
    - A partition key with a list replaces the partition; [] clears it
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from resume_builder.config import get_settings
from resume_builder.database import transaction
from resume_builder.middleware.metrics import record_resume_write
from resume_builder.models import Resume
from resume_builder.schemas import (
    ResumeCreate,
    ResumeUpdate,
    ResumeSummary,
    ResumeResponse,
)
from resume_builder.services.assembly import (
    BASE_FIELDS,
    PARTITIONS,
    assemble,
    resolve_partition,
    replace_partition,
)
from resume_builder.services.errors import NotFound, StoreError
from resume_builder.services.library import LibraryStore, Payload

logger = logging.getLogger(__name__)
settings = get_settings()


def _base_values(data, fields) -> dict:
    """Convert validated payload fields into base-row column values."""
    values = {}
    for field in fields:
        value = getattr(data, field)
        if field == "contact" and value is not None:
            value = value.model_dump(exclude_none=True)
        elif field == "socials" and value is not None:
            value = [social.model_dump() for social in value]
        values[field] = value
    return values


class ResumeStore:
    """
    Store for resume aggregates.

    Attributes:
        session: AsyncSession for database operations
        library: LibraryStore sharing the same session, used for inline creates
    """

    def __init__(self, session: AsyncSession, library: Optional[LibraryStore] = None):
        self.session = session
        self.library = library or LibraryStore(session)

    async def _get_row(self, resume_id: int) -> Resume:
        result = await self.session.execute(
            select(Resume).where(Resume.id == resume_id).execution_options(populate_existing=True)
        )
        resume = result.scalar_one_or_none()
        if resume is None:
            raise NotFound(f"Resume {resume_id} not found")
        return resume

    async def list_resumes(self) -> List[ResumeSummary]:
        result = await self.session.execute(
            select(Resume).order_by(Resume.updated_at.desc(), Resume.id.desc())
        )
        return [ResumeSummary.model_validate(row) for row in result.scalars().all()]

    async def get_resume(self, resume_id: int) -> ResumeResponse:
        """
        Assemble the full resume view.

        Raises:
            NotFound: no resume with this id
        """
        resume = await self._get_row(resume_id)
        return await assemble(self.session, resume)

    async def create_resume(self, payload: Payload) -> ResumeResponse:
        """
        Create a resume and its partitions in one transaction.

        Partition lists may mix library ids and inline objects; inline
        objects are created in the library and linked in submitted order.
        Without a `contact` key the current library contacts are snapshotted.

        Returns:
            The assembled resume, including ids minted for inline objects
        """
        try:
            data = self.library.validate(ResumeCreate, payload)
            values = _base_values(data, BASE_FIELDS)
            if "contact" not in data.model_fields_set:
                values["contact"] = await self.library.contact_snapshot() or None
            values["accent_color"] = values["accent_color"] or settings.default_accent_color

            async with transaction(self.session):
                resume = Resume(**values, updated_at=datetime.now(timezone.utc))
                self.session.add(resume)
                await self.session.flush()
                resume_id = resume.id

                for partition in PARTITIONS:
                    entries = getattr(data, partition.name) or []
                    ids = await resolve_partition(self.library, partition, entries)
                    await replace_partition(self.session, resume_id, partition, ids)
        except StoreError as exc:
            record_resume_write("create", "rejected")
            logger.warning("Rejected resume create: %s", exc.message)
            raise

        record_resume_write("create")
        logger.info("Created resume %s (%r)", resume_id, data.name)
        return await self.get_resume(resume_id)

    async def update_resume(self, resume_id: int, payload: Payload) -> ResumeResponse:
        """
        Update a resume's base row and replace the partitions present in the payload.

        Raises:
            NotFound: no resume with this id
            MalformedInlineEntity: an inline object is invalid (nothing is written)
            UnknownReference: a referenced library id does not exist
        """
        try:
            data = self.library.validate(ResumeUpdate, payload)
            present = [field for field in BASE_FIELDS if field in data.model_fields_set]
            columns = Resume.__table__.columns

            async with transaction(self.session):
                resume = await self._get_row(resume_id)
                for field, value in _base_values(data, present).items():
                    if value is None and not columns[field].nullable:
                        continue
                    setattr(resume, field, value)
                resume.updated_at = datetime.now(timezone.utc)

                touched = []
                for partition in PARTITIONS:
                    entries = getattr(data, partition.name)
                    if entries is None:
                        continue
                    ids = await resolve_partition(self.library, partition, entries)
                    await replace_partition(self.session, resume_id, partition, ids)
                    touched.append(partition.name)
        except StoreError as exc:
            record_resume_write("update", "rejected")
            logger.warning("Rejected update of resume %s: %s", resume_id, exc.message)
            raise

        record_resume_write("update")
        logger.info("Updated resume %s (partitions replaced: %s)", resume_id, ", ".join(touched) or "none")
        return await self.get_resume(resume_id)

    async def delete_resume(self, resume_id: int) -> None:
        """Delete a resume; join rows cascade, library entities stay."""
        async with transaction(self.session):
            result = await self.session.execute(delete(Resume).where(Resume.id == resume_id))
            if result.rowcount == 0:
                raise NotFound(f"Resume {resume_id} not found")

        record_resume_write("delete")
        logger.info("Deleted resume %s", resume_id)

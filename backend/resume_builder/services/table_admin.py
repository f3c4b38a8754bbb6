"""
Table Admin - Raw record access for the database browser

Backs the admin view that lists tables, shows their columns and edits rows
directly. Only tables declared in the application's model metadata are
reachable: the table name is looked up in Base.metadata, never interpolated
into SQL, and column names are checked against the table definition.

Records are addressed by their `id` column. Join tables have a composite key
and no `id`; they can be listed and inserted into but not edited by id.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping

from sqlalchemy import JSON, DateTime, Table, select, insert, update, delete
from sqlalchemy.exc import IntegrityError, StatementError
from sqlalchemy.ext.asyncio import AsyncSession

import resume_builder.models  # noqa: F401  (registers tables on Base.metadata)
from resume_builder.database import Base, transaction
from resume_builder.services.errors import NotFound, ConstraintViolation, InvalidPayload

logger = logging.getLogger(__name__)


class TableAdmin:
    """
    Allow-listed CRUD over the application's tables.

    Attributes:
        session: AsyncSession for database operations
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def table_names() -> List[str]:
        return sorted(Base.metadata.tables)

    @staticmethod
    def _table(name: str) -> Table:
        table = Base.metadata.tables.get(name)
        if table is None:
            raise NotFound(f"Table {name!r} not found")
        return table

    def table_schema(self, name: str) -> List[Dict[str, Any]]:
        """
        Describe a table's columns in the shape of SQLite's PRAGMA table_info.

        Returns:
            One dict per column with cid, name, type, notnull, dflt_value, pk
        """
        table = self._table(name)
        pk_names = [column.name for column in table.primary_key.columns]
        schema = []
        for cid, column in enumerate(table.columns):
            default = column.default.arg if column.default is not None and column.default.is_scalar else None
            schema.append({
                "cid": cid,
                "name": column.name,
                "type": str(column.type),
                "notnull": int(not column.nullable),
                "dflt_value": default,
                "pk": pk_names.index(column.name) + 1 if column.name in pk_names else 0,
            })
        return schema

    async def list_records(self, name: str) -> List[Dict[str, Any]]:
        table = self._table(name)
        result = await self.session.execute(select(table).order_by(*table.primary_key.columns))
        return [dict(row._mapping) for row in result]

    async def insert_record(self, name: str, values: Mapping[str, Any]) -> Any:
        """Insert a row and return its primary key (a list for composite keys)."""
        table = self._table(name)
        row = self._coerce(table, values)
        if "id" in table.c and row.get("id") is None:
            row.pop("id", None)

        async with transaction(self.session):
            result = await self._execute(table, insert(table).values(**row))
        key = list(result.inserted_primary_key)
        logger.info("Admin inserted into %s: %s", name, key)
        return key[0] if len(key) == 1 else key

    async def update_record(self, name: str, record_id: int, values: Mapping[str, Any]) -> None:
        table = self._id_table(name)
        row = self._coerce(table, values)
        row.pop("id", None)
        if not row:
            return

        async with transaction(self.session):
            result = await self._execute(table, update(table).where(table.c.id == record_id).values(**row))
            if result.rowcount == 0:
                raise NotFound(f"Record {record_id} not found in {name!r}")
        logger.info("Admin updated %s %s", name, record_id)

    async def delete_record(self, name: str, record_id: int) -> None:
        table = self._id_table(name)
        async with transaction(self.session):
            result = await self._execute(table, delete(table).where(table.c.id == record_id))
            if result.rowcount == 0:
                raise NotFound(f"Record {record_id} not found in {name!r}")
        logger.info("Admin deleted %s %s", name, record_id)

    def _id_table(self, name: str) -> Table:
        table = self._table(name)
        if "id" not in table.c:
            raise InvalidPayload(f"Table {name!r} has no id column")
        return table

    async def _execute(self, table: Table, statement):
        try:
            return await self.session.execute(statement)
        except IntegrityError as exc:
            raise ConstraintViolation(f"{table.name}: {exc.orig}") from exc
        except StatementError as exc:
            raise InvalidPayload(f"{table.name}: {exc.orig}") from exc

    @staticmethod
    def _coerce(table: Table, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Check column names and convert form strings for JSON/datetime columns."""
        unknown = sorted(set(values) - set(table.c.keys()))
        if unknown:
            raise InvalidPayload(f"Unknown columns for {table.name!r}: {', '.join(unknown)}")

        row = {}
        for key, value in values.items():
            column_type = table.c[key].type
            if isinstance(value, str) and isinstance(column_type, JSON):
                try:
                    value = json.loads(value) if value else None
                except ValueError as exc:
                    raise InvalidPayload(f"{key}: invalid JSON") from exc
            elif isinstance(value, str) and isinstance(column_type, DateTime):
                try:
                    value = datetime.fromisoformat(value) if value else None
                except ValueError as exc:
                    raise InvalidPayload(f"{key}: invalid datetime") from exc
            row[key] = value
        return row

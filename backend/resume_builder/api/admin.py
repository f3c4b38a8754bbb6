"""
Database Admin API - Raw table browser.

Table names are resolved against the application's own table definitions;
anything else is a 404.
"""

from typing import Any, Dict
from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from resume_builder.database import get_db
from resume_builder.auth import get_current_user
from resume_builder.services.table_admin import TableAdmin

router = APIRouter()


@router.get("/tables")
async def list_tables(
    _: bool = Depends(get_current_user),
):
    return TableAdmin.table_names()


@router.get("/tables/{name}/schema")
async def get_table_schema(
    name: str,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return TableAdmin(db).table_schema(name)


@router.get("/tables/{name}/records")
async def list_records(
    name: str,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    return await TableAdmin(db).list_records(name)


@router.post("/tables/{name}/records")
async def insert_record(
    name: str,
    values: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    record_id = await TableAdmin(db).insert_record(name, values)
    return {"success": True, "id": record_id}


@router.put("/tables/{name}/records/{record_id}")
async def update_record(
    name: str,
    record_id: int,
    values: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    await TableAdmin(db).update_record(name, record_id, values)
    return {"success": True}


@router.delete("/tables/{name}/records/{record_id}")
async def delete_record(
    name: str,
    record_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(get_current_user),
):
    await TableAdmin(db).delete_record(name, record_id)
    return {"success": True}

"""
Contact API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from core.db import Database
from core.dependencies import get_db
from core.errors import parse_id

from . import service
from .repository import ContactRepository

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


def get_contact_repository(db: Database = Depends(get_db)) -> ContactRepository:
    return ContactRepository(db)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_contact(
    payload: Any = Body(default=None),
    repo: ContactRepository = Depends(get_contact_repository),
) -> dict:
    contact = await service.create_contact(repo, payload)
    return {"success": True, "data": contact}


@router.get("")
async def list_contacts(
    search: str | None = Query(default=None, max_length=200),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort: str = Query("created_at-desc", max_length=50),
    repo: ContactRepository = Depends(get_contact_repository),
) -> dict:
    contacts, pagination = await service.list_contacts(
        repo,
        search=search,
        page=page,
        limit=limit,
        sort=sort,
    )
    return {
        "success": True,
        "data": contacts,
        "pagination": pagination.model_dump(by_alias=True),
    }


@router.get("/{contact_id}")
async def get_contact(
    contact_id: str,
    repo: ContactRepository = Depends(get_contact_repository),
) -> dict:
    contact = await service.get_contact(repo, parse_id(contact_id))
    return {"success": True, "data": contact}


@router.put("/{contact_id}")
async def replace_contact(
    contact_id: str,
    payload: Any = Body(default=None),
    repo: ContactRepository = Depends(get_contact_repository),
) -> dict:
    contact = await service.replace_contact(repo, parse_id(contact_id), payload)
    return {"success": True, "data": contact}


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: str,
    repo: ContactRepository = Depends(get_contact_repository),
) -> dict:
    deleted = await service.delete_contact(repo, parse_id(contact_id))
    return {"success": True, "data": deleted}

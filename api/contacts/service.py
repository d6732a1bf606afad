"""
Contact business logic.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from core import validation
from core.db import WriteResult
from core.errors import NotFound, StorageFailure, ValidationFailed

from . import schemas
from .repository import ContactRepository

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Contact not found"


def _to_contact(row: dict) -> schemas.Contact:
    return schemas.Contact(
        id=int(row["id"]),
        name=str(row["name"]),
        email=str(row["email"]),
        message=str(row["message"]),
        created_at=row["created_at"],
    )


def _require_valid(payload: Any) -> dict[str, str]:
    errors = validation.validate_contact(payload)
    if errors:
        raise ValidationFailed(errors=errors)
    return {
        "name": payload["name"].strip(),
        "email": payload["email"].strip(),
        "message": payload["message"].strip(),
    }


def _written_row(result: WriteResult, action: str) -> dict | None:
    if not result.ok:
        logger.error("Failed to %s contact: %s", action, result.error)
        raise StorageFailure()
    return result.row


async def create_contact(repo: ContactRepository, payload: Any) -> schemas.Contact:
    fields = _require_valid(payload)
    row = _written_row(await repo.create(**fields), "create")
    if row is None:
        raise StorageFailure()
    logger.info("Created contact %s", row["id"])
    return _to_contact(row)


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0


async def list_contacts(
    repo: ContactRepository,
    *,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
    sort: str = "created_at-desc",
) -> tuple[list[schemas.Contact], schemas.Pagination]:
    errors = validation.validate_contact_sort(sort)
    if errors:
        raise ValidationFailed(errors=errors)
    sort_field, sort_order = validation.split_sort(sort)

    rows, total = await repo.list_page(
        search=search,
        sort_field=sort_field,
        sort_order=sort_order,
        limit=limit,
        offset=(page - 1) * limit,
    )
    pagination = schemas.Pagination(
        total=total,
        total_pages=total_pages(total, limit),
        current_page=page,
        items_per_page=limit,
    )
    return [_to_contact(row) for row in rows], pagination


async def get_contact(repo: ContactRepository, contact_id: int) -> schemas.Contact:
    row = await repo.get(contact_id)
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return _to_contact(row)


async def replace_contact(repo: ContactRepository, contact_id: int, payload: Any) -> schemas.Contact:
    fields = _require_valid(payload)
    row = _written_row(await repo.replace(contact_id, **fields), "update")
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return _to_contact(row)


async def delete_contact(repo: ContactRepository, contact_id: int) -> schemas.DeletedContact:
    row = _written_row(await repo.delete(contact_id), "delete")
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    logger.info("Deleted contact %s", row["id"])
    return schemas.DeletedContact(id=int(row["id"]), name=str(row["name"]))

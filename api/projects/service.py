"""
Project business logic.

Partial updates are an explicit merge: the stored record is loaded, the
fields present in the request are laid over it, and the merged record is
written back in full.
"""

from __future__ import annotations

import logging
from typing import Any

from core import validation
from core.db import StorageErrorKind, WriteResult
from core.errors import Conflict, NotFound, StorageFailure, ValidationFailed

from . import schemas
from .repository import ProjectRepository

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Project not found"
SLUG_CONFLICT_MESSAGE = "A project with this slug already exists"
BODY_NOT_OBJECT_MESSAGE = "Request body must be a JSON object"

MUTABLE_FIELDS = ("title", "description", "image", "technologies", "featured", "stats", "slug")


def coerce_image(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def coerce_technologies(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def coerce_stats(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


# (field, accepted type, coercion) for the nullable columns.
_NULLABLE_FIELDS = (
    ("image", str, coerce_image),
    ("technologies", list, coerce_technologies),
    ("stats", dict, coerce_stats),
)


def _to_project(row: dict) -> schemas.Project:
    return schemas.Project(
        id=int(row["id"]),
        title=str(row["title"]),
        description=str(row["description"]),
        image=row.get("image"),
        technologies=list(row["technologies"]) if row.get("technologies") is not None else None,
        featured=bool(row.get("featured", False)),
        stats=row.get("stats"),
        slug=str(row["slug"]),
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


def _require_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationFailed(BODY_NOT_OBJECT_MESSAGE)
    return payload


def _check_write(result: WriteResult, action: str, project_id: int | None = None) -> dict | None:
    if result.error is StorageErrorKind.CONFLICT:
        raise Conflict(SLUG_CONFLICT_MESSAGE)
    if result.error is not None:
        logger.error("Failed to %s project %s: %s", action, project_id or "", result.error)
        raise StorageFailure()
    return result.row


def new_project_fields(payload: dict[str, Any]) -> dict[str, Any]:
    featured = payload.get("featured")
    return {
        "title": payload["title"].strip(),
        "description": payload["description"].strip(),
        "image": coerce_image(payload.get("image")),
        "technologies": coerce_technologies(payload.get("technologies")),
        "featured": featured if isinstance(featured, bool) else False,
        "stats": coerce_stats(payload.get("stats")),
        "slug": payload["slug"].strip(),
    }


def merge_project(existing: dict[str, Any], payload: dict[str, Any]) -> dict[str, Any]:
    """
    Lay the fields present in `payload` over the stored record.

    Omitted fields keep their stored value. An explicit null clears the
    nullable fields (image, technologies, stats); a value of the wrong type
    is ignored and the stored value kept, `featured` included.
    """
    merged = {field: existing.get(field) for field in MUTABLE_FIELDS}
    for field in ("title", "description", "slug"):
        if field in payload:
            merged[field] = payload[field].strip()
    for field, accepted, coerce in _NULLABLE_FIELDS:
        if field not in payload:
            continue
        value = payload[field]
        if value is None or isinstance(value, accepted):
            merged[field] = coerce(value)
    if isinstance(payload.get("featured"), bool):
        merged["featured"] = payload["featured"]
    if merged["featured"] is None:
        merged["featured"] = False
    return merged


async def create_project(repo: ProjectRepository, payload: Any) -> schemas.Project:
    data = _require_object(payload)
    errors = validation.validate_project_create(data)
    if errors:
        raise ValidationFailed(errors=errors)

    row = _check_write(await repo.create(new_project_fields(data)), "create")
    if row is None:
        raise StorageFailure()
    logger.info("Created project %s (%s)", row["id"], row["slug"])
    return _to_project(row)


async def list_projects(repo: ProjectRepository) -> list[schemas.Project]:
    rows = await repo.list_all()
    return [_to_project(row) for row in rows]


async def get_project(repo: ProjectRepository, project_id: int) -> schemas.Project:
    row = await repo.get(project_id)
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return _to_project(row)


async def update_project(repo: ProjectRepository, project_id: int, payload: Any) -> schemas.Project:
    data = _require_object(payload)
    errors = validation.validate_project_update(data)
    if errors:
        raise ValidationFailed(errors=errors)

    existing = await repo.get(project_id)
    if existing is None:
        raise NotFound(NOT_FOUND_MESSAGE)

    merged = merge_project(existing, data)
    row = _check_write(await repo.update(project_id, merged), "update", project_id)
    if row is None:
        # Deleted between the lookup and the update.
        raise NotFound(NOT_FOUND_MESSAGE)
    return _to_project(row)


async def delete_project(repo: ProjectRepository, project_id: int) -> int:
    if not await repo.exists(project_id):
        raise NotFound(NOT_FOUND_MESSAGE)
    _check_write(await repo.delete(project_id), "delete", project_id)
    logger.info("Deleted project %s", project_id)
    return project_id

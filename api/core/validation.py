"""
Payload validation.

Each validator takes an untyped payload (whatever JSON the client sent) and
returns an ordered list of human-readable violations. An empty list means the
payload is acceptable. Validators never short-circuit: the caller gets every
problem at once.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

CONTACT_SORT_FIELDS = ("id", "name", "email", "message", "created_at")
SORT_ORDERS = ("asc", "desc")

# (field, label) pairs for the required project text fields.
_PROJECT_TEXT_FIELDS = (
    ("title", "Title"),
    ("description", "Description"),
    ("slug", "Slug"),
)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def validate_contact(payload: Mapping[str, Any] | None) -> list[str]:
    data = payload if isinstance(payload, Mapping) else {}
    errors: list[str] = []

    if _is_blank(data.get("name")):
        errors.append("Name is required")

    email = data.get("email")
    if _is_blank(email):
        errors.append("Email is required")
    elif not EMAIL_PATTERN.fullmatch(email):
        errors.append("Email is invalid")

    if _is_blank(data.get("message")):
        errors.append("Message is required")

    return errors


def _check_text(label: str, value: Any) -> str | None:
    if not isinstance(value, str):
        return f"{label} must be a string"
    if value.strip() == "":
        return f"{label} cannot be empty"
    return None


def _check_slug(value: str) -> str | None:
    if not SLUG_PATTERN.fullmatch(value):
        return "Slug may only contain lowercase letters, digits and hyphens"
    return None


def _check_project_field(field: str, label: str, value: Any) -> str | None:
    problem = _check_text(label, value)
    if problem is None and field == "slug":
        problem = _check_slug(value)
    return problem


def validate_project_create(payload: Mapping[str, Any]) -> list[str]:
    errors: list[str] = []
    for field, label in _PROJECT_TEXT_FIELDS:
        value = payload.get(field)
        if not value:
            errors.append(f"{label} is required")
            continue
        problem = _check_project_field(field, label, value)
        if problem:
            errors.append(problem)
    return errors


def validate_project_update(payload: Mapping[str, Any]) -> list[str]:
    """
    Same rules as creation, applied only to the fields the client sent.

    `image`, `technologies`, `featured` and `stats` are not validated here;
    they are coerced before storage.
    """
    errors: list[str] = []
    for field, label in _PROJECT_TEXT_FIELDS:
        if field not in payload:
            continue
        problem = _check_project_field(field, label, payload[field])
        if problem:
            errors.append(problem)
    return errors


def split_sort(sort: str) -> tuple[str, str]:
    field, _, order = (sort or "").strip().rpartition("-")
    return field, order.lower()


def validate_contact_sort(sort: str) -> list[str]:
    field, order = split_sort(sort)
    errors: list[str] = []
    if field not in CONTACT_SORT_FIELDS:
        errors.append(f"Sort field must be one of: {', '.join(CONTACT_SORT_FIELDS)}")
    if order not in SORT_ORDERS:
        errors.append("Sort order must be asc or desc")
    return errors

"""
Project response models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class Project(BaseModel):
    id: int
    title: str
    description: str
    image: str | None = None
    technologies: list[str] | None = None
    featured: bool = False
    stats: dict[str, Any] | None = None
    slug: str
    created_at: datetime
    updated_at: datetime | None = None

"""
Contact response models.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Contact(BaseModel):
    id: int
    name: str
    email: str
    message: str
    created_at: datetime


class DeletedContact(BaseModel):
    id: int
    name: str


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    total_pages: int = Field(..., alias="totalPages")
    current_page: int = Field(..., alias="currentPage")
    items_per_page: int = Field(..., alias="itemsPerPage")

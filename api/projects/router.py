"""
Project API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from core.db import Database
from core.dependencies import get_db
from core.errors import parse_id

from . import service
from .repository import ProjectRepository

router = APIRouter(prefix="/api/projects", tags=["projects"])


def get_project_repository(db: Database = Depends(get_db)) -> ProjectRepository:
    return ProjectRepository(db)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: Any = Body(default=None),
    repo: ProjectRepository = Depends(get_project_repository),
) -> dict:
    project = await service.create_project(repo, payload)
    return {"success": True, "data": project}


@router.get("")
async def list_projects(
    repo: ProjectRepository = Depends(get_project_repository),
) -> dict:
    projects = await service.list_projects(repo)
    return {"success": True, "data": projects}


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    repo: ProjectRepository = Depends(get_project_repository),
) -> dict:
    project = await service.get_project(repo, parse_id(project_id))
    return {"success": True, "data": project}


@router.put("/{project_id}")
async def update_project(
    project_id: str,
    payload: Any = Body(default=None),
    repo: ProjectRepository = Depends(get_project_repository),
) -> dict:
    project = await service.update_project(repo, parse_id(project_id), payload)
    return {"success": True, "data": project}


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    repo: ProjectRepository = Depends(get_project_repository),
) -> dict:
    deleted_id = await service.delete_project(repo, parse_id(project_id))
    return {"success": True, "message": "Project deleted", "deletedId": deleted_id}

"""
Project persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database, WriteResult

PROJECT_COLUMNS = (
    "id, title, description, image, technologies, featured, stats, slug, created_at, updated_at"
)


class ProjectRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def create(self, fields: dict[str, Any]) -> WriteResult:
        return await self.db.write_one(
            f"""
            INSERT INTO projects
                (title, description, image, technologies, featured, stats, slug)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING {PROJECT_COLUMNS}
            """,
            fields["title"],
            fields["description"],
            fields["image"],
            fields["technologies"],
            fields["featured"],
            fields["stats"],
            fields["slug"],
        )

    async def list_all(self) -> list[dict]:
        return await self.db.fetch_all(
            f"""
            SELECT {PROJECT_COLUMNS}
            FROM projects
            ORDER BY created_at DESC
            """
        )

    async def get(self, project_id: int) -> dict | None:
        return await self.db.fetch_one(
            f"""
            SELECT {PROJECT_COLUMNS}
            FROM projects
            WHERE id = $1
            """,
            project_id,
        )

    async def exists(self, project_id: int) -> bool:
        row = await self.db.fetch_one(
            """
            SELECT 1 AS ok
            FROM projects
            WHERE id = $1
            """,
            project_id,
        )
        return row is not None

    async def update(self, project_id: int, fields: dict[str, Any]) -> WriteResult:
        """
        Overwrite every mutable column with `fields` and refresh updated_at.

        Callers pass a fully merged record; nothing is defaulted here.
        """
        return await self.db.write_one(
            f"""
            UPDATE projects
            SET title = $1,
                description = $2,
                image = $3,
                technologies = $4,
                featured = $5,
                stats = $6,
                slug = $7,
                updated_at = now()
            WHERE id = $8
            RETURNING {PROJECT_COLUMNS}
            """,
            fields["title"],
            fields["description"],
            fields["image"],
            fields["technologies"],
            fields["featured"],
            fields["stats"],
            fields["slug"],
            project_id,
        )

    async def delete(self, project_id: int) -> WriteResult:
        return await self.db.write_one(
            """
            DELETE FROM projects
            WHERE id = $1
            RETURNING id
            """,
            project_id,
        )

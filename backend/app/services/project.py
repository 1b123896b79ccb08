"""Project directory: registered projects and their recruitment settings."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.candidate import Project
from app.schemas.statistics import ProjectSettings


class ProjectService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_project_ids(self) -> list[int]:
        """All project IDs, ordered by ID."""
        result = await self.db.execute(select(Project.id).order_by(Project.id.asc()))
        return list(result.scalars().all())

    async def get_project_settings(self, project_id: int) -> ProjectSettings | None:
        project = await self.db.get(Project, project_id)
        if project is None:
            return None
        return ProjectSettings.model_validate(project)

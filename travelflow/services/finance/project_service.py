import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from travelflow import crud
from travelflow.core.exceptions import ValidationError
from travelflow.schemas.finance.project_schema import ProjectCreate, ProjectResponse, ProjectUpdate

logger = logging.getLogger(__name__)

class ProjectService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_projects(self, include_inactive: bool = False) -> List[ProjectResponse]:
        projects = await crud.project.get_all(self.session, include_inactive=include_inactive)
        return [ProjectResponse.model_validate(p, from_attributes=True) for p in projects]

    async def get_project(self, project_id: str) -> ProjectResponse:
        project = await crud.project.get(self.session, project_id)
        return ProjectResponse.model_validate(project, from_attributes=True)

    async def create_project(self, data: ProjectCreate) -> ProjectResponse:
        name = data.name.strip()
        if await crud.project.name_exists(self.session, name):
            raise ValidationError(f"Project '{name}' already exists")

        project = await crud.project.create(self.session, {
            "name": name,
            "description": data.description,
            "active": data.active,
        })
        logger.info(f"Project created: {project.name} ({project.id})")
        return ProjectResponse.model_validate(project, from_attributes=True)

    async def update_project(self, project_id: str, data: ProjectUpdate) -> ProjectResponse:
        project = await crud.project.get(self.session, project_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("name"):
            changes["name"] = changes["name"].strip()
            if await crud.project.name_exists(self.session, changes["name"], exclude_id=project_id):
                raise ValidationError(f"Project '{changes['name']}' already exists")

        project = await crud.project.update(self.session, project, changes)
        return ProjectResponse.model_validate(project, from_attributes=True)

    async def delete_project(self, project_id: str) -> None:
        """Delete a project together with its budgets"""
        project = await crud.project.remove(self.session, project_id)
        logger.info(f"Project deleted: {project.name} ({project_id})")

import logging
from typing import List
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import get_current_user, require_admin
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.schemas.common.message import MessageResponse
from travelflow.schemas.finance.project_schema import ProjectCreate, ProjectResponse, ProjectUpdate
from travelflow.services.finance.project_service import ProjectService

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    include_inactive: bool = Query(False, alias="includeInactive"),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Active projects, or all of them with includeInactive"""
    return await ProjectService(session).get_projects(include_inactive=include_inactive)

@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    return await ProjectService(session).get_project(project_id)

@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    project = await ProjectService(session).create_project(data)
    logger.info(f"Project {project.id} created by user {current_user.id}")
    return project

@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    data: ProjectUpdate,
    project_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    return await ProjectService(session).update_project(project_id, data)

@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    """Delete a project and its budgets"""
    await ProjectService(session).delete_project(project_id)
    return MessageResponse(message="Project deleted successfully")

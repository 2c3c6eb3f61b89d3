from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import require_admin
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.schemas.report.stats_schema import AdminStatsResponse
from travelflow.services.reporting.stats_service import StatsService

router = APIRouter()

@router.get("", response_model=AdminStatsResponse)
async def get_admin_stats(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    """Dashboard figures: request counts and amounts by status, month, department and project"""
    return await StatsService(session).get_admin_stats()

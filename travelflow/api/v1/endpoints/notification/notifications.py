from typing import List
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import get_current_user
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.schemas.notification.notification_schema import NotificationResponse
from travelflow.services.notification.notification_service import NotificationService

router = APIRouter()

@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Current user's notifications, newest first"""
    return await NotificationService(session).get_user_notifications(current_user.id, unread_only=unread_only)

@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    return await NotificationService(session).mark_as_read(notification_id, current_user)

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from travelflow import crud
from travelflow.core.exceptions import PermissionDeniedError
from travelflow.crud.mappers import notification_from_row
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import UserRole

logger = logging.getLogger(__name__)

class NotificationService:
    """
    Writes in-app notifications for workflow events.

    Fan-out is best effort: each recipient's row is committed on its own and a
    failed insert is logged and skipped, so callers commit their status change
    before notifying and never see notification errors.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def notify_user(
        self, user_id: str, request_id: Optional[str], message: str
    ) -> Optional[Dict[str, Any]]:
        """Write one notification, returning it or None when the insert failed"""
        try:
            notification = await crud.notification.create(
                self.session,
                {"user_id": user_id, "request_id": request_id, "message": message, "read": False},
            )
            return notification_from_row(notification)
        except Exception as e:
            logger.error(f"Failed to notify user {user_id} about request {request_id}: {e}")
            return None

    async def notify_users(
        self, user_ids: Iterable[str], request_id: Optional[str], message: str
    ) -> List[Dict[str, Any]]:
        written = []
        seen = set()
        for user_id in user_ids:
            if not user_id or user_id in seen:
                continue
            seen.add(user_id)
            notification = await self.notify_user(user_id, request_id, message)
            if notification is not None:
                written.append(notification)
        return written

    async def notify_role(
        self,
        role: UserRole,
        request_id: Optional[str],
        message: str,
        exclude: Iterable[str] = (),
    ) -> List[Dict[str, Any]]:
        """Notify every active user holding `role`"""
        try:
            recipients = await crud.user.get_by_role(self.session, role)
            # Plain ids only: a failed insert rolls back and expires loaded users
            recipient_ids = [user.id for user in recipients]
        except Exception as e:
            logger.error(f"Failed to load {role.value} recipients for request {request_id}: {e}")
            return []

        excluded = set(exclude)
        return await self.notify_users(
            [user_id for user_id in recipient_ids if user_id not in excluded], request_id, message
        )

    async def get_user_notifications(self, user_id: str, unread_only: bool = False) -> List[Dict[str, Any]]:
        notifications = await crud.notification.get_by_user_id(self.session, user_id, unread_only=unread_only)
        return [notification_from_row(n) for n in notifications]

    async def mark_as_read(self, notification_id: str, current_user: User) -> Dict[str, Any]:
        notification = await crud.notification.get(self.session, notification_id)
        if notification.user_id != current_user.id:
            raise PermissionDeniedError("You can only update your own notifications")

        notification = await crud.notification.mark_as_read(self.session, notification_id)
        return notification_from_row(notification)

import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.core.config import settings
from travelflow.core.security import get_password_hash
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import UserRole

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    {
        "email": "employee@company.com",
        "name": "Default Employee",
        "role": UserRole.EMPLOYEE,
        "department": "Programs",
        "designation": "Program Officer",
    },
    {
        "email": "approver@company.com",
        "name": "Default Approver",
        "role": UserRole.APPROVER,
        "department": "Programs",
        "designation": "Program Manager",
    },
    {
        "email": "checker@company.com",
        "name": "Default Checker",
        "role": UserRole.CHECKER,
        "department": "Finance",
        "designation": "Finance Officer",
    },
    {
        "email": "admin@company.com",
        "name": "System Administrator",
        "role": UserRole.ADMIN,
        "department": "Administration",
        "designation": "Administrator",
    },
]

async def create_initial_data(session: AsyncSession):
    """Create one user per role when missing"""
    try:
        logger.info("Creating initial data...")

        await create_default_users(session)

        await session.commit()
        logger.info("Initial data created successfully")
        return True

    except Exception as e:
        logger.error(f"Error creating initial data: {str(e)}")
        await session.rollback()
        raise

async def create_default_users(session: AsyncSession):
    for user_data in DEFAULT_USERS:
        result = await session.execute(select(User).where(User.email == user_data["email"]))
        if result.scalar_one_or_none():
            continue

        session.add(User(
            **user_data,
            hashed_password=get_password_hash(settings.DEFAULT_USER_PASSWORD),
            is_active=True,
        ))
        logger.info(f"Created default {user_data['role'].value} user: {user_data['email']}")

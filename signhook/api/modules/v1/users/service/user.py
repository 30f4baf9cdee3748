import logging
import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from signhook.api.modules.v1.users.models.users_model import User

logger = logging.getLogger("signhook")


class UserCRUD:
    """CRUD operations for User model"""

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: uuid.UUID) -> Optional[User]:
        """
        Get user by ID.

        Args:
            db: Database session
            user_id: User UUID

        Returns:
            User object or None if not found
        """
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_reference(db: AsyncSession, reference: Optional[str]) -> Optional[User]:
        """
        Get user by a string reference such as a checkout client_reference_id.

        Args:
            db: Database session
            reference: String form of the user's UUID

        Returns:
            User object or None if the reference is missing, malformed or unknown
        """
        if not reference:
            return None

        try:
            user_id = uuid.UUID(str(reference))
        except ValueError:
            logger.warning(f"Ignoring malformed user reference: {reference!r}")
            return None

        return await UserCRUD.get_by_id(db, user_id)

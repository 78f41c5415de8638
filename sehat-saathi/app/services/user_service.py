"""User account storage and password verification."""

from app.models.user import User
from app.models.enums import UserRole
from app.config.database import get_users_collection
from typing import Optional
from datetime import datetime
from pymongo.errors import DuplicateKeyError
import bcrypt
import logging

logger = logging.getLogger(__name__)


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash in the document
        return False


class UsernameTakenError(Exception):
    """Raised when signing up with a username that already exists."""


class UserService:
    """Service for managing user accounts."""

    async def create_user(
        self,
        username: str,
        full_name: str,
        password: str,
        role: UserRole = UserRole.PATIENT,
    ) -> User:
        """
        Create a new account.

        Args:
            username: Normalized (lowercase) username
            full_name: Display name
            password: Plain password, hashed before storage
            role: Account role

        Returns:
            Created User

        Raises:
            UsernameTakenError: If the username already exists
        """
        collection = await get_users_collection()
        if await collection.find_one({"username": username}):
            raise UsernameTakenError(username)

        user = User(
            username=username,
            full_name=full_name,
            password_hash=hash_password(password),
            role=role,
        )
        try:
            await collection.insert_one(user.model_dump())
        except DuplicateKeyError:
            # Lost a race with a concurrent signup; the unique index caught it
            raise UsernameTakenError(username)

        logger.info(f"Created {role.value} account {user.user_id} ({username})")
        return user

    async def get_by_username(self, username: str) -> Optional[User]:
        collection = await get_users_collection()
        doc = await collection.find_one({"username": username})
        if doc:
            return User(**doc)
        return None

    async def get_by_id(self, user_id: str) -> Optional[User]:
        collection = await get_users_collection()
        doc = await collection.find_one({"user_id": user_id})
        if doc:
            return User(**doc)
        return None

    async def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Check a username/password pair.

        Returns:
            The User on success, None on unknown user or wrong password
        """
        user = await self.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info(f"Failed login attempt for '{username}'")
            return None

        collection = await get_users_collection()
        await collection.update_one(
            {"user_id": user.user_id},
            {"$set": {"last_login_at": datetime.utcnow()}},
        )
        return user


# Global service instance
_user_service: Optional[UserService] = None


def get_user_service() -> UserService:
    """Get or create UserService instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service

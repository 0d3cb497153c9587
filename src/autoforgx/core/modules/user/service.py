from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from autoforgx.core.core import Service
from autoforgx.core.db import storage_errors
from autoforgx.core.modules.user.models import User
from autoforgx.core.modules.user.utils import check_password, hash_password
from autoforgx.core.modules.user.validators import validate_credentials
from autoforgx.errors import DuplicateIdentityError, InvalidCredentialsError, NotFoundError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Registers users and verifies their credentials."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")
        self._dummy_hash: str | None = None

    async def create_user(self, email: str, password: str) -> User:
        """Create user with hashed password. Email uniqueness is enforced by the index."""
        validate_credentials(email, password)
        password_hash = hash_password(password, self.core.config.bcrypt_rounds)
        user = User(email=email, password_hash=password_hash)

        async with storage_errors("create_user"):
            try:
                await self._collection.insert_one(user.to_mongo())
            except DuplicateKeyError:
                raise DuplicateIdentityError from None

        logger.info("user_registered", user_id=str(user.id))
        return user

    async def verify_credentials(self, email: str, password: str) -> User:
        """Return the user when the password matches, otherwise raise InvalidCredentialsError."""
        async with storage_errors("verify_credentials"):
            doc = await self._collection.find_one({"email": email})

        if doc is None:
            # Spend the same bcrypt time as a real check so unknown emails are not distinguishable
            check_password(password, self._get_dummy_hash())
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentialsError

        user = User.model_validate(doc)
        if not check_password(password, user.password_hash):
            logger.info("login_failed", reason="wrong_password", user_id=str(user.id))
            raise InvalidCredentialsError
        return user

    async def get_user(self, user_id: UUID) -> User:
        """Get user by ID from database."""
        async with storage_errors("get_user"):
            doc = await self._collection.find_one({"_id": user_id})
        if doc is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return User.model_validate(doc)

    async def has_user(self, user_id: UUID) -> bool:
        """Check if user exists by ID."""
        async with storage_errors("has_user"):
            return await self._collection.count_documents({"_id": user_id}, limit=1) > 0

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = hash_password("dummy-password", self.core.config.bcrypt_rounds)
        return self._dummy_hash

    async def on_start(self) -> None:
        """Create the unique email index."""
        async with storage_errors("create_user_indexes"):
            await self._collection.create_index([("email", 1)], unique=True)
        logger.debug("user_service_started")

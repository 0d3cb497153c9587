from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from autoforgx.core.core import Service
from autoforgx.core.db import storage_errors
from autoforgx.core.modules.course.models import Course
from autoforgx.errors import AlreadyOwnedError, AuthenticationError

logger = structlog.get_logger(__name__)


class PurchaseService(Service):
    """Records course ownership on the user document.

    Ownership only moves NotOwned -> Owned. The membership check and the append
    happen in a single conditional update, so concurrent purchases of the same
    course by the same user can never store the course twice.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._users = database.get_collection("users")

    async def purchase_course(self, user_id: UUID, course_id: UUID) -> Course:
        """Append course_id to the user's owned courses unless already present."""
        course = await self.core.services.course.get_course(course_id)

        async with storage_errors("purchase_course"):
            result = await self._users.update_one(
                {"_id": user_id, "purchased_courses": {"$ne": course_id}},
                {"$push": {"purchased_courses": course_id}},
            )

        if result.matched_count == 0:
            if not await self.core.services.user.has_user(user_id):
                raise AuthenticationError
            logger.info("purchase_rejected", user_id=str(user_id), course_id=str(course_id), reason="already_owned")
            raise AlreadyOwnedError

        logger.info("course_purchased", user_id=str(user_id), course_id=str(course_id))
        return course

    async def get_purchased_courses(self, user_id: UUID) -> list[Course]:
        """Get the user's courses in purchase order."""
        user = await self.core.services.user.get_user(user_id)
        return await self.core.services.course.get_courses_by_ids(user.purchased_courses)

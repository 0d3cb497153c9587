from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from autoforgx.core.core import Service
from autoforgx.core.db import storage_errors
from autoforgx.core.modules.course.models import DEFAULT_COURSES, Course, CourseDraft
from autoforgx.errors import UnknownCourseError

logger = structlog.get_logger(__name__)


class CourseService(Service):
    """Read access to the course catalog plus bulk reseeding."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("courses")

    async def list_courses(self) -> list[Course]:
        """Get all courses in insertion order."""
        async with storage_errors("list_courses"):
            return await Course.list_cursor(self._collection.find().sort("number", 1))

    async def get_course(self, course_id: UUID) -> Course:
        """Get course by ID, raising UnknownCourseError if missing."""
        async with storage_errors("get_course"):
            doc = await self._collection.find_one({"_id": course_id})
        if doc is None:
            raise UnknownCourseError(f"Course '{course_id}' not found")
        return Course.model_validate(doc)

    async def get_courses_by_ids(self, course_ids: list[UUID]) -> list[Course]:
        """Resolve ids to courses, preserving the order of course_ids and skipping unknown ids."""
        if not course_ids:
            return []
        async with storage_errors("get_courses_by_ids"):
            courses = await Course.list_cursor(self._collection.find({"_id": {"$in": course_ids}}))
        by_id = {course.id: course for course in courses}
        return [by_id[course_id] for course_id in course_ids if course_id in by_id]

    async def seed_catalog(self, drafts: list[CourseDraft]) -> list[Course]:
        """Replace the whole catalog with drafts, numbered in the given order."""
        courses = [
            Course(number=number, title=draft.title, description=draft.description, price=draft.price)
            for number, draft in enumerate(drafts, start=1)
        ]
        # Delete and insert commit together; concurrent reseeds conflict instead of interleaving
        async with storage_errors("seed_catalog"), self.database.client.start_session() as session:
            async with await session.start_transaction():
                await self._collection.delete_many({}, session=session)
                if courses:
                    await self._collection.insert_many([course.to_mongo() for course in courses], session=session)
        logger.info("catalog_seeded", course_count=len(courses))
        return courses

    async def seed_if_empty(self) -> None:
        """Seed the default courses, but only into an empty catalog."""
        async with storage_errors("count_courses"):
            count = await self._collection.count_documents({})
        if count == 0:
            await self.seed_catalog(DEFAULT_COURSES)

    async def on_start(self) -> None:
        """Create indexes and optionally seed the default catalog."""
        async with storage_errors("create_course_indexes"):
            await self._collection.create_index([("number", 1)], unique=True)
        if self.core.config.seed_catalog_on_start:
            await self.seed_if_empty()

"""Tests for catalog listing and seeding."""

from uuid import uuid4

import pytest
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from autoforgx.core.core import Core
from autoforgx.core.modules.course.models import Course, CourseDraft, CourseView
from autoforgx.errors import StorageUnavailableError, UnknownCourseError


class TestSeedCatalog:
    """Tests for CourseService.seed_catalog."""

    async def test_listed_courses_match_input(self, core):
        """Test that every seeded course is listed with exact fields, in order."""
        drafts = [
            CourseDraft(title="Intro to AI", description="Learn AI basics", price=49),
            CourseDraft(title="Web Development", description="Build websites", price=99),
            CourseDraft(title="Free Primer", description="", price=0),
        ]
        await core.services.course.seed_catalog(drafts)

        courses = await core.services.course.list_courses()
        assert [(c.title, c.description, c.price) for c in courses] == [
            ("Intro to AI", "Learn AI basics", 49),
            ("Web Development", "Build websites", 99),
            ("Free Primer", "", 0),
        ]

    async def test_reseed_replaces_catalog(self, core):
        """Test that a reseed clears previously seeded courses."""
        await core.services.course.seed_catalog([CourseDraft(title="Old", description="old", price=1)])
        await core.services.course.seed_catalog([CourseDraft(title="New", description="new", price=2)])

        courses = await core.services.course.list_courses()
        assert [c.title for c in courses] == ["New"]

    async def test_negative_price_rejected(self):
        with pytest.raises(ValueError, match="greater than or equal to 0"):
            CourseDraft(title="Bad", description="", price=-1)

    async def test_failed_insert_keeps_previous_catalog(self, core, database):
        """Test that a reseed failing after the delete leaves the old catalog in place."""
        await core.services.course.seed_catalog([CourseDraft(title="Old", description="old", price=1)])
        courses = database.get_collection("courses")
        courses.fail_with = AutoReconnect("connection reset")
        courses.fail_methods = {"insert_many"}

        with pytest.raises(StorageUnavailableError):
            await core.services.course.seed_catalog([CourseDraft(title="New", description="new", price=2)])

        courses.fail_with = None
        assert [c.title for c in await core.services.course.list_courses()] == ["Old"]

    async def test_seed_if_empty_keeps_existing(self, core):
        """Test that startup seeding never clears an existing catalog."""
        await core.services.course.seed_catalog([CourseDraft(title="Custom", description="", price=5)])
        await core.services.course.seed_if_empty()

        courses = await core.services.course.list_courses()
        assert [c.title for c in courses] == ["Custom"]

    async def test_seed_on_start(self, database, config_factory):
        """Test that seed_catalog_on_start seeds the default courses."""
        core = Core(config_factory(seed_catalog_on_start=True), database)
        async with core.lifespan():
            courses = await core.services.course.list_courses()

        assert [c.title for c in courses] == ["Intro to AI", "Web Development"]


class TestGetCourses:
    """Tests for course lookups."""

    async def test_unknown_course(self, seeded_core):
        with pytest.raises(UnknownCourseError):
            await seeded_core.services.course.get_course(uuid4())

    async def test_get_courses_by_ids_keeps_order(self, seeded_core):
        """Test that ids resolve in the requested order and unknown ids are skipped."""
        first, second = await seeded_core.services.course.list_courses()

        courses = await seeded_core.services.course.get_courses_by_ids([second.id, uuid4(), first.id])
        assert [c.id for c in courses] == [second.id, first.id]

    async def test_empty_catalog(self, core):
        assert await core.services.course.list_courses() == []

    async def test_storage_failure(self, core, database):
        """Test that driver errors surface as StorageUnavailableError."""
        database.get_collection("courses").fail_with = ServerSelectionTimeoutError("no servers")

        with pytest.raises(StorageUnavailableError):
            await core.services.course.list_courses()


class TestCourseView:
    def test_from_domain_exposes_public_fields_only(self):
        course = Course(number=3, title="Intro to AI", description="Learn AI basics", price=49)

        view = CourseView.from_domain(course)
        assert view.model_dump() == {
            "id": course.id,
            "title": "Intro to AI",
            "description": "Learn AI basics",
            "price": 49,
        }

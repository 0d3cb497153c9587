from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from autoforgx.config import Config
from autoforgx.core.core import Core
from autoforgx.core.modules.course.models import DEFAULT_COURSES, Course, CourseDraft, CourseView
from autoforgx.core.modules.token.models import AuthToken
from autoforgx.core.modules.user.models import UserView
from autoforgx.errors import AuthenticationError, NotFoundError


class App:
    """Facade for all application operations, validates tokens before delegating to Core."""

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, database)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None, None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def signup(self, email: str, password: str) -> UUID:
        """Register a new account and return its user id."""
        user = await self._core.services.user.create_user(email, password)
        return user.id

    async def login(self, email: str, password: str) -> AuthToken:
        """Verify credentials and issue a bearer token."""
        user = await self._core.services.user.verify_credentials(email, password)
        return self._core.services.token.issue_token(user.id)

    def verify_token(self, auth_token: AuthToken | None) -> UUID:
        """Resolve a bearer token to its user id."""
        return self._core.services.access.ensure_authenticated(auth_token)

    async def get_current_user(self, auth_token: AuthToken) -> UserView:
        """Get current authenticated user profile."""
        user = await self._core.services.access.ensure_authenticated_user(auth_token)
        return UserView.from_domain(user)

    async def get_courses(self) -> list[CourseView]:
        """Get the full catalog (public)."""
        courses = await self._core.services.course.list_courses()
        return [CourseView.from_domain(course) for course in courses]

    async def purchase_course(self, auth_token: AuthToken, course_id: UUID) -> CourseView:
        """Purchase a course for the current user."""
        user_id = self._core.services.access.ensure_authenticated(auth_token)
        course = await self._core.services.purchase.purchase_course(user_id, course_id)
        return CourseView.from_domain(course)

    async def get_dashboard(self, auth_token: AuthToken) -> list[CourseView]:
        """Get the current user's purchased courses in purchase order."""
        user_id = self._core.services.access.ensure_authenticated(auth_token)
        try:
            courses = await self._core.services.purchase.get_purchased_courses(user_id)
        except NotFoundError:
            raise AuthenticationError from None
        return [CourseView.from_domain(course) for course in courses]

    async def seed_catalog(self, admin_key: str | None, drafts: list[CourseDraft] | None = None) -> list[Course]:
        """Replace the catalog (admin key required). Uses the default courses when drafts is None."""
        self._core.services.access.ensure_admin_key(admin_key)
        return await self._core.services.course.seed_catalog(DEFAULT_COURSES if drafts is None else drafts)

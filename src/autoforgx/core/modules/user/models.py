from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from autoforgx.core.db import MongoModel
from autoforgx.utils import now


class User(MongoModel):
    """User domain model with credentials and owned courses.

    purchased_courses keeps purchase order and never holds the same course twice.
    """

    email: str
    password_hash: str  # bcrypt hash
    purchased_courses: list[UUID] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    purchased_course_count: int = Field(..., description="Number of purchased courses")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, email=user.email, purchased_course_count=len(user.purchased_courses))

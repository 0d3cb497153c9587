from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from autoforgx.core.db import MongoModel
from autoforgx.utils import now


class CourseDraft(BaseModel):
    """Course fields supplied when seeding the catalog."""

    title: str = Field(..., min_length=1, description="Course title")
    description: str = Field(..., description="Course description")
    price: float = Field(..., ge=0, description="Course price")


class Course(MongoModel):
    """Catalog course. Immutable once created; replaced only by a reseed.

    Indexed on number - unique. number records insertion order within the catalog.
    """

    number: int
    title: str
    description: str
    price: float = Field(..., ge=0)
    created_at: datetime = Field(default_factory=now)


DEFAULT_COURSES = [
    CourseDraft(title="Intro to AI", description="Learn AI basics", price=49),
    CourseDraft(title="Web Development", description="Build websites", price=99),
]


class CourseView(BaseModel):
    """Course information (API representation)."""

    id: UUID = Field(..., description="Course ID")
    title: str = Field(..., description="Course title")
    description: str = Field(..., description="Course description")
    price: float = Field(..., description="Course price")

    @classmethod
    def from_domain(cls, course: Course) -> "CourseView":
        """Create view model from domain model."""
        return cls(id=course.id, title=course.title, description=course.description, price=course.price)

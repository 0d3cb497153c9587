from typing import Annotated

from fastapi import APIRouter, Body, Header
from pydantic import BaseModel, Field

from autoforgx.core.modules.course.models import CourseDraft
from autoforgx.web.deps import AppDep
from autoforgx.web.openapi import ErrorResponse

router = APIRouter(tags=["admin"])


class SeedResponse(BaseModel):
    message: str = Field(..., description="Confirmation message")
    count: int = Field(..., description="Number of courses in the new catalog")


@router.post(
    "/admin/seed",
    summary="Reseed catalog",
    description="Delete every course and insert the given ones (or the default set). Requires X-Admin-Key.",
    operation_id="seedCatalog",
    responses={
        200: {"description": "Catalog replaced"},
        403: {"model": ErrorResponse, "description": "Missing or invalid admin key, or admin operations disabled"},
    },
)
async def seed_catalog(
    app: AppDep,
    x_admin_key: Annotated[str | None, Header()] = None,
    courses: Annotated[list[CourseDraft] | None, Body()] = None,
) -> SeedResponse:
    seeded = await app.seed_catalog(x_admin_key, courses)
    return SeedResponse(message="Seeded", count=len(seeded))

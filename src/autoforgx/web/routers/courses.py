from fastapi import APIRouter

from autoforgx.core.modules.course.models import CourseView
from autoforgx.web.deps import AppDep

router = APIRouter(tags=["courses"])


@router.get(
    "/courses",
    summary="List courses",
    description="Get the full course catalog. No authentication required.",
    operation_id="listCourses",
    responses={200: {"description": "All courses in catalog order"}},
)
async def list_courses(app: AppDep) -> list[CourseView]:
    return await app.get_courses()

from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from autoforgx.core.modules.course.models import CourseView
from autoforgx.web.deps import AppDep, AuthTokenDep
from autoforgx.web.openapi import ErrorResponse

router = APIRouter(tags=["purchases"])


class PurchaseRequest(BaseModel):
    """Request to purchase a course. Accepts courseId or course_id."""

    course_id: UUID = Field(..., alias="courseId", description="ID of the course to purchase")

    model_config = ConfigDict(populate_by_name=True)


class PurchaseResponse(BaseModel):
    message: str = Field(..., description="Confirmation message")
    course_id: UUID = Field(..., description="ID of the purchased course")


@router.post(
    "/purchase",
    summary="Purchase course",
    description="Add a course to the current user's purchases. Payment is simulated.",
    operation_id="purchaseCourse",
    responses={
        200: {"description": "Course purchased"},
        400: {"model": ErrorResponse, "description": "Course already purchased"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Course not found"},
    },
)
async def purchase_course(purchase_data: PurchaseRequest, app: AppDep, auth_token: AuthTokenDep) -> PurchaseResponse:
    course = await app.purchase_course(auth_token, purchase_data.course_id)
    return PurchaseResponse(message="Course purchased", course_id=course.id)


@router.get(
    "/dashboard",
    summary="Get purchased courses",
    description="Get the current user's purchased courses in purchase order.",
    operation_id="getDashboard",
    responses={
        200: {"description": "Purchased courses"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_dashboard(app: AppDep, auth_token: AuthTokenDep) -> list[CourseView]:
    return await app.get_dashboard(auth_token)

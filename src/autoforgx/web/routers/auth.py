from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from autoforgx.web.deps import AppDep
from autoforgx.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class CredentialsRequest(BaseModel):
    """Email and password pair used for signup and login."""

    email: str = Field(..., description="Email address (case-sensitive)")
    password: str = Field(..., description="Plaintext password")


class SignupResponse(BaseModel):
    message: str = Field(..., description="Confirmation message")
    user_id: UUID = Field(..., description="ID of the created user")


class LoginResponse(BaseModel):
    """Authentication response."""

    token: str = Field(..., description="Bearer token for subsequent requests, valid for one hour")


@router.post(
    "/signup",
    summary="Register account",
    description="Create a new account with email and password.",
    operation_id="signup",
    status_code=201,
    responses={
        201: {"description": "User created"},
        400: {"model": ErrorResponse, "description": "Email already registered or missing credentials"},
    },
)
async def signup(signup_data: CredentialsRequest, app: AppDep) -> SignupResponse:
    user_id = await app.signup(signup_data.email, signup_data.password)
    return SignupResponse(message="User created", user_id=user_id)


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with email and password to receive a bearer token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: CredentialsRequest, app: AppDep) -> LoginResponse:
    token = await app.login(login_data.email, login_data.password)
    return LoginResponse(token=token)

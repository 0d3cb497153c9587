from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

# Endpoints reachable without a bearer token
PUBLIC_ENDPOINTS = {
    ("POST", "/api/signup"),
    ("POST", "/api/login"),
    ("GET", "/api/courses"),
    ("GET", "/health"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="AutoForgX API",
            version="0.1.0",
            summary="Online course marketplace",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {}).update({
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "Token returned by /api/login, valid for one hour",
            },
            "AdminKey": {
                "type": "apiKey",
                "in": "header",
                "name": "X-Admin-Key",
                "description": "Admin key for catalog maintenance",
            },
        })

        openapi_schema["security"] = [{"BearerAuth": []}]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []
                elif path.startswith("/api/admin/"):
                    operation["security"] = [{"AdminKey": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid credentials", "type": "invalid_credentials"},
                {"message": "Course already purchased", "type": "already_owned"},
                {"message": "Not authenticated", "type": "authentication_error"},
            ]
        }
    }

from autoforgx.web.routers.admin import router as admin_router
from autoforgx.web.routers.auth import router as auth_router
from autoforgx.web.routers.courses import router as courses_router
from autoforgx.web.routers.profile import router as profile_router
from autoforgx.web.routers.purchases import router as purchases_router

__all__ = [
    "admin_router",
    "auth_router",
    "courses_router",
    "profile_router",
    "purchases_router",
]

"""API routes."""
from api.routes.admin import router as admin_router
from api.routes.admin_writers import router as admin_writers_router
from api.routes.auth import router as auth_router
from api.routes.public import router as public_router
from api.routes.setup import router as setup_router
from api.routes.uploads import router as uploads_router
from api.routes.writer import router as writer_router

__all__ = [
    "admin_router",
    "admin_writers_router",
    "auth_router",
    "public_router",
    "setup_router",
    "uploads_router",
    "writer_router",
]

"""Bootstrap route for the default administrator."""
from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.schemas.responses import SetupResponse
from api.services.setup import SetupService
from database.connection import get_db


router = APIRouter(prefix="/setup", tags=["setup"])


@router.post("", response_model=SetupResponse)
async def setup_admin(db: AsyncIOMotorDatabase = Depends(get_db)):
    """Create the default admin account once; later calls are no-ops."""
    return SetupResponse(**await SetupService(db).ensure_default_admin())

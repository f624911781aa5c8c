"""Profile and role model definitions."""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from .content import ModerationStatusEnum


class RoleEnum(str, Enum):
    """Role enumeration."""
    ADMIN = "admin"
    WRITER = "writer"


class ProfileModel(BaseModel):
    """Writer profile as stored in the database."""
    id: str = Field(alias="_id")
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    status: ModerationStatusEnum
    created_at: datetime
    updated_at: datetime

    class Config:
        populate_by_name = True

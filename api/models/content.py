"""Content model definitions shared by articles and news."""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, model_validator


class ModerationStatusEnum(str, Enum):
    """Moderation status enumeration for content and profiles."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ContentModel(BaseModel):
    """Article or news item as stored in the database."""
    id: str = Field(alias="_id")
    title: str
    excerpt: str
    content: str = ""
    cover_image_url: str
    author_id: str
    product_id: Optional[str] = None
    views: int = 0
    status: ModerationStatusEnum
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def approved_has_no_reason(self) -> "ContentModel":
        """Approved content never carries a rejection reason."""
        if self.status == ModerationStatusEnum.APPROVED and self.rejection_reason is not None:
            raise ValueError("approved content cannot carry a rejection reason")
        return self

"""Product model definitions."""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class ProductModel(BaseModel):
    """Catalog product as stored in the database."""
    id: str = Field(alias="_id")
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        populate_by_name = True

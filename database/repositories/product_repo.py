"""Product repository for the catalog collection."""
from typing import Optional, List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase
from shared.utils import generate_product_id, get_utc_now


class ProductRepository:
    """Repository for Product CRUD operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.products

    async def create_product(
        self,
        name: str,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
        display_order: int = 0
    ) -> Dict[str, Any]:
        """Create a new product."""
        now = get_utc_now()
        product = {
            "_id": generate_product_id(),
            "name": name,
            "description": description,
            "image_url": image_url,
            "display_order": display_order,
            "created_at": now,
            "updated_at": now,
        }
        await self.collection.insert_one(product)
        return product

    async def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        """Get a product by ID."""
        return await self.collection.find_one({"_id": product_id})

    async def list_products(self) -> List[Dict[str, Any]]:
        """List products in display order."""
        cursor = self.collection.find({}).sort("display_order", 1)
        return await cursor.to_list(length=None)

    async def update_product(self, product_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update a product and return the new document."""
        update = dict(fields)
        update["updated_at"] = get_utc_now()
        return await self.collection.find_one_and_update(
            {"_id": product_id},
            {"$set": update},
            return_document=True
        )

    async def delete_product(self, product_id: str) -> bool:
        """Delete a product."""
        result = await self.collection.delete_one({"_id": product_id})
        return result.deleted_count > 0

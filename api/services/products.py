"""Admin curation of the product catalog."""
import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

from api.schemas.requests import ProductInput
from database.repositories.content_repo import ContentKind, ContentRepository
from database.repositories.product_repo import ProductRepository
from shared.exceptions import NotFound

logger = logging.getLogger(__name__)


class ProductService:

    def __init__(self, db: AsyncIOMotorDatabase):
        self.repo = ProductRepository(db)
        self.articles = ContentRepository(db, ContentKind.ARTICLES)

    async def create(self, data: ProductInput) -> Dict[str, Any]:
        product = await self.repo.create_product(**data.model_dump())
        logger.info(f"Product {product['_id']} created")
        return product

    async def get(self, product_id: str) -> Dict[str, Any]:
        product = await self.repo.get_product(product_id)
        if not product:
            raise NotFound("المنتج غير موجود")
        return product

    async def update(self, product_id: str, data: ProductInput) -> Dict[str, Any]:
        product = await self.repo.update_product(product_id, data.model_dump())
        if not product:
            raise NotFound("المنتج غير موجود")
        logger.info(f"Product {product_id} updated")
        return product

    async def delete(self, product_id: str) -> None:
        if not await self.repo.delete_product(product_id):
            raise NotFound("المنتج غير موجود")
        detached = await self.articles.clear_product(product_id)
        logger.info(f"Product {product_id} deleted, {detached} articles detached")

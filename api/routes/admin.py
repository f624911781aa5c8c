"""Admin dashboard routes for content moderation and the product catalog."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.dependencies import GUARD_RESPONSES, require_admin
from api.schemas.requests import ContentInput, ProductInput, RejectRequest
from api.schemas.responses import (
    AdminStatsResponse,
    ContentActionResponse,
    ContentResponse,
    MessageResponse,
    ProductResponse,
)
from api.services.authorization import SessionContext
from api.services.catalog import DashboardStatsService
from api.services.moderation import ContentModerationService
from api.services.products import ProductService
from database.connection import get_db
from database.repositories.content_repo import ContentKind


router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
    responses=GUARD_RESPONSES
)


@router.get("/stats", response_model=AdminStatsResponse)
async def stats(db: AsyncIOMotorDatabase = Depends(get_db)):
    """Totals and pending counts for the dashboard cards."""
    return AdminStatsResponse(**await DashboardStatsService(db).admin_stats())


def _register_content_routes(kind: str) -> None:

    def service(db: AsyncIOMotorDatabase) -> ContentModerationService:
        return ContentModerationService(db, kind)

    @router.get(f"/{kind}", response_model=List[ContentResponse], name=f"admin_list_{kind}")
    async def list_for_moderation(
        status_filter: Optional[str] = Query(default="all", alias="status", description="all, pending, approved or rejected"),
        db: AsyncIOMotorDatabase = Depends(get_db)
    ):
        """Every item, newest first, optionally filtered by status."""
        moderation = service(db)
        items = await moderation.list_for_moderation(status_filter)
        authors = await moderation.attach_authors(items)
        return [
            ContentResponse.from_document(item, authors.get(item["author_id"]))
            for item in items
        ]

    @router.get(f"/{kind}/{{content_id}}", response_model=ContentResponse, name=f"admin_preview_{kind}")
    async def preview(content_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
        """Any item in any status, without counting a view."""
        moderation = service(db)
        item = await moderation.get_for_preview(content_id)
        authors = await moderation.attach_authors([item])
        return ContentResponse.from_document(item, authors.get(item["author_id"]))

    @router.post(f"/{kind}/{{content_id}}/approve", response_model=ContentActionResponse, name=f"admin_approve_{kind}")
    async def approve(content_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
        moderation = service(db)
        item = await moderation.approve(content_id)
        return ContentActionResponse(
            message=f"تم تحديث حالة {moderation.label}",
            item=ContentResponse.from_document(item),
        )

    @router.post(f"/{kind}/{{content_id}}/reject", response_model=ContentActionResponse, name=f"admin_reject_{kind}")
    async def reject(
        content_id: str,
        request: RejectRequest,
        db: AsyncIOMotorDatabase = Depends(get_db)
    ):
        moderation = service(db)
        item = await moderation.reject(content_id, request.reason)
        return ContentActionResponse(
            message=f"تم رفض {moderation.label}",
            item=ContentResponse.from_document(item),
        )

    @router.put(f"/{kind}/{{content_id}}", response_model=ContentActionResponse, name=f"admin_edit_{kind}")
    async def edit(
        content_id: str,
        request: ContentInput,
        db: AsyncIOMotorDatabase = Depends(get_db)
    ):
        moderation = service(db)
        item = await moderation.admin_edit(content_id, request)
        return ContentActionResponse(
            message=f"تم تحديث {moderation.label} بنجاح",
            item=ContentResponse.from_document(item),
        )

    @router.delete(f"/{kind}/{{content_id}}", response_model=MessageResponse, name=f"admin_delete_{kind}")
    async def delete(
        content_id: str,
        session: SessionContext = Depends(require_admin),
        db: AsyncIOMotorDatabase = Depends(get_db)
    ):
        moderation = service(db)
        await moderation.delete(session, content_id)
        return MessageResponse(message=f"تم حذف {moderation.label}")


for _kind in ContentKind.ALL:
    _register_content_routes(_kind)


@router.get("/products", response_model=List[ProductResponse])
async def list_products(db: AsyncIOMotorDatabase = Depends(get_db)):
    products = await ProductService(db).repo.list_products()
    return [ProductResponse.from_document(p) for p in products]


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(request: ProductInput, db: AsyncIOMotorDatabase = Depends(get_db)):
    return ProductResponse.from_document(await ProductService(db).create(request))


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    return ProductResponse.from_document(await ProductService(db).get(product_id))


@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    request: ProductInput,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    return ProductResponse.from_document(await ProductService(db).update(product_id, request))


@router.delete("/products/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    await ProductService(db).delete(product_id)
    return MessageResponse(message="تم حذف المنتج بنجاح")

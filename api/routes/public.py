"""Public routes: approved content, approved writers, products."""
from typing import List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.schemas.responses import (
    ContentResponse,
    ProductDetailResponse,
    ProductResponse,
    PublicWriterResponse,
    TickerItem,
    WriterDetailResponse,
)
from api.services.catalog import PublicCatalogService
from database.connection import get_db
from database.repositories.content_repo import ContentKind


router = APIRouter(tags=["public"])


def _content_list(authored) -> List[ContentResponse]:
    return [ContentResponse.from_document(item, author) for item, author in authored]


def _register_content_routes(kind: str) -> None:
    @router.get(f"/{kind}", response_model=List[ContentResponse], name=f"list_{kind}")
    async def list_content(db: AsyncIOMotorDatabase = Depends(get_db)):
        """Approved items, newest first."""
        return _content_list(await PublicCatalogService(db).list_content(kind))

    @router.get(f"/{kind}/{{content_id}}", response_model=ContentResponse, name=f"get_{kind}")
    async def get_content(content_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
        """One approved item; counts as a view."""
        item, author = await PublicCatalogService(db).get_content(kind, content_id)
        return ContentResponse.from_document(item, author)


for _kind in ContentKind.ALL:
    _register_content_routes(_kind)


@router.get("/", response_model=List[ContentResponse])
async def home(db: AsyncIOMotorDatabase = Depends(get_db)):
    """Latest approved articles for the home page."""
    return _content_list(await PublicCatalogService(db).home())


@router.get("/latest", response_model=List[TickerItem])
async def latest(db: AsyncIOMotorDatabase = Depends(get_db)):
    """Newest approved article and news headlines."""
    return [TickerItem(**entry) for entry in await PublicCatalogService(db).latest()]


@router.get("/writers", response_model=List[PublicWriterResponse])
async def list_writers(db: AsyncIOMotorDatabase = Depends(get_db)):
    """Approved writers ordered by name."""
    writers = await PublicCatalogService(db).list_writers()
    return [PublicWriterResponse.from_document(w) for w in writers]


@router.get("/writers/{profile_id}", response_model=WriterDetailResponse)
async def get_writer(profile_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    page = await PublicCatalogService(db).get_writer(profile_id)
    return WriterDetailResponse(
        writer=PublicWriterResponse.from_document(page["writer"]),
        articles=_content_list(page["articles"]),
        news=_content_list(page["news"]),
    )


@router.get("/products", response_model=List[ProductResponse])
async def list_products(db: AsyncIOMotorDatabase = Depends(get_db)):
    products = await PublicCatalogService(db).list_products()
    return [ProductResponse.from_document(p) for p in products]


@router.get("/products/{product_id}", response_model=ProductDetailResponse)
async def get_product(product_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    page = await PublicCatalogService(db).get_product(product_id)
    return ProductDetailResponse(
        product=ProductResponse.from_document(page["product"]),
        articles=_content_list(page["articles"]),
    )

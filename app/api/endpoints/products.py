"""
Product endpoints - indexing, search and autocomplete over Elasticsearch.
Design: Thin controller; service layer holds query building and response shaping.
"""

from fastapi import APIRouter, Query

from app.config import get_settings
from app.core.dependencies import ProductServiceDep
from app.schemas.product import Product
from app.schemas.search import SearchPage

router = APIRouter()
settings = get_settings()


@router.post("", response_model=Product, response_model_by_alias=True)
async def create_product(service: ProductServiceDep, product: Product):
    """Index one product. Same id overwrites the stored document."""
    return await service.create(product)


@router.post("/bulk", response_model=list[Product], response_model_by_alias=True)
async def bulk_create_products(service: ProductServiceDep, products: list[Product]):
    """Index many products in one request; any failure fails the whole response."""
    return await service.bulk_create(products)


@router.get("/search", response_model=SearchPage, response_model_by_alias=True)
async def search_products(
    service: ProductServiceDep,
    name: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, alias="pageSize"),
    max_price: float | None = Query(None, ge=0, alias="maxPrice"),
):
    """Products whose name matches a suggestion for `name`, sorted by price ascending."""
    return await service.search(name=name, page=page, page_size=page_size, max_price=max_price)


@router.get("/suggest", response_model=list[str])
async def suggest_products(service: ProductServiceDep, prefix: str = Query(..., min_length=1)):
    """Autocomplete: distinct product names for a (fuzzy) prefix."""
    return await service.suggest(prefix)

# storefront/products/controller.py
from fastapi import APIRouter

from .models import ProductResponse
from .service import ProductService
from ..core.config import settings
from ..database.core import DbSession
from ..pages.models import ProductListResponse
from ..sessions.dependencies import CurrentSessionDep

router = APIRouter(tags=["products"])


@router.get("/products", response_model=ProductListResponse)
async def list_products(db: DbSession, current: CurrentSessionDep):
    """List the first page of the catalogue."""
    products = ProductService.list_products(db, limit=settings.PRODUCT_LIST_LIMIT)
    return ProductListResponse(
        page="products",
        user=current.state.username,
        products=[ProductResponse.model_validate(p) for p in products],
    )

# storefront/pages/controller.py
from datetime import datetime
from fastapi import APIRouter

from .models import PageResponse, HomePageResponse
from ..core.config import settings
from ..sessions.dependencies import CurrentSessionDep

router = APIRouter(tags=["pages"])


@router.get("/", response_model=HomePageResponse)
async def home(current: CurrentSessionDep):
    """Landing page copy."""
    return HomePageResponse(
        page="index",
        user=current.state.username,
        title=f"{settings.BRAND} - Inicio",
        description=f"{settings.BRAND} - Conservación y educación para salvar el agua",
        brand=settings.BRAND,
        header_title=f"{settings.BRAND} Educación para Salvar el Agua",
        main_title=f"¿Por qué {settings.BRAND}?",
        main_content="La necesidad de conservar el agua nunca ha sido tan urgente...",
        year=datetime.now().year,
    )


@router.get("/contact", response_model=PageResponse)
async def contact(current: CurrentSessionDep):
    return PageResponse(page="contact", user=current.state.username)


@router.get("/about", response_model=PageResponse)
async def about(current: CurrentSessionDep):
    return PageResponse(page="about", user=current.state.username)


@router.get("/post", response_model=PageResponse)
async def post(current: CurrentSessionDep):
    return PageResponse(page="post", user=current.state.username)

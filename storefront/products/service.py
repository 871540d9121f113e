from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List
from decimal import Decimal
import logging

from .models import Product
from ..core.exceptions import ProductNotFoundError, StoreUnavailableError

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    {
        "name": "Botella reutilizable",
        "description": "Botella de acero inoxidable de 750 ml.",
        "price": Decimal("12.50"),
        "image_url": "/img/botella.jpg",
    },
    {
        "name": "Filtro de agua",
        "description": "Filtro de carbón activado para grifo.",
        "price": Decimal("24.90"),
        "image_url": "/img/filtro.jpg",
    },
    {
        "name": "Aireador de grifo",
        "description": "Reduce el caudal hasta un 50%.",
        "price": Decimal("4.75"),
        "image_url": "/img/aireador.jpg",
    },
    {
        "name": "Kit de recolección de lluvia",
        "description": "Barril de 200 L con grifo y tapa.",
        "price": Decimal("89.00"),
        "image_url": "/img/barril.jpg",
    },
]


class ProductService:

    @staticmethod
    def get_product_by_id(db: Session, product_id: int) -> Product:
        """Get a product or raise ProductNotFoundError"""
        try:
            product = db.query(Product).filter(Product.id == product_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching product {product_id}: {e}")
            raise StoreUnavailableError("get_product", str(e)) from e
        if not product:
            raise ProductNotFoundError(product_id)
        return product

    @staticmethod
    def list_products(db: Session, limit: int = 10) -> List[Product]:
        """List up to `limit` products in id order"""
        try:
            return db.query(Product).order_by(Product.id).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing products: {e}")
            raise StoreUnavailableError("list_products", str(e)) from e

    @staticmethod
    def seed_products(db: Session) -> int:
        """Insert the demo catalogue into an empty products table"""
        try:
            if db.query(Product).count() > 0:
                return 0
            for data in DEMO_PRODUCTS:
                db.add(Product(**data))
            db.commit()
            logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products")
            return len(DEMO_PRODUCTS)
        except SQLAlchemyError as e:
            logger.error(f"Error seeding products: {e}")
            db.rollback()
            raise StoreUnavailableError("seed_products", str(e)) from e

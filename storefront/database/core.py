from typing import Annotated
from fastapi import Depends
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session, declarative_base
import logging

from ..core.config import settings

logger = logging.getLogger(__name__)

""" Get DATABASE_URL from environment variables """
DATABASE_URL = settings.DATABASE_URL

if not DATABASE_URL:
    logger.warning("DATABASE_URL not found in environment variables, falling back to SQLite")
    DATABASE_URL = "sqlite:///./storefront.db"

logger.info("Using database: MySQL" if DATABASE_URL.startswith("mysql") else
            "Using database: Postgresql" if DATABASE_URL.startswith("postgresql") else
            "Using database: SQLite")

# Create engine with appropriate settings for server databases vs SQLite
if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        echo=False  # Set to True for SQL debugging
    )
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,
        pool_recycle=300,
        echo=False  # Set to True for SQL debugging
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping(bind=None) -> None:
    """Run a trivial query; raises if the database cannot be reached."""
    with (bind or engine).connect() as conn:
        conn.execute(text("SELECT 1"))


DbSession = Annotated[Session, Depends(get_db)]

import pytest
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Import your Base, main app, and key modules
from storefront.database.core import get_db
from storefront.database.models import Base, Product
from storefront.auth import service as auth_service
from storefront.auth.models import RegisterUserRequest
from storefront.core.rate_limiter import limiter
from main import create_app

# Use an in-memory SQLite database for testing
TEST_SQLALCHEMY_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def db_engine():
    engine = create_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """
    Creates a new, isolated in-memory database session for each test.
    """
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def products(db_session):
    """
    A small catalogue: ids 1, 2 and 3.
    """
    items = [
        Product(id=1, name="Botella reutilizable", description="750 ml", price=Decimal("10.00")),
        Product(id=2, name="Aireador de grifo", description=None, price=Decimal("5.00")),
        Product(id=3, name="Filtro de agua", description="Carbón activado", price=Decimal("24.90")),
    ]
    db_session.add_all(items)
    db_session.commit()
    return {p.id: p for p in items}


@pytest.fixture(scope="function")
def test_user(db_session):
    """
    Registers alice through the real service so the password is bcrypt-hashed.
    """
    return auth_service.register_user(
        db_session,
        RegisterUserRequest(username="alice", email="alice@x.com", password="secret1"),
    )


@pytest.fixture(scope="function")
def client(db_session):
    """
    Creates a TestClient for the app, overriding the database dependency.
    """
    app = create_app(use_lifespan=False)

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def logged_in_client(client, test_user):
    """
    A client whose session is linked to alice.
    """
    response = client.post(
        "/login",
        data={"email": "alice@x.com", "password": "secret1"},
        follow_redirects=False,
    )
    assert response.status_code == 303, "Failed to log in test user"
    return client

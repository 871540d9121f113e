from decimal import Decimal

from storefront.core.config import settings
from storefront.sessions.models import SessionRecord
from storefront.users.service import UserService


def test_register_form(client):
    body = client.get("/register").json()

    assert body == {"page": "register", "user": None, "error": None}


def test_register_then_login(client, db_session):
    response = client.post(
        "/register",
        data={"username": "alice", "email": "alice@x.com", "password": "secret1"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    assert UserService.get_user_by_email(db_session, "alice@x.com").username == "alice"

    response = client.post(
        "/login", data={"email": "alice@x.com", "password": "secret1"}, follow_redirects=False
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert client.get("/").json()["user"] == "alice"


def test_register_duplicate_email_re_renders_form(client, test_user):
    response = client.post(
        "/register",
        data={"username": "other", "email": "alice@x.com", "password": "pw"},
        follow_redirects=False,
    )

    assert response.status_code == 409
    assert response.json()["page"] == "register"
    assert response.json()["error"]


def test_register_with_invalid_email_re_renders_form(client):
    response = client.post(
        "/register",
        data={"username": "bob", "email": "not-an-email", "password": "pw"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    assert "email" in response.json()["error"]


def test_login_wrong_password(client, test_user):
    response = client.post(
        "/login", data={"email": "alice@x.com", "password": "nope"}, follow_redirects=False
    )

    assert response.status_code == 401
    assert response.json() == {"page": "login", "user": None, "error": "Invalid email or password"}
    assert client.get("/").json()["user"] is None


def test_login_unknown_email(client, test_user):
    response = client.post(
        "/login", data={"email": "bob@x.com", "password": "secret1"}, follow_redirects=False
    )

    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


def test_login_keeps_cart_and_rotates_session_id(client, db_session, products, test_user):
    client.post("/add-to-cart/1", data={"quantity": "2"})
    old_cookie = client.cookies.get(settings.SESSION_COOKIE_NAME)

    client.post("/login", data={"email": "alice@x.com", "password": "secret1"})

    assert client.cookies.get(settings.SESSION_COOKIE_NAME) != old_cookie
    assert db_session.query(SessionRecord).count() == 1
    body = client.get("/cart").json()
    assert body["user"] == "alice"
    assert [(l["id"], l["quantity"]) for l in body["cart"]] == [(1, 2)]


def test_checkout_requires_login(client, products):
    client.post("/add-to-cart/1", data={"quantity": "2"})

    body = client.post("/checkout").json()

    assert body["page"] == "cart"
    assert body["checkout_message"]["type"] == "error"
    assert Decimal(body["total"]) == Decimal("20")
    assert [(l["id"], l["quantity"]) for l in client.get("/cart").json()["cart"]] == [(1, 2)]


def test_checkout_when_logged_in_is_approved(logged_in_client, products):
    logged_in_client.post("/add-to-cart/1", data={"quantity": "2"})
    logged_in_client.post("/add-to-cart/2", data={"quantity": "1"})

    body = logged_in_client.post("/checkout").json()

    assert body["checkout_message"]["type"] == "success"
    assert Decimal(body["total"]) == Decimal("25")
    # cart is left as it was
    assert len(logged_in_client.get("/cart").json()["cart"]) == 2


def test_checkout_can_clear_cart_when_configured(logged_in_client, products, mocker):
    mocker.patch.object(settings, "CLEAR_CART_ON_CHECKOUT", True)
    logged_in_client.post("/add-to-cart/1", data={"quantity": "2"})

    body = logged_in_client.post("/checkout").json()

    assert body["checkout_message"]["type"] == "success"
    assert len(body["cart"]) == 1
    assert logged_in_client.get("/cart").json()["cart"] == []


def test_logout_destroys_the_whole_session_by_default(logged_in_client, db_session, products):
    logged_in_client.post("/add-to-cart/1", data={"quantity": "2"})

    response = logged_in_client.get("/logout", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert db_session.query(SessionRecord).count() == 0
    body = logged_in_client.get("/cart").json()
    assert body["user"] is None
    assert body["cart"] == []


def test_logout_in_auth_mode_keeps_the_cart(logged_in_client, products, mocker):
    mocker.patch.object(settings, "LOGOUT_MODE", "auth")
    logged_in_client.post("/add-to-cart/1", data={"quantity": "2"})

    logged_in_client.get("/logout")

    body = logged_in_client.get("/cart").json()
    assert body["user"] is None
    assert [(l["id"], l["quantity"]) for l in body["cart"]] == [(1, 2)]


def test_logout_without_session(client):
    response = client.get("/logout", follow_redirects=False)

    assert response.status_code == 303


def test_login_attempts_are_rate_limited(client, test_user, mocker):
    mocker.patch.object(settings, "RATE_LIMIT_LOGIN", "2/minute")
    attempt = {"email": "alice@x.com", "password": "nope"}

    assert client.post("/login", data=attempt).status_code == 401
    assert client.post("/login", data=attempt).status_code == 401
    response = client.post("/login", data=attempt)

    assert response.status_code == 429
    assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"


def test_login_with_the_address_typed_at_registration(client):
    form = {"username": "alice", "email": "Alice@Example.COM", "password": "secret1"}
    assert client.post("/register", data=form, follow_redirects=False).status_code == 303

    response = client.post(
        "/login", data={"email": "Alice@Example.COM", "password": "secret1"}, follow_redirects=False
    )

    assert response.status_code == 303
    assert client.get("/").json()["user"] == "alice"

import pytest
from decimal import Decimal
from sqlalchemy.exc import OperationalError

from storefront.auth.models import AuthenticatedUser
from storefront.cart import Cart, CartLine
from storefront.core.exceptions import StoreUnavailableError
from storefront.sessions.dependencies import sign_session_id, unsign_session_id
from storefront.sessions.models import SessionRecord, SessionState
from storefront.sessions.store import SessionStore


@pytest.fixture
def store(db_session):
    return SessionStore(db_session, ttl_seconds=3600)


@pytest.fixture
def state():
    return SessionState(
        cart=Cart(lines=[CartLine(id=3, name="Filtro", price=Decimal("24.90"), quantity=2)]),
        user=AuthenticatedUser(id=7, username="alice", email="alice@x.com"),
    )


def test_saved_state_loads_back_identically(store, state):
    store.save("abc", state)

    loaded = store.load("abc")

    assert loaded == state
    assert loaded.cart.lines[0].price == Decimal("24.90")


def test_unknown_session_loads_as_none(store):
    assert store.load("missing") is None


def test_save_overwrites_previous_state(store, state):
    store.save("abc", state)
    store.save("abc", SessionState())

    assert store.load("abc") == SessionState()


def test_expired_session_is_discarded(db_session, state):
    SessionStore(db_session, ttl_seconds=-1).save("old", state)

    assert SessionStore(db_session).load("old") is None
    assert db_session.get(SessionRecord, "old") is None


def test_destroy(store, state):
    store.save("abc", state)

    assert store.destroy("abc") is True
    assert store.destroy("abc") is False
    assert store.load("abc") is None


def test_rotate_moves_state_to_a_new_id(store, state):
    store.save("abc", state)

    new_id = store.rotate("abc", state)

    assert new_id != "abc"
    assert store.load("abc") is None
    assert store.load(new_id) == state


def test_purge_expired_only_removes_stale_rows(db_session, store, state):
    SessionStore(db_session, ttl_seconds=-1).save("stale", state)
    store.save("fresh", state)

    assert store.purge_expired() == 1
    assert store.load("fresh") == state


def test_database_failure_surfaces_as_store_unavailable(store, mocker):
    mocker.patch.object(
        store.db, "get", side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
    )

    with pytest.raises(StoreUnavailableError):
        store.load("abc")


def test_session_ids_are_unique():
    assert len({SessionStore.new_session_id() for _ in range(50)}) == 50


def test_cookie_signature_round_trip_and_tampering():
    signed = sign_session_id("abc")

    assert unsign_session_id(signed) == "abc"
    assert unsign_session_id(signed + "x") is None
    assert unsign_session_id("abc") is None

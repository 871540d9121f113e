# storefront/auth/controller.py
from typing import Annotated
from fastapi import APIRouter, Form, Request, Response
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from starlette import status

from . import models
from . import service
from ..core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from ..core.rate_limiter import limiter, login_limit, register_limit
from ..database.core import DbSession
from ..logging import logger
from ..pages.models import FormPageResponse
from ..sessions.dependencies import (
    CurrentSessionDep,
    SessionStoreDep,
    clear_session_cookie,
    set_session_cookie,
    persist_session,
)

router = APIRouter(tags=["auth"])

FormText = Annotated[str, Form()]


def describe_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in exc.errors()
    )


@router.get("/register", response_model=FormPageResponse)
async def register_form(current: CurrentSessionDep):
    return FormPageResponse(page="register", user=current.state.username)


@router.post("/register", response_model=FormPageResponse)
@limiter.limit(register_limit)
async def register_user(
    request: Request,
    response: Response,
    db: DbSession,
    current: CurrentSessionDep,
    username: FormText = "",
    email: FormText = "",
    password: FormText = "",
):
    """Create an account, then send the visitor to the login form."""
    try:
        register_request = models.RegisterUserRequest(username=username, email=email, password=password)
    except ValidationError as e:
        response.status_code = status.HTTP_400_BAD_REQUEST
        return FormPageResponse(page="register", user=current.state.username, error=describe_validation_error(e))

    try:
        service.register_user(db, register_request)
    except DuplicateEmailError as e:
        response.status_code = e.status_code
        return FormPageResponse(page="register", user=current.state.username, error=e.user_message)

    return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login", response_model=FormPageResponse)
async def login_form(current: CurrentSessionDep):
    return FormPageResponse(page="login", user=current.state.username, error=None)


@router.post("/login", response_model=FormPageResponse)
@limiter.limit(login_limit)
async def login(
    request: Request,
    response: Response,
    db: DbSession,
    store: SessionStoreDep,
    current: CurrentSessionDep,
    email: FormText = "",
    password: FormText = "",
):
    """Log in and link the user to the session; the cart comes along."""
    try:
        state = service.login(db, current.state, email, password)
    except (UserNotFoundError, InvalidCredentialsError) as e:
        response.status_code = e.status_code
        return FormPageResponse(page="login", user=current.state.username, error=e.user_message)

    redirect = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    if current.is_new:
        persist_session(store, current.id, state, redirect)
    else:
        # Fresh id after privilege change
        set_session_cookie(redirect, store.rotate(current.id, state))
    return redirect


@router.get("/logout")
async def logout(store: SessionStoreDep, current: CurrentSessionDep):
    """Log out according to LOGOUT_MODE and go home."""
    state = service.logout(current.state)
    redirect = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)

    if state is None:
        if not current.is_new:
            store.destroy(current.id)
        clear_session_cookie(redirect)
        logger.info("Session destroyed on logout")
    else:
        persist_session(store, current.id, state, redirect)
        logger.info("User unlinked from session on logout")
    return redirect

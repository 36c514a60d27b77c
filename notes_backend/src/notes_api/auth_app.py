"""
Auth service: sign-up, sign-in and account deletion.

Sign-up and sign-in return a signed token both in the Authorization
response header and in the JSON body.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Response, status
from fastapi.responses import PlainTextResponse

from .accounts import AccountExists, authenticate, create_account, delete_account
from .config import Settings, load_settings
from .deps import get_current_username, get_db, get_issuer
from .ownership import guard
from .schemas import AccountCreate, AccountDelete, SignIn, Token
from .security import TokenIssuer
from .service import create_service_app

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


def _token_response(response: Response, issuer: TokenIssuer, username: str) -> Token:
    token = issuer.issue(username)
    response.headers["Authorization"] = token
    return Token(access_token=token, token_type="bearer")


# PUBLIC_INTERFACE
@router.post("/auth/signup", response_model=Token, status_code=201, summary="Register a new account")
def signup(
    account: AccountCreate,
    response: Response,
    db=Depends(get_db),
    issuer: TokenIssuer = Depends(get_issuer),
):
    """
    Register a new account and issue its token.
    """
    try:
        created = create_account(db, account)
    except AccountExists as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken.") from exc
    return _token_response(response, issuer, created.username)


# PUBLIC_INTERFACE
@router.post("/auth/signin", response_model=Token, summary="Sign in and get a token")
def signin(
    credentials: SignIn,
    response: Response,
    db=Depends(get_db),
    issuer: TokenIssuer = Depends(get_issuer),
):
    account = authenticate(db, credentials.username, credentials.password)
    if account is None:
        logger.warning("Failed sign-in for %r", credentials.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No matching documents")
    return _token_response(response, issuer, account.username)


# PUBLIC_INTERFACE
@router.delete("/auth/delete", response_class=PlainTextResponse, summary="Delete an account")
@router.delete("/delete", response_class=PlainTextResponse, include_in_schema=False)
def delete(
    account: AccountDelete,
    db=Depends(get_db),
    caller: str = Depends(get_current_username),
):
    """
    Delete the account named in the body; only its owner may do so.
    """
    guard(caller, account.username, lambda: delete_account(db, account.username))
    return "Successfully deleted account!"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the auth service."""
    app = create_service_app(
        title="Personal Notes Auth API",
        description="Account sign-up, sign-in and deletion.",
        settings=settings,
        allow_methods=("POST", "DELETE"),
        openapi_tags=[{"name": "Authentication", "description": "Account registration, sign-in and removal"}],
    )
    app.include_router(router)
    return app


app = create_app()


def run_server(settings: Optional[Settings] = None):
    """Run the auth service."""
    import uvicorn

    settings = settings or load_settings()
    uvicorn.run(create_app(settings), host=settings.auth_host, port=settings.auth_port)


if __name__ == "__main__":
    run_server()

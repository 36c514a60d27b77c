"""
FastAPI dependencies shared by the auth and notes services.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from notes_database.db import SessionLocal
from .config import Settings
from .security import InvalidToken, TokenIssuer, issuer_from_settings

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/signin", auto_error=False)


# DATABASE Dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_issuer(settings: Settings = Depends(get_settings)) -> TokenIssuer:
    return issuer_from_settings(settings)


def get_current_username(token: str = Depends(oauth2_scheme), issuer: TokenIssuer = Depends(get_issuer)) -> str:
    """Verifies the bearer token and returns the username it carries."""
    try:
        claims = issuer.verify(token)
    except InvalidToken as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    return claims["username"]

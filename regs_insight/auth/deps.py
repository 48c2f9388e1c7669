
from typing import AsyncIterator

from fastapi import Depends, Request
from jose import JWTError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from regs_insight.config import Settings
from regs_insight.db.session import Database
from regs_insight.errors import DatabaseUnavailable, Unauthorized
from regs_insight.schemas.auth import TokenClaims
from regs_insight.uploads.storage import BlobStorage
from regs_insight.utils.security import decode_token


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> BlobStorage:
    return request.app.state.storage


def get_database(request: Request) -> Database | None:
    return getattr(request.app.state, "database", None)


async def get_db(database: Database | None = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    if database is None:
        raise DatabaseUnavailable()
    async with database.session() as db:
        yield db


def parse_authorization(header: str | None) -> str:
    """Returns the token from a `<scheme> <token>` header."""
    if not header:
        raise Unauthorized("Missing auth")
    parts = header.split(" ")
    if len(parts) != 2 or not parts[1]:
        raise Unauthorized("Bad auth")
    return parts[1]


def verify_claims(token: str, secret: str) -> TokenClaims:
    try:
        payload = decode_token(token, secret)
        return TokenClaims(id=payload.get("id"), email=payload.get("email"))
    except (JWTError, PydanticValidationError):
        raise Unauthorized("Invalid token")


def get_current_user(request: Request, settings: Settings = Depends(get_app_settings)) -> TokenClaims:
    token = parse_authorization(request.headers.get("Authorization"))
    return verify_claims(token, settings.jwt_secret)

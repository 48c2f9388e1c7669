
import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from regs_insight.config import Settings
from regs_insight.errors import DuplicateEmail, InvalidCredentials, ValidationError
from regs_insight.models.user import User
from regs_insight.utils.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    token: str
    user: User


def issue_token(settings: Settings, user: User) -> str:
    return create_access_token(
        {"id": user.id, "email": user.email},
        settings.jwt_secret,
        settings.access_token_expire_minutes,
    )


async def register_user(db: AsyncSession, settings: Settings, name: str | None, email: str, password: str) -> AuthResult:
    if not email or not password:
        raise ValidationError("email/password required")
    # hashing runs in a worker thread
    hashed = await asyncio.to_thread(hash_password, password, settings.bcrypt_rounds)
    user = User(name=name or None, email=email, password_hash=hashed)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # the unique index on email decides races between concurrent signups
        await db.rollback()
        raise DuplicateEmail()
    await db.refresh(user)
    return AuthResult(token=issue_token(settings, user), user=user)


async def authenticate_user(db: AsyncSession, settings: Settings, email: str, password: str) -> AuthResult:
    user = (await db.execute(select(User).where(User.email == email))).scalars().first()
    # same error whether the email is unknown or the password is wrong
    if not user or not await asyncio.to_thread(verify_password, password, user.password_hash):
        raise InvalidCredentials()
    return AuthResult(token=issue_token(settings, user), user=user)

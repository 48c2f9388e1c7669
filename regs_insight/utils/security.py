
from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.hash import bcrypt

ALGORITHM = "HS256"


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.using(rounds=rounds).hash(password)


def verify_password(password: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.verify(password, hashed)
    except ValueError:
        # not a bcrypt hash
        return False


def create_access_token(claims: dict, secret: str, expires_minutes: int, now: datetime | None = None) -> str:
    issued = now or datetime.now(timezone.utc)
    to_encode = dict(claims)
    to_encode["iat"] = issued
    to_encode["exp"] = issued + timedelta(minutes=expires_minutes)
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str) -> dict:
    """Raises JWTError for a bad signature, a malformed token or an expired one."""
    return jwt.decode(token, secret, algorithms=[ALGORITHM])

"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
import secrets

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

_ALGORITHM = "HS256"


@lru_cache(maxsize=1)
def _pwd_context() -> CryptContext:
    settings = get_settings()
    return CryptContext(
        schemes=["pbkdf2_sha256"],
        deprecated="auto",
        pbkdf2_sha256__rounds=settings.password_hash_rounds,
    )


def get_password_hash(password: str) -> str:
    return _pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return _pwd_context().verify(plain_password, hashed_password)


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Return a signed JWT whose subject is ``user_id``."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {"sub": str(user_id), "exp": expire}, settings.secret_key, algorithm=_ALGORITHM
    )


def decode_access_token(token: str) -> int:
    """Return the user id carried by ``token`` or raise ``ValueError``."""

    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        raise ValueError("Could not validate credentials") from exc


def generate_verification_token() -> str:
    """Return a random hex token used to confirm an email address."""

    return secrets.token_hex(32)

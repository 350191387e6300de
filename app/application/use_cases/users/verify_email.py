"""Use cases for confirming an email address."""

from dataclasses import replace
from datetime import timedelta

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError
from app.config import get_settings
from app.domain.entities import User
from app.infrastructure.email import build_verification_url, send_verification_email
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import generate_verification_token
from app.utils import now_in_app_timezone

from .register_user import EmailDeliveryError
from .validators import normalize_email


def verify_email(session: Session, *, token: str) -> User:
    """Mark the owner of ``token`` as verified if the token is still valid."""

    if not token:
        raise ValueError("Verification token is required")

    repository = UserRepository(session)
    user = repository.get_by_verification_token(token)
    expires_at = user.email_verification_expires_at if user else None
    if user is None or expires_at is None or expires_at <= now_in_app_timezone():
        raise ValueError("Invalid or expired verification token")

    return repository.update(
        replace(
            user,
            email_verified=True,
            email_verification_token=None,
            email_verification_expires_at=None,
        )
    )


def resend_verification(session: Session, *, email: str) -> User:
    """Issue a fresh verification token and email it again."""

    repository = UserRepository(session)
    user = repository.get_by_email(normalize_email(email))
    if user is None:
        raise NotFoundError("User not found")
    if user.email_verified:
        raise ValueError("Email already verified")

    token = generate_verification_token()
    hours = get_settings().email_verification_ttl_hours
    user = repository.update(
        replace(
            user,
            email_verification_token=token,
            email_verification_expires_at=now_in_app_timezone() + timedelta(hours=hours),
        )
    )
    if not send_verification_email(user.email, build_verification_url(token)):
        raise EmailDeliveryError("Could not send the verification email")
    return user

"""Use case for self-service registration."""

import logging
from dataclasses import dataclass, replace
from datetime import timedelta

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import User
from app.infrastructure.email import build_verification_url, send_verification_email
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import generate_verification_token, get_password_hash
from app.utils import now_in_app_timezone

from .validators import ensure_valid_name, ensure_valid_password, normalize_email

logger = logging.getLogger(__name__)


class EmailDeliveryError(RuntimeError):
    """The verification email could not be sent; the account was rolled back."""


@dataclass(frozen=True)
class RegistrationResult:
    user: User
    requires_verification: bool


def register_user(session: Session, *, name: str, email: str, password: str) -> RegistrationResult:
    """Create an unverified account and email its verification link.

    When SendGrid is not configured the account is verified straight away.
    When it is configured but the send fails, the account is deleted again and
    :class:`EmailDeliveryError` is raised.
    """

    repository = UserRepository(session)
    normalized_email = normalize_email(email)
    if repository.get_by_email(normalized_email):
        raise ValueError("User already exists")

    settings = get_settings()
    now = now_in_app_timezone()
    token = generate_verification_token()
    user = repository.create(
        User(
            id=None,
            name=ensure_valid_name(name),
            email=normalized_email,
            password=get_password_hash(ensure_valid_password(password)),
            email_verified=False,
            email_verification_token=token,
            email_verification_expires_at=now
            + timedelta(hours=settings.email_verification_ttl_hours),
            created_at=now,
        )
    )

    if not settings.email_enabled:
        logger.info("Email delivery disabled; marking user %s as verified", user.id)
        verified = repository.update(
            replace(
                user,
                email_verified=True,
                email_verification_token=None,
                email_verification_expires_at=None,
            )
        )
        return RegistrationResult(user=verified, requires_verification=False)

    if not send_verification_email(user.email, build_verification_url(token)):
        logger.warning("Removing user %s after the verification email failed", user.id)
        repository.delete(user.id)
        raise EmailDeliveryError("Failed to complete registration. Please try again.")

    return RegistrationResult(user=user, requires_verification=True)

"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .register_user import EmailDeliveryError, RegistrationResult, register_user
from .search_users import search_users
from .verify_email import resend_verification, verify_email

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "EmailDeliveryError",
    "RegistrationResult",
    "register_user",
    "search_users",
    "resend_verification",
    "verify_email",
]

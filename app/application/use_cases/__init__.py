"""Aggregate application use cases."""

from .users import authenticate_user, register_user, verify_email

__all__ = [
    "authenticate_user",
    "register_user",
    "verify_email",
]

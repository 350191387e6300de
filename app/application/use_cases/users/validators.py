"""Common validation helpers for user use cases."""

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    """Return ``email`` trimmed and lowercased or raise ``ValueError``."""

    normalized = email.strip().lower()
    if normalized.count("@") != 1 or normalized.startswith("@") or normalized.endswith("@"):
        raise ValueError("Valid email is required")
    return normalized


def ensure_valid_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Name is required")
    return cleaned


def ensure_valid_password(password: str) -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return password

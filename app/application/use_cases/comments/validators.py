"""Validation helpers for comment use cases."""


def ensure_valid_content(content: str) -> str:
    cleaned = content.strip()
    if not cleaned:
        raise ValueError("Comment content is required")
    return cleaned

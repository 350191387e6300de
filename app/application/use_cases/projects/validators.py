"""Validation helpers shared by project use cases."""

from app.domain.entities import PROJECT_COLORS


def ensure_valid_project_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Project name is required")
    return cleaned


def ensure_valid_color(color: str) -> str:
    """Return ``color`` if it belongs to the project palette."""

    normalized = color.strip().lower()
    if normalized not in PROJECT_COLORS:
        raise ValueError(f"Color must be one of: {', '.join(PROJECT_COLORS)}")
    return normalized

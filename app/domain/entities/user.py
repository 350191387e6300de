"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    email_verified: bool
    email_verification_token: str | None
    email_verification_expires_at: datetime | None
    created_at: datetime | None

    def summary(self) -> dict[str, object]:
        """Return the public ``{id, name, email}`` projection of the user."""

        return {"id": self.id, "name": self.name, "email": self.email}


__all__ = ["User"]

"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserSummaryRead(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserRead(UserSummaryRead):
    email_verified: bool
    created_at: datetime | None

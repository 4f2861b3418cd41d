"""Account Schemas — auth responses and the public account projection.

Invariants:
    - AccountSummary is the ONLY account shape ever serialized: _id, username, email
    - No schema here has a password or passwordHash field
"""

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    """Login success. redirectTo only set for privileged accounts."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    redirect_to: str | None = Field(None, alias="redirectTo")


class AccountSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(alias="_id")
    username: str
    email: str

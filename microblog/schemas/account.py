"""Pydantic schemas for account API."""

from pydantic import BaseModel, ConfigDict


class AccountResponse(BaseModel):
    """Public account information. The password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    handle: str
    email: str

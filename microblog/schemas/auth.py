"""Pydantic schemas for registration and authentication API."""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request for account registration.

    Lengths and email shape are checked by AccountService against the
    configured policy, not here.
    """

    handle: str
    email: str
    password: str


class LoginRequest(BaseModel):
    """Request for login."""

    handle: str = Field(..., min_length=1)
    password: str


class StatusResponse(BaseModel):
    """Body of every mutating endpoint and every error: the HTTP status echoed."""

    status: int


class LoggedInResponse(StatusResponse):
    """Response for the session check endpoint."""

    id: int = Field(description="Account id the auth cookie belongs to")

"""Pydantic models for admin login and session status."""

from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    # Optional so a missing password is reported as 400 by the endpoint.
    password: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True


class AuthStatus(BaseModel):
    isAuthenticated: bool

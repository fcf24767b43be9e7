"""
Auth API routes — register, login, profile.

Route prefixes: {api_prefix}/auth and {api_prefix}/user
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from auth.dependencies import current_identity, get_account_service, require_identity
from auth.service import AccountService, Identity

router = APIRouter(tags=["auth"])
user_router = APIRouter(tags=["user"], dependencies=[Depends(require_identity)])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: str
    name: str
    email: str


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
) -> Dict[str, Any]:
    """Register a new user."""
    result = await accounts.register(req.name, req.email, req.password)
    return {
        "message": "User registered successfully",
        "token": result.token,
        "user": result.user.to_dict(),
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    result = await accounts.login(req.email, req.password)
    return {
        "message": "Login successful",
        "token": result.token,
        "user": result.user.to_dict(),
    }


@user_router.get("/profile", response_model=UserOut)
async def profile(
    identity: Identity = Depends(current_identity),
    accounts: AccountService = Depends(get_account_service),
) -> Dict[str, Any]:
    """Return the authenticated user's public profile."""
    summary = await accounts.get_profile(identity)
    return summary.to_dict()

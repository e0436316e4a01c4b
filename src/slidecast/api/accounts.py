"""Signup and signin endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from slidecast.api.models import SigninRequest, SignupRequest

if TYPE_CHECKING:
    from slidecast.containers import AppContainer

router = APIRouter(tags=["accounts"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest, request: Request) -> dict[str, str]:
    """Register a new account."""
    container: AppContainer = request.app.state.container
    user = await container.user_service.signup(
        email=payload.email, username=payload.username, password=payload.password
    )
    return {
        "message": "User successfully registered",
        "userId": str(user.id),
        "username": user.username,
    }


@router.post("/signin")
async def signin(payload: SigninRequest, request: Request) -> dict[str, str]:
    """Exchange email and password for a bearer token."""
    container: AppContainer = request.app.state.container
    result = await container.user_service.signin(
        email=payload.email, password=payload.password
    )
    return {"token": result.token, "userId": str(result.user_id)}

"""Bearer token auth gate for protected routes."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Depends, Header, Request

from slidecast.domain.errors import UnauthorizedError
from slidecast.services.tokens import TokenIssuer  # noqa: TC001

if TYPE_CHECKING:
    from slidecast.containers import AppContainer


def _get_token_issuer(request: Request) -> TokenIssuer:
    container: AppContainer = request.app.state.container
    return container.token_issuer


def _extract_token(authorization: str | None) -> str | None:
    """Accept ``Bearer <token>`` as well as a bare token."""
    if not authorization:
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() == "bearer":
        return credentials.strip() or None
    return authorization.strip()


async def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
    token_issuer: TokenIssuer = Depends(_get_token_issuer),
) -> UUID:
    """Resolve the caller's user id and attach it to the request state."""
    token = _extract_token(authorization)
    if token is None:
        raise UnauthorizedError("Missing bearer token")
    user_id = token_issuer.verify_token(token)
    request.state.user_id = user_id
    return user_id

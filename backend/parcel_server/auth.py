"""
Parcel Server — Authentication & Role Dependencies
===================================================

What:  FastAPI dependencies that verify the bearer credential and gate
       routes by the caller's stored role.
How:   verify_token reads `Authorization: Bearer <token>` and asks the
       IdentityProvider to verify it. require_role(role) builds on it and
       compares the role stored on the caller's User document.
Who:   Declared on route handlers: Depends(verify_token), Depends(require_admin),
       Depends(require_rider).

Failure mapping:
    no header / not "Bearer <token>" / empty token → UnauthorizedError (401)
    token rejected by the identity provider        → ForbiddenError (403)
    user missing or role mismatch                  → ForbiddenError (403)

The store and the provider are injected per request; nothing here holds
a collection reference of its own.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Request

from parcel_server.exceptions import ForbiddenError, UnauthorizedError
from parcel_server.models.enums import UserRole
from parcel_server.services.firebase_service import firebase_identity_provider
from parcel_server.services.provider_base import Identity, IdentityProvider
from parcel_server.store import DocumentStore, get_store

logger = logging.getLogger(__name__)


def get_identity_provider() -> IdentityProvider:
    """Dependency returning the configured identity provider (overridable in tests)."""
    return firebase_identity_provider


def _extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise UnauthorizedError()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError(context={"reason": "malformed_authorization_header"})
    return token


async def verify_token(
    request: Request,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Identity:
    """Verify the bearer credential and attach the decoded identity to the request."""
    token = _extract_bearer_token(request.headers.get("Authorization"))
    identity = await provider.verify_token(token)
    request.state.identity = identity
    return identity


async def get_caller_role(identity: Identity, store: DocumentStore) -> str:
    """The caller's stored role; documents without a role read as 'user'."""
    user = await store.users.find_one(email=identity.email)
    if user is None or not user.role:
        return UserRole.USER.value
    return user.role


def require_role(role: UserRole) -> Callable:
    """
    Build a dependency that admits only callers whose stored role is `role`.

    Usage:
        @router.get("/riders/pending", dependencies=[Depends(require_role(UserRole.ADMIN))])
    """

    async def dependency(
        identity: Identity = Depends(verify_token),
        store: DocumentStore = Depends(get_store),
    ) -> Identity:
        user = await store.users.find_one(email=identity.email)
        if user is None or user.role != role.value:
            logger.warning(
                "Role check failed: %s requires %s (has %s)",
                identity.email,
                role.value,
                user.role if user else "no user",
            )
            raise ForbiddenError(message=f"{role.value} access required")
        return identity

    dependency.__name__ = f"require_{role.value}"
    return dependency


require_admin = require_role(UserRole.ADMIN)
require_rider = require_role(UserRole.RIDER)

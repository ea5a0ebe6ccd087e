"""
Parcel Server — User Service
=============================

What:  Sign-in registration (idempotent on email), admin search, role lookup
       and admin role changes.
Who:   Called by routes/users.py.

Roles form a closed set {admin, user, rider}; anything else is rejected
before the store is touched, so a bad request never changes a stored role.
"""

import logging
from datetime import datetime, timezone
from typing import List, Tuple

from parcel_server.exceptions import NotFoundError, ValidationError
from parcel_server.models import User
from parcel_server.models.enums import UserRole
from parcel_server.schemas.user import UserCreate
from parcel_server.store import DocumentStore, parse_object_id

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


class UserService:

    async def create_user(self, store: DocumentStore, data: UserCreate) -> Tuple[User, bool]:
        """
        Register a user on first sign-in.

        Returns:
            (user, inserted): inserted is False when the email already existed,
            in which case the stored document is left untouched. Two sign-ins
            racing on a new email both succeed; only one of them inserts.
        """
        existing = await store.users.find_one(email=data.email)
        if existing is not None:
            return existing, False

        now = datetime.now(timezone.utc)
        inserted = await store.users.insert_if_absent(
            {
                "email": data.email,
                "role": UserRole.USER.value,
                "created_at": now,
                "last_log_in": now,
            },
            "email",
        )
        user = await store.users.find_one(email=data.email)
        if inserted:
            logger.info("User registered: %s", user.email)
        return user, inserted

    async def search_users(self, store: DocumentStore, email_query: str) -> List[User]:
        """Case-insensitive substring match on email; LIKE wildcards are literal."""
        return await store.users.find(
            User.email.icontains(email_query.strip(), autoescape=True),
            order_by=User.email,
            limit=SEARCH_LIMIT,
        )

    async def get_role(self, store: DocumentStore, email: str) -> str:
        user = await store.users.find_one(email=email.strip().lower())
        if user is None:
            raise NotFoundError(resource="user", message="User not found")
        return user.role or UserRole.USER.value

    async def update_role(self, store: DocumentStore, user_id: str, role: str) -> int:
        allowed = sorted(r.value for r in UserRole)
        if role not in allowed:
            raise ValidationError(
                message=f"Invalid role '{role}'. Allowed: {', '.join(allowed)}",
                field="role",
            )
        uid = parse_object_id(user_id, "user")

        modified = await store.users.update_by_id(uid, {"role": role})
        if modified == 0:
            raise NotFoundError(resource="user", resource_id=user_id)
        logger.info("User %s role → %s", uid, role)
        return modified


user_service = UserService()

"""
Parcel Server — Firebase Identity Provider
===========================================

What:  Verifies Firebase Authentication ID tokens sent as bearer credentials.
How:   firebase-admin checks signature, expiry, audience and issuer against
       Google's public keys. The SDK call is synchronous (it may fetch keys
       over HTTP), so it runs in Starlette's threadpool.
Who:   Used by parcel_server.auth.verify_token via get_identity_provider().

Initialisation is lazy: importing this module (tests, Alembic) never needs
credentials. The Firebase app is created on the first verification.
"""

import logging
from typing import Optional

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from firebase_admin.exceptions import FirebaseError
from starlette.concurrency import run_in_threadpool

from parcel_server.config import settings
from parcel_server.exceptions import ForbiddenError
from parcel_server.services.provider_base import Identity, IdentityProvider

logger = logging.getLogger(__name__)

APP_NAME = "parcel-server"


class FirebaseIdentityProvider(IdentityProvider):
    """Firebase Authentication backed implementation of IdentityProvider."""

    def __init__(self):
        self._app: Optional[firebase_admin.App] = None

    def _get_app(self) -> firebase_admin.App:
        if self._app is None:
            if settings.firebase_credentials_path:
                cred = credentials.Certificate(settings.firebase_credentials_path)
            else:
                cred = credentials.ApplicationDefault()
            options = {}
            if settings.firebase_project_id:
                options["projectId"] = settings.firebase_project_id
            self._app = firebase_admin.initialize_app(cred, options or None, name=APP_NAME)
            logger.info("Firebase app initialised (project=%s)", settings.firebase_project_id or "default")
        return self._app

    async def verify_token(self, token: str) -> Identity:
        app = self._get_app()
        try:
            claims = await run_in_threadpool(firebase_auth.verify_id_token, token, app=app)
        except (ValueError, FirebaseError) as e:
            # Logged without the token itself
            logger.warning("ID token rejected: %s", type(e).__name__)
            raise ForbiddenError(context={"reason": type(e).__name__})

        email = claims.get("email")
        if not email:
            logger.warning("ID token for uid=%s carries no email claim", claims.get("uid"))
            raise ForbiddenError(context={"reason": "missing_email_claim"})

        return Identity(uid=claims.get("uid"), email=email.lower(), claims=claims)


firebase_identity_provider = FirebaseIdentityProvider()

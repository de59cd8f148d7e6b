"""
Identity resolution against the OIDC provider.

Clients authenticate with the provider and present its JWT; the token's
`sub` claim is the user's external id.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

import jwt
from jwt import PyJWKClient

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be verified or carries no subject."""


class IdentityResolver:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        jwks_client: Optional[PyJWKClient] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._jwks_client = jwks_client

    @property
    def jwks_client(self) -> PyJWKClient:
        if self._jwks_client is None:
            self._jwks_client = PyJWKClient(
                f"https://{self.settings.oidc_domain}/.well-known/jwks.json"
            )
        return self._jwks_client

    def resolve_token(self, token: Optional[str]) -> str:
        """
        Verify `token` and return the external id it was issued for.

        Raises:
            InvalidTokenError: missing, expired, badly signed, or no `sub`.
        """
        if not token:
            raise InvalidTokenError("Missing token")
        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(token)
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=self.settings.oidc_algorithms.split(","),
                audience=self.settings.oidc_api_audience,
                issuer=self.settings.oidc_issuer,
            )
        except jwt.PyJWTError as e:
            logger.warning("Token verification failed: %s", e)
            raise InvalidTokenError(str(e)) from e
        external_id = claims.get("sub")
        if not external_id:
            raise InvalidTokenError("Token has no subject")
        return external_id


@lru_cache
def get_identity_resolver() -> IdentityResolver:
    """Process-wide resolver so the JWKS cache is shared."""
    return IdentityResolver()

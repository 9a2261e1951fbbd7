# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Access gates for password protected routes.

Each gate holds one immutable credential pair and checks HTTP Basic
credentials against it in constant time.
"""

import base64
import hashlib
import hmac
from typing import Optional

from fastapi import Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param

from composer_registry.core.config import Credentials
from composer_registry.core.errors import ConfigurationError, UnauthorizedError
from composer_registry.core.logging import get_logger

logger = get_logger(__name__)


def _digest(value: str) -> bytes:
    return hashlib.sha256(value.encode("utf-8")).digest()


class UTF8HTTPBasic(HTTPBasic):
    """
    HTTPBasic that decodes credentials as UTF-8, matching the
    charset="UTF-8" challenge. Returns None for absent or malformed headers.
    """

    async def __call__(self, request: Request) -> Optional[HTTPBasicCredentials]:
        authorization = request.headers.get("Authorization")
        scheme, param = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != "basic":
            return None

        try:
            data = base64.b64decode(param, validate=True).decode("utf-8")
        except ValueError:
            return None

        username, separator, password = data.partition(":")
        if not separator:
            return None
        return HTTPBasicCredentials(username=username, password=password)


class BasicAuthGate:
    """
    FastAPI dependency that rejects requests without matching credentials.

    Supplied and expected values are SHA-256 hashed first so that
    hmac.compare_digest always sees equal-length inputs, and both the
    username and password comparisons are always evaluated.
    """

    def __init__(self, credentials: Credentials, name: str, realm: str = "restricted"):
        """
        Initialize gate.

        Args:
            credentials: Expected username/password pair
            name: Gate name used in logs ("user", "admin")
            realm: Realm advertised in the WWW-Authenticate challenge

        Raises:
            ConfigurationError: If username or password is empty
        """
        if not credentials.is_complete:
            raise ConfigurationError(f"{name} gate requires a username and password")

        self.name = name
        self.realm = realm
        self._username_digest = _digest(credentials.username)
        self._password_digest = _digest(credentials.password)
        self._scheme = UTF8HTTPBasic(auto_error=False, realm=realm)

    def check(self, username: str, password: str) -> bool:
        """Compare supplied credentials with the expected pair."""
        username_match = hmac.compare_digest(_digest(username), self._username_digest)
        password_match = hmac.compare_digest(_digest(password), self._password_digest)
        return username_match & password_match

    async def __call__(self, request: Request) -> HTTPBasicCredentials:
        """
        Authenticate the request.

        Returns:
            The accepted credentials

        Raises:
            UnauthorizedError: If credentials are absent, malformed or wrong
        """
        credentials = await self._scheme(request)

        if credentials is not None and self.check(credentials.username, credentials.password):
            return credentials

        logger.info(
            f"Rejected {self.name} credentials for {request.method} {request.url.path}"
        )
        raise UnauthorizedError(realm=self.realm)

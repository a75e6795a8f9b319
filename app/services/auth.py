"""
Firebase ID token verification without the admin SDK.

Tokens are RS256 JWTs signed with one of Google's rotating x509 certificates;
the certificates are fetched over HTTP and reused for an hour.
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Dict, Optional

import requests
from jose import JWTError, jwt

from app.core.exceptions import TransientInfraError, UnauthorizedError

logger = logging.getLogger(__name__)

CERTS_CACHE_SECONDS = 60 * 60


@dataclass(frozen=True)
class TokenClaims:
    subject_id: str


class FirebaseTokenVerifier:
    def __init__(
        self,
        project_id: str,
        certs_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        self.project_id = project_id
        self.certs_url = certs_url
        self.session = session or requests.Session()
        self.timeout = timeout
        self._certs: Optional[Dict[str, str]] = None
        self._fetched_at = 0.0
        self._lock = threading.Lock()

    def _public_certs(self) -> Dict[str, str]:
        with self._lock:
            if self._certs and time.monotonic() - self._fetched_at < CERTS_CACHE_SECONDS:
                return self._certs
            try:
                response = self.session.get(self.certs_url, timeout=self.timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                logger.error(f"Unable to fetch Firebase public keys: {e}")
                raise TransientInfraError("unable to fetch token signing keys") from e
            self._certs = response.json()
            self._fetched_at = time.monotonic()
            return self._certs

    def verify_token(self, token: str) -> TokenClaims:
        """Verify an ID token and return its subject (the Firebase uid)"""
        if not token:
            raise UnauthorizedError("missing token")
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise UnauthorizedError("invalid token header") from e

        kid = header.get("kid")
        cert = self._public_certs().get(kid) if kid else None
        if not cert:
            raise UnauthorizedError("public key not found for token")

        try:
            claims = jwt.decode(
                token,
                cert,
                algorithms=["RS256"],
                audience=self.project_id,
                issuer=f"https://securetoken.google.com/{self.project_id}",
            )
        except JWTError as e:
            logger.warning(f"Token verification failed: {e}")
            raise UnauthorizedError("token verification failed") from e

        subject = claims.get("user_id") or claims.get("sub")
        if not subject:
            raise UnauthorizedError("token has no subject")
        return TokenClaims(subject_id=subject)

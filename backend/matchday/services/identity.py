"""
Identity Provider: resolves a bearer credential to a user id.

Tokens are JWTs carrying the user id in ``sub``. When JWT_SECRET_KEY is set
the signature and expiry are verified (HS256); otherwise the claims are read
without verification, leaving signature checks to the issuing auth service.
"""
import logging
import os
from typing import Optional

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class JwtIdentityProvider:
    def __init__(self, secret_key: Optional[str] = None):
        self.secret_key = secret_key

    def resolve_caller(self, credential: Optional[str]) -> Optional[str]:
        """Return the caller's user id, or None if the credential is missing or unreadable."""
        if not credential:
            return None
        try:
            if self.secret_key:
                claims = jwt.decode(credential, self.secret_key, algorithms=[ALGORITHM])
            else:
                claims = jwt.get_unverified_claims(credential)
        except JWTError as e:
            logger.warning("Rejected bearer token: %s", e)
            return None
        sub = claims.get("sub")
        return str(sub) if sub else None


    @classmethod
    def from_env(cls) -> "JwtIdentityProvider":
        return cls(os.getenv("JWT_SECRET_KEY") or None)

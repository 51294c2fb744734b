"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
The access token is short-lived (60min) and carries the user id in `sub`.

verify() and extract_user_id() never raise: a bad token is just "no
identity". extract_user_id() skips the signature check, so request
handling goes through authenticate(), which only returns a subject from
a token that passed verification.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt


class TokenError(Exception):
    """Raised when token verification fails."""


class TokenService:
    """Issues and checks signed, time-limited identity tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, user_id: str, expires_minutes: Optional[int] = None) -> str:
        """Create a signed access token for user_id."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=expires_minutes or self.expires_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        """Verify and decode a token.

        Returns the payload dict on success.
        Raises TokenError on failure.
        """
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise TokenError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenError(f"Invalid token: {e}")

    def verify(self, token: str) -> bool:
        """True iff the token is well-formed, correctly signed and unexpired."""
        try:
            self.decode(token)
        except TokenError:
            return False
        return True

    def extract_user_id(self, token: str) -> Optional[str]:
        """Read `sub` WITHOUT checking the signature or expiry.

        Only meaningful after verify() succeeded for the same token.
        """
        try:
            payload = jwt.decode(
                token,
                options={"verify_signature": False, "verify_exp": False},
                algorithms=[self.algorithm],
            )
        except jwt.InvalidTokenError:
            return None
        sub = payload.get("sub")
        return sub if isinstance(sub, str) and sub else None

    def authenticate(self, token: str) -> Optional[str]:
        """Verified subject of the token, or None."""
        if not self.verify(token):
            return None
        return self.extract_user_id(token)

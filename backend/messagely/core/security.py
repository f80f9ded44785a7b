# messagely/core/security.py

import bcrypt
import jwt

from messagely.core.errors import ValidationError

TOKEN_ALGORITHM = "HS256"

# bcrypt only looks at the first 72 bytes and refuses anything longer
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """bcrypt hashing with a fixed work factor (log2 rounds)."""

    def __init__(self, work_factor: int = 12):
        self.work_factor = work_factor

    def hash(self, password: str) -> str:
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")

        salt = bcrypt.gensalt(rounds=self.work_factor)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        encoded = password.encode("utf-8")
        # Could never have been hashed, so it cannot match
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(encoded, hashed.encode("utf-8"))


class TokenIssuer:
    """
    Signs and verifies JWTs carrying a ``username`` claim.
    Tokens carry no expiry; revocation is out of scope.
    """

    def __init__(self, secret: str):
        self._secret = secret

    def issue(self, username: str) -> str:
        return jwt.encode({"username": username}, self._secret, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: str) -> str | None:
        """Return the username from a valid token, or None for a bad one."""
        try:
            payload = jwt.decode(token, self._secret, algorithms=[TOKEN_ALGORITHM])
            return payload["username"]
        except (jwt.InvalidTokenError, KeyError):
            return None

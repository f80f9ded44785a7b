# messagely/core/auth.py

import logging

from sqlalchemy.orm import Session

from messagely.core import user as user_store
from messagely.core.errors import AuthError
from messagely.core.security import PasswordHasher, TokenIssuer

logger = logging.getLogger(__name__)


class AuthFlow:
    """Login and registration on top of the user store.

    The only place tokens are issued.
    """

    def __init__(self, hasher: PasswordHasher, issuer: TokenIssuer):
        self.hasher = hasher
        self.issuer = issuer

    def login(self, db: Session, username: str, password: str) -> dict:
        if not user_store.authenticate(db, self.hasher, username, password):
            logger.warning("Failed login for %s", username)
            raise AuthError("Invalid username/password")

        user_store.update_login_timestamp(db, username)
        logger.info("User %s logged in", username)
        return {"token": self.issuer.issue(username)}

    def register(self, db: Session, fields: dict) -> dict:
        """Register, log in, and return a token with the new public profile."""
        created = user_store.register(db, self.hasher, fields)
        created.pop("password")

        user_store.update_login_timestamp(db, created["username"])
        return {"token": self.issuer.issue(created["username"]), "user": created}

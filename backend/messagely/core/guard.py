# messagely/core/guard.py

from messagely.core.errors import AuthError
from messagely.core.security import TokenIssuer

UNAUTHORIZED = 401


def ensure_logged_in(issuer: TokenIssuer, token: str | None) -> str:
    """Username asserted by a valid token"""
    if not token:
        raise AuthError("Unauthorized", UNAUTHORIZED)

    username = issuer.verify(token)
    if username is None:
        raise AuthError("Unauthorized", UNAUTHORIZED)
    return username


def ensure_correct_user(current_username: str, username: str) -> None:
    if current_username != username:
        raise AuthError("Unauthorized", UNAUTHORIZED)


def ensure_participant(current_username: str, message: dict) -> None:
    """Only the sender or the recipient may see a message."""
    participants = {message["from_user"]["username"], message["to_user"]["username"]}
    if current_username not in participants:
        raise AuthError("Unauthorized", UNAUTHORIZED)


def ensure_recipient(current_username: str, message: dict) -> None:
    if message["to_user"]["username"] != current_username:
        raise AuthError("Only the recipient can mark a message as read", UNAUTHORIZED)

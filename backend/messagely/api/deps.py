# messagely/api/deps.py

from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from messagely import config
from messagely.core.auth import AuthFlow
from messagely.core.guard import ensure_logged_in
from messagely.core.security import PasswordHasher, TokenIssuer

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_hasher() -> PasswordHasher:
    return PasswordHasher(work_factor=config.BCRYPT_WORK_FACTOR)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(secret=config.SECRET_KEY)


def get_auth_flow(
    hasher: PasswordHasher = Depends(get_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthFlow:
    return AuthFlow(hasher, issuer)


def get_current_username(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """Username of the caller, from the Authorization: Bearer header"""
    token = credentials.credentials if credentials else None
    return ensure_logged_in(issuer, token)

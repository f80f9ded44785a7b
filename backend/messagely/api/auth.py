# messagely/api/auth.py

from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from messagely.api.deps import get_auth_flow
from messagely.core.auth import AuthFlow
from messagely.core.rate_limit import LOGIN_LIMIT, limiter
from messagely.infra.database import get_db

router = APIRouter(prefix="/auth")


# Fields are optional here so that missing values reach the store's own validation
class RegisterSchema(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class LoginSchema(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


@router.post("/login")
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    payload: LoginSchema,
    db: Session = Depends(get_db),
    auth: AuthFlow = Depends(get_auth_flow),
):
    """login: {username, password} => {message, token}"""
    result = auth.login(db, payload.username, payload.password or "")
    return {"message": "Logged in!", "token": result["token"]}


@router.post("/register")
def register(
    payload: RegisterSchema,
    db: Session = Depends(get_db),
    auth: AuthFlow = Depends(get_auth_flow),
):
    """register user, log them in: {username, password, first_name, last_name, phone} => {token}"""
    result = auth.register(db, payload.model_dump())
    return {"token": result["token"]}

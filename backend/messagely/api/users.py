# messagely/api/users.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from messagely.api.deps import get_current_username
from messagely.core import user as user_store
from messagely.core.guard import ensure_correct_user
from messagely.infra.database import get_db

router = APIRouter(prefix="/users")


@router.get("")
def list_users(
    db: Session = Depends(get_db),
    current_username: str = Depends(get_current_username),
):
    """=> {users: [{username, first_name, last_name, phone}, ...]}"""
    return {"users": user_store.all_users(db)}


@router.get("/{username}")
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_username: str = Depends(get_current_username),
):
    """=> {user: {username, first_name, last_name, phone, join_at, last_login_at}}"""
    ensure_correct_user(current_username, username)
    return {"user": user_store.get(db, username)}


@router.get("/{username}/to")
def get_messages_to(
    username: str,
    db: Session = Depends(get_db),
    current_username: str = Depends(get_current_username),
):
    ensure_correct_user(current_username, username)
    return {"messages": user_store.messages_to(db, username)}


@router.get("/{username}/from")
def get_messages_from(
    username: str,
    db: Session = Depends(get_db),
    current_username: str = Depends(get_current_username),
):
    ensure_correct_user(current_username, username)
    return {"messages": user_store.messages_from(db, username)}

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from messagely.api.deps import get_current_username
from messagely.core import message as message_store
from messagely.core.errors import AuthError, NotFoundError
from messagely.core.guard import UNAUTHORIZED, ensure_participant, ensure_recipient
from messagely.infra.database import get_db

router = APIRouter(prefix="/messages")


class SendMessageSchema(BaseModel):
    to_username: Optional[str] = None
    body: Optional[str] = None


def _get_visible(db: Session, message_id: int, current_username: str) -> dict:
    # Missing and foreign ids get the same answer
    try:
        message = message_store.get(db, message_id)
    except NotFoundError:
        raise AuthError("Unauthorized", UNAUTHORIZED)
    ensure_participant(current_username, message)
    return message


@router.get("/{message_id}")
def get_message(
    message_id: int,
    db: Session = Depends(get_db),
    current_username: str = Depends(get_current_username),
):
    """
    => {message: {id, body, sent_at, read_at, from_user, to_user}}
    Only the sender or the recipient may look.
    """
    message = _get_visible(db, message_id, current_username)
    return {"message": message}


@router.post("")
def send_message(
    payload: SendMessageSchema,
    db: Session = Depends(get_db),
    current_username: str = Depends(get_current_username),
):
    """{to_username, body} => {message: {id, from_username, to_username, body, sent_at}}"""
    message = message_store.create(db, {
        "from_username": current_username,
        "to_username": payload.to_username,
        "body": payload.body,
    })
    return {"message": message}


@router.post("/{message_id}/read")
def mark_read(
    message_id: int,
    db: Session = Depends(get_db),
    current_username: str = Depends(get_current_username),
):
    """=> {message: {id, read_at}}, recipient only"""
    ensure_recipient(current_username, _get_visible(db, message_id, current_username))
    return {"message": message_store.mark_read(db, message_id)}

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from messagely.core.errors import NotFoundError, ValidationError
from messagely.models.base import utcnow
from messagely.models.message import Message

logger = logging.getLogger(__name__)


def _get_message(db: Session, message_id: int) -> Message:
    message = db.get(Message, message_id)
    if message is None:
        raise NotFoundError(f"No such message: {message_id}")
    return message


def create(db: Session, fields: dict) -> dict:
    """
    Store a message from one user to another.
    Returns {id, from_username, to_username, body, sent_at}
    """
    from_username = fields.get("from_username")
    to_username = fields.get("to_username")
    body = fields.get("body")

    if not from_username or not to_username or not body:
        raise ValidationError("from_username, to_username and body are required")

    message = Message(
        from_username=from_username,
        to_username=to_username,
        body=body,
        sent_at=utcnow(),
    )
    db.add(message)

    try:
        db.commit()
    except IntegrityError:
        # Foreign key on users.username rejected one of the two names
        db.rollback()
        raise ValidationError(f"Unknown user in message {from_username} -> {to_username}")

    logger.info("Message %s sent %s -> %s", message.id, from_username, to_username)
    return {
        "id": message.id,
        "from_username": message.from_username,
        "to_username": message.to_username,
        "body": message.body,
        "sent_at": message.sent_at,
    }


def get(db: Session, message_id: int) -> dict:
    """
    Message detail with both ends resolved:
        {id, body, sent_at, read_at, from_user, to_user}
    """
    message = _get_message(db, message_id)
    return {
        "id": message.id,
        "from_user": message.from_user.public_profile(),
        "to_user": message.to_user.public_profile(),
        "body": message.body,
        "sent_at": message.sent_at,
        "read_at": message.read_at,
    }


def mark_read(db: Session, message_id: int) -> dict:
    """Set read_at once; later calls keep the first timestamp."""
    message = _get_message(db, message_id)

    if message.read_at is None:
        message.read_at = utcnow()
        db.commit()
        logger.info("Message %s read by %s", message.id, message.to_username)

    return {"id": message.id, "read_at": message.read_at}

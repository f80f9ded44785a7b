# messagely/core/user.py

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from messagely.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from messagely.core.security import PasswordHasher
from messagely.models.base import utcnow
from messagely.models.message import Message
from messagely.models.user import User

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("username", "password", "first_name", "last_name", "phone")


def _get_user(db: Session, username: str) -> User:
    user = db.get(User, username)
    if user is None:
        raise NotFoundError(f"No such user: {username}")
    return user


def register(db: Session, hasher: PasswordHasher, fields: dict) -> dict:
    """
    Register a new user.

    Returns {username, password, first_name, last_name, phone} where password
    is the stored hash; callers outside the store should drop it.
    """
    missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
    if missing:
        raise ValidationError(f"All fields are required, missing: {', '.join(missing)}")

    username = fields["username"]

    # Check if user already exists
    if db.get(User, username) is not None:
        raise ConflictError(f"Username {username} already exists")

    now = utcnow()
    user = User(
        username=username,
        password=hasher.hash(fields["password"]),
        first_name=fields["first_name"],
        last_name=fields["last_name"],
        phone=fields["phone"],
        join_at=now,
        last_login_at=now,
    )
    db.add(user)

    try:
        db.commit()
    except IntegrityError:
        # Lost a concurrent registration race on the primary key
        db.rollback()
        raise ConflictError(f"Username {username} already exists")

    logger.info("Registered user %s", username)
    return {
        "username": user.username,
        "password": user.password,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "phone": user.phone,
    }


def authenticate(db: Session, hasher: PasswordHasher, username: str, password: str) -> bool:
    """Is this username/password valid? Raises AuthError only for an unknown user."""
    stored = db.query(User.password).filter(User.username == username).scalar()
    if stored is None:
        raise AuthError("Invalid username/password")
    return hasher.verify(password, stored)


def update_login_timestamp(db: Session, username: str) -> dict:
    user = _get_user(db, username)
    user.last_login_at = utcnow()
    db.commit()
    return {"username": user.username, "last_login_at": user.last_login_at}


def all_users(db: Session) -> list[dict]:
    """Basic info on all users: [{username, first_name, last_name, phone}, ...]"""
    users = db.query(User).order_by(User.username).all()
    return [user.public_profile() for user in users]


def get(db: Session, username: str) -> dict:
    user = _get_user(db, username)
    profile = user.public_profile()
    profile["join_at"] = user.join_at
    profile["last_login_at"] = user.last_login_at
    return profile


def messages_from(db: Session, username: str) -> list[dict]:
    """
    Messages sent by this user:
        [{id, to_user, body, sent_at, read_at}]
    where to_user is the recipient's public profile.
    """
    _get_user(db, username)

    rows = (
        db.query(Message, User)
        .join(User, Message.to_username == User.username)
        .filter(Message.from_username == username)
        .order_by(Message.id)
        .all()
    )
    return [
        {
            "id": m.id,
            "to_user": u.public_profile(),
            "body": m.body,
            "sent_at": m.sent_at,
            "read_at": m.read_at,
        }
        for m, u in rows
    ]


def messages_to(db: Session, username: str) -> list[dict]:
    """
    Messages received by this user:
        [{id, from_user, body, sent_at, read_at}]
    where from_user is the sender's public profile.
    """
    _get_user(db, username)

    rows = (
        db.query(Message, User)
        .join(User, Message.from_username == User.username)
        .filter(Message.to_username == username)
        .order_by(Message.id)
        .all()
    )
    return [
        {
            "id": m.id,
            "from_user": u.public_profile(),
            "body": m.body,
            "sent_at": m.sent_at,
            "read_at": m.read_at,
        }
        for m, u in rows
    ]

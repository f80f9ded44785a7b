# messagely/models/base.py

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Current time in UTC, microsecond resolution"""
    return datetime.now(timezone.utc)

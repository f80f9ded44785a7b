import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker

from messagely.config import DATABASE_URL
from messagely.models.base import Base

logger = logging.getLogger(__name__)

# =========================
# ENGINE CONFIGURATION
# =========================


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str = DATABASE_URL, **kwargs):
    """
    Build an engine for the given URL.
    Server databases get the pooled configuration; SQLite gets foreign keys turned on.
    """
    if url.startswith("sqlite"):
        engine = create_engine(url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    options = {
        "pool_pre_ping": True,  # Check connections before using them
        "pool_size": 5,         # Maintain 5 connections in the pool
        "max_overflow": 10,     # Allow 10 extra connections if needed
        "pool_recycle": 3600,   # Recycle connections every hour
        "echo": False,          # Set True to see SQL statements (debugging)
    }
    options.update(kwargs)
    return create_engine(url, **options)


engine = make_engine()

# =========================
# SESSION CONFIGURATION
# =========================

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# =========================
# DATABASE FUNCTIONS
# =========================

def get_db():
    """
    FastAPI dependency to provide a DB session to routes.
    Usage:
        def my_route(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def db_session(factory=SessionLocal):
    """
    Context manager for standalone DB operations.
    Usage:
        with db_session() as db:
            user = db.query(User).first()
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(bind=None, drop=False):
    """
    Create all tables based on registered models.
    With drop=True the existing tables are dropped first.
    """
    # Import models here to register them with Base
    from messagely.models.user import User  # noqa: F401
    from messagely.models.message import Message  # noqa: F401

    bind = bind or engine
    if drop:
        Base.metadata.drop_all(bind=bind)
        logger.warning("Dropped all tables")
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables created: %s", sorted(Base.metadata.tables))


def check_connection(bind=None) -> bool:
    """
    Test DB connection.
    """
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        return False

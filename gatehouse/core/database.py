"""Database connection, session management and the transaction boundary."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from gatehouse.core.config import settings
from gatehouse.core.errors import TransactionError

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """
    Run a batch of writes atomically: commit on success, roll back on any error.

    Store failures are re-raised as TransactionError; any other exception
    (including ServiceError raised inside the block) propagates unchanged after
    the rollback.
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Transaction rolled back: %s", type(e).__name__)
        raise TransactionError("The operation could not be completed.") from e
    except Exception:
        session.rollback()
        raise

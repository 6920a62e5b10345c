"""Shared builders for store-backed tests: in-memory SQLite, cheap Argon2, test codec."""

from collections.abc import Callable
from datetime import datetime

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gatehouse.core.security import PasswordHasher
from gatehouse.core.tokens import TokenCodec
from gatehouse.models import Base

ACCESS_SECRET = "test-access-secret"
REFRESH_SECRET = "test-refresh-secret"


def make_engine(url: str = "sqlite://") -> Engine:
    """Create an engine with all tables. The default URL is one shared in-memory DB."""
    if url == "sqlite://":
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url, connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_session(engine: Engine | None = None) -> Session:
    return make_session_factory(engine or make_engine())()


def make_hasher() -> PasswordHasher:
    """Argon2id with the smallest legal cost so tests stay fast."""
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


def make_codec(clock: Callable[[], datetime] | None = None, **kwargs: object) -> TokenCodec:
    return TokenCodec(
        access_secret=ACCESS_SECRET,
        refresh_secret=REFRESH_SECRET,
        clock=clock,
        **kwargs,
    )

import logging
from contextlib import contextmanager
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.core.config import Settings
from taskboard.core.errors import InternalError
from taskboard.core.security import TokenIssuer

logger = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(database_url: str) -> Engine:
    connect_args = {}
    kwargs = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        # In-memory databases live inside one connection; share it.
        if make_url(database_url).database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, connect_args=connect_args, **kwargs)


def create_tables(engine: Engine) -> None:
    # Model modules register themselves on Base.metadata when imported.
    from taskboard.models import project, task, user  # noqa: F401

    Base.metadata.create_all(engine)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


@dataclass
class AppContext:
    """Everything a request handler needs: the store and the token issuer."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    tokens: TokenIssuer

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        engine = make_engine(settings.DATABASE_URL)
        create_tables(engine)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=sessionmaker(bind=engine, autoflush=False, expire_on_commit=False),
            tokens=TokenIssuer(
                settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
                expire_minutes=settings.token_expire_minutes,
            ),
        )

    def dispose(self) -> None:
        self.engine.dispose()


def get_context(request: Request) -> AppContext:
    return request.app.state.context


@contextmanager
def store_operation(db: Session, failure_message: str):
    """Roll back and re-raise store failures as InternalError(failure_message)."""
    try:
        yield
    except SQLAlchemyError:
        db.rollback()
        logger.exception(failure_message)
        raise InternalError(failure_message)


# One session per request, closed when the response is done.
def get_db(request: Request):
    db: Session = get_context(request).session_factory()
    try:
        yield db
    finally:
        db.close()

# pos_api/database.py

import math

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from pos_api.core.config import settings


def build_engine(url: str):
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={
                "check_same_thread": False,
                "timeout": settings.DB_LOCK_TIMEOUT_SECONDS,
            },
        )

        @event.listens_for(engine, "connect")
        def _enable_sqlite_fk(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(url, pool_pre_ping=True)


def bound_lock_wait(db: Session, seconds: float) -> None:
    """Cap how long statements in the session's current transaction may
    block on locks held by other connections.

    PostgreSQL scopes the limit to the transaction (SET LOCAL). SQLite and
    MySQL keep it on the connection, so each caller sets its own bound.
    """
    millis = max(int(seconds * 1000), 1)
    dialect = db.get_bind().dialect.name

    if dialect == "postgresql":
        db.execute(text(f"SET LOCAL lock_timeout = {millis}"))
        db.execute(text(f"SET LOCAL statement_timeout = {millis}"))
    elif dialect == "sqlite":
        db.execute(text(f"PRAGMA busy_timeout = {millis}"))
    elif dialect in ("mysql", "mariadb"):
        # whole seconds only
        db.execute(text(f"SET SESSION innodb_lock_wait_timeout = {max(math.ceil(seconds), 1)}"))


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

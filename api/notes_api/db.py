from contextlib import contextmanager
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker, scoped_session
import os


class Base(DeclarativeBase):
    pass


DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./dev.db")

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args)

def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


if engine.dialect.name == "sqlite":
    # SQLite ships with FK enforcement off; restrict/cascade rules depend on it
    @event.listens_for(engine, "connect")
    def _sqlite_fk_pragma(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()
        # built-in lower() only folds ASCII; match PostgreSQL for search
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)

SessionLocal = scoped_session(sessionmaker(autocommit=False, autoflush=False, bind=engine))

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """Atomic unit of work for multi-row writes.

    Commits when the block exits normally; any exception rolls back every
    write made through ``db`` inside the block and is re-raised unchanged.

        with transaction(db):
            store_notes.create(db, ...)
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise

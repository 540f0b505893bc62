# app/database.py

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import settings

# Dialects with a single-statement additive upsert for restocks
UPSERT_DIALECTS = ("sqlite", "postgresql", "mysql", "mariadb")


def check_upsert_support(dialect_name: str) -> None:
    if dialect_name not in UPSERT_DIALECTS:
        raise RuntimeError(
            f"Unsupported database dialect '{dialect_name}'; "
            f"DATABASE_URL must point to one of: {', '.join(UPSERT_DIALECTS)}"
        )


def _build_engine(url: str):
    # SQLite: share connections across threadpool workers, enforce FKs
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        pool_pre_ping=True,
    )


engine = _build_engine(settings.DATABASE_URL)
check_upsert_support(engine.dialect.name)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

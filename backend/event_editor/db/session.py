from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

"""Database session / engine configuration.

NOTE: In-memory SQLite (":memory:") creates a new database per connection which
breaks the threadpool-backed store. Use a file-based SQLite database (the
default) or a real server URL.
"""

class Base(DeclarativeBase):
    pass


def create_session_factory(database_url: str) -> sessionmaker:
    engine = create_engine(database_url, echo=False, future=True)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def create_tables(engine: Engine) -> None:
    # Import models to register metadata
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=engine)

"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy. The engine is the only shared handle; it pools
connections and is safe to use from multiple threads.
"""

from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from backend.app.core.config import settings


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections are opened with ``check_same_thread=False`` because
    FastAPI runs sync endpoints in a thread pool. Pool sizing only applies
    to server databases.
    """
    engine_kwargs: Dict[str, Any] = {"echo": echo, "future": True}
    
    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.db_connect_timeout,
        }
    else:
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow
        engine_kwargs["pool_pre_ping"] = True
        engine_kwargs["connect_args"] = {"connect_timeout": settings.db_connect_timeout}
    
    return create_engine(database_url, **engine_kwargs)


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(
        bind,
        expire_on_commit=False,
        autoflush=False,
    )


# Create engine
engine = build_engine(settings.database_url, echo=settings.db_echo)

# Create session factory
SessionLocal = build_session_factory(engine)

# Create declarative base for models
Base = declarative_base()

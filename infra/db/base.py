# infra/db/base.py
from __future__ import annotations
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy import create_engine
from pathlib import Path
import logging

from infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def database_url(db_path: Path | None = None) -> str:
    db_path = db_path or default_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path.as_posix()}"


def make_session_factory(db_url: str | None = None) -> sessionmaker:
    db_url = db_url or database_url()
    logger.info("Using SQLite database at: %s", db_url)
    engine = create_engine(db_url, echo=False, future=True)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)

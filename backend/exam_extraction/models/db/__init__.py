"""
Database models for exam question extraction.

Exports all SQLAlchemy ORM models and database utilities.
"""

from .base import Base, create_db_engine, get_session_maker, DATABASE_URL
from .document import Document
from .question import ExtractedQuestionRecord
from .correction import QuestionCorrection


def init_database(database_url: str, echo: bool = False):
    """
    Initialize database: create all tables.

    Args:
        database_url: SQLAlchemy connection string
        echo: Whether to echo SQL statements

    Returns:
        SQLAlchemy engine
    """
    engine = create_db_engine(database_url, echo=echo)
    Base.metadata.create_all(engine)
    return engine


__all__ = [
    # Base
    "Base",
    "create_db_engine",
    "get_session_maker",
    "init_database",
    "DATABASE_URL",
    # Models
    "Document",
    "ExtractedQuestionRecord",
    "QuestionCorrection",
]

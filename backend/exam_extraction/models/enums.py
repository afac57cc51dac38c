"""
Database enumeration types.

This module defines the enums used in the database schema for workflow
states and classifications.

Note: Extraction-specific enums (ModuleTag, FormattingQuality, etc.) remain
in extractors/base/models.py as they are domain logic, not persistence.
"""

from enum import Enum


class ProcessingStatus(str, Enum):
    """Processing status for uploaded documents."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class QuestionStatus(str, Enum):
    """Review status of an extracted question."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CorrectionType(str, Enum):
    """Kind of manual edit a reviewer made to an extracted question."""
    CONTENT = "content"
    ANSWER = "answer"
    FORMATTING = "formatting"
    CATEGORIZATION = "categorization"

from .enums import ProcessingStatus, QuestionStatus, CorrectionType

__all__ = ["ProcessingStatus", "QuestionStatus", "CorrectionType"]

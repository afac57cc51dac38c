from .pipeline import QuestionExtractionPipeline
from .processor import DocumentProcessor, ProcessingResult
from .http_handler import handle_parse_request

__all__ = [
    "QuestionExtractionPipeline",
    "DocumentProcessor",
    "ProcessingResult",
    "handle_parse_request",
]

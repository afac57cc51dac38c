from .llm_profiler import LLMDocumentProfiler, DocumentAnalysis, select_model

__all__ = ["LLMDocumentProfiler", "DocumentAnalysis", "select_model"]

from .scorer import QualityScorer

__all__ = ["QualityScorer"]

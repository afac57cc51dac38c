from .fast_discovery import FastQuestionDiscoverer, DiscoveryResult

__all__ = ["FastQuestionDiscoverer", "DiscoveryResult"]

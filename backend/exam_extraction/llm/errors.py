"""
Error taxonomy for AI completion calls.

Every failure surfaced by an LLM client is an AIServiceError. Two subclasses
are terminal for an extraction run and carry an actionable message for the
end user (RateLimitError, CreditsExhaustedError).
"""

from typing import Optional


class AIServiceError(Exception):
    """Generic failure of an AI completion call (non-2xx, transport, etc)."""

    code = "GENERIC_AI_ERROR"
    user_message = "AI service error. Please try again later."

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        # Set by the pipeline when the error aborts a run
        self.elapsed_seconds: Optional[float] = None


class RateLimitError(AIServiceError):
    """Upstream throttling (HTTP 429)."""

    code = "RATE_LIMIT"
    user_message = "Rate limit exceeded. Please try again in a moment."


class CreditsExhaustedError(AIServiceError):
    """Upstream quota exhaustion (HTTP 402)."""

    code = "CREDITS_EXHAUSTED"
    user_message = "AI credits exhausted. Please add credits to your workspace."


class MalformedResponseError(AIServiceError):
    """Successful response without the expected structured tool call."""

    code = "MALFORMED_RESPONSE"


def error_from_status(status_code: int, detail: str = "") -> AIServiceError:
    """ Map an HTTP status from the completion endpoint to an error. """
    if status_code == 429:
        return RateLimitError("RATE_LIMIT", status_code=status_code)
    if status_code == 402:
        return CreditsExhaustedError("CREDITS_EXHAUSTED", status_code=status_code)

    message = f"AI API error: {status_code}"
    if detail:
        message = f"{message} {detail[:200]}"
    return AIServiceError(message, status_code=status_code)

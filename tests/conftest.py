from __future__ import annotations

from collections import defaultdict, deque
from typing import Any, Callable, Iterator

import pytest
from pydantic import BaseModel
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from exam_extraction.core import QuestionExtractionPipeline
from exam_extraction.extractors.base import PipelineConfig
from exam_extraction.llm import BaseLLMClient, MalformedResponseError
from exam_extraction.models.db import Base

_ENV_VARS = (
    "LLM_PROVIDER",
    "LLM_API_KEY",
    "OPENAI_API_KEY",
    "LLM_BASE_URL",
    "OPENAI_ENDPOINT",
    "OPENAI_KEY",
    "OPENAI_DEPLOYMENT",
    "LLM_MODEL",
    "LLM_REASONING_MODEL",
    "LLM_BALANCED_MODEL",
    "LLM_ANALYSIS_MODEL",
    "CHUNK_SIZE",
    "CHUNK_OVERLAP",
    "EXTRACTION_MAX_ATTEMPTS",
    "EXTRACTION_MAX_WORKERS",
    "SIMILARITY_THRESHOLD",
    "ENABLE_SEMANTIC_DEDUP",
    "ENABLE_DISCOVERY",
)

DEFAULT_MODEL = "google/gemini-2.5-flash"
REASONING_MODEL = "google/gemini-2.5-pro"
ANALYSIS_MODEL = "google/gemini-2.5-flash-lite"

QUESTION_TEXTS = [
    "What is 25% of 80?",
    "Which word is a synonym for 'happy'?",
    "If a train travels 60 km in 45 minutes, what is its average speed in km/h?",
    "Which shape completes the sequence of rotating triangles?",
    "What is the probability of rolling two sixes with fair dice?",
    "Choose the word that is most nearly opposite in meaning to 'scarce'.",
]


@pytest.fixture(autouse=True)
def isolate_llm_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.setenv("LLM_API_KEY", "test-key")


class FakeLLMClient(BaseLLMClient):
    """
    Scripted tool-calling client.

    Each tool name has a queue of responses (dicts, models or exceptions).
    The last response of a queue is repeated once the queue runs dry.
    """

    def __init__(self) -> None:
        self.responses: dict[str, deque] = defaultdict(deque)
        self.calls: list[dict[str, Any]] = []

    def script(self, tool_name: str, *responses: Any) -> "FakeLLMClient":
        self.responses[tool_name].extend(responses)
        return self

    def calls_for(self, tool_name: str) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["tool_name"] == tool_name]

    def chat_completions_tool_call(
        self,
        model: str,
        messages: list[dict],
        tool_model: type[BaseModel],
        tool_name: str,
        tool_description: str = "",
        temperature: float = 0.0,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> BaseModel:
        self.calls.append({"model": model, "messages": messages, "tool_name": tool_name})

        queue = self.responses[tool_name]
        if not queue:
            raise MalformedResponseError(f"No {tool_name} tool call in AI response")
        response = queue.popleft() if len(queue) > 1 else queue[0]

        if isinstance(response, BaseException):
            raise response
        if isinstance(response, BaseModel):
            return response
        return tool_model.model_validate(response)


class FakeClock:
    def __init__(self, step: float = 0.5) -> None:
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


def mc_question(text: str, answer: str = "B", **overrides: Any) -> dict[str, Any]:
    """Tool-call payload for one well-formed question."""
    question = {
        "question": text,
        "option_a": "Fifteen",
        "option_b": "Twenty",
        "option_c": "Twenty-five",
        "option_d": "Thirty",
        "correct_answer": answer,
    }
    question.update(overrides)
    return question


def analysis(**overrides: Any) -> dict[str, Any]:
    """document_analysis payload for a clean document."""
    payload = {
        "formattingQuality": "good",
        "hasTable": False,
        "hasDiagrams": False,
        "estimatedQuestionCount": 4,
        "questionFormat": "numbered",
        "answerKeyLocation": "inline",
        "hasPageNumbers": False,
        "hasSections": False,
        "specialInstructions": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def fake_client() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture()
def sleeps() -> list[float]:
    return []


@pytest.fixture()
def make_pipeline(
    fake_client: FakeLLMClient, sleeps: list[float]
) -> Callable[..., QuestionExtractionPipeline]:
    def _make(config: PipelineConfig | None = None) -> QuestionExtractionPipeline:
        return QuestionExtractionPipeline(
            config or PipelineConfig(),
            client=fake_client,
            sleep=sleeps.append,
            clock=FakeClock(),
        )

    return _make


@pytest.fixture()
def clean_document_text() -> str:
    lines = []
    for i, text in enumerate(QUESTION_TEXTS[:4], start=1):
        lines.append(f"{i}.\t{text}\r\nA) Fifteen  B) Twenty  C) Twenty-five  D) Thirty\r\nAnswer: B")
    return "\r\n\r\n".join(lines)


@pytest.fixture()
def db_session() -> Iterator[Session]:
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    session = Session(engine)
    yield session
    session.close()
    engine.dispose()

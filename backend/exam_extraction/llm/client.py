"""LLM client abstraction supporting Azure OpenAI and OpenAI-compatible endpoints."""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Type, Optional, Dict

import openai
from pydantic import BaseModel, ValidationError
from openai import AzureOpenAI, OpenAI

from .errors import AIServiceError, MalformedResponseError, error_from_status

logger = logging.getLogger(__name__)


def build_tool(tool_model: Type[BaseModel], tool_name: str, description: str = "") -> Dict[str, Any]:
    """ Declare a function tool whose parameters are the model's JSON schema. """
    return {
        "type": "function",
        "function": {
            "name": tool_name,
            "description": description,
            "parameters": tool_model.model_json_schema(),
        },
    }


def parse_tool_call(completion: Any, tool_model: Type[BaseModel], tool_name: str) -> BaseModel:
    """
    Parse the single expected tool invocation out of a chat completion.

    Raises MalformedResponseError when the call is absent or its arguments
    do not satisfy the declared schema.
    """
    choices = getattr(completion, "choices", None) or []
    message = choices[0].message if choices else None
    tool_calls = getattr(message, "tool_calls", None) or []

    if not tool_calls:
        raise MalformedResponseError(f"No {tool_name} tool call in AI response")

    arguments = tool_calls[0].function.arguments
    try:
        return tool_model.model_validate_json(arguments)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Invalid {tool_name} arguments: {e.error_count()} validation errors"
        ) from e


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    def chat_completions_tool_call(
        self,
        model: str,
        messages: List[dict],
        tool_model: Type[BaseModel],
        tool_name: str,
        tool_description: str = "",
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> BaseModel:
        """
        Call LLM forcing a single tool invocation.

        Returns the tool arguments parsed into tool_model. Failures are
        raised as AIServiceError subclasses.
        """
        pass


class _OpenAIToolCallingClient(BaseLLMClient):
    """Shared tool-calling implementation on top of the openai SDK."""

    client: OpenAI

    def chat_completions_tool_call(
        self,
        model: str,
        messages: List[dict],
        tool_model: Type[BaseModel],
        tool_name: str,
        tool_description: str = "",
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> BaseModel:
        try:
            completion = self.client.chat.completions.create(
                model=model,
                messages=messages,
                tools=[build_tool(tool_model, tool_name, tool_description)],
                tool_choice={"type": "function", "function": {"name": tool_name}},
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs
            )
        except openai.APIStatusError as e:
            logger.error(f"AI API error: {e.status_code} {e.message}")
            raise error_from_status(e.status_code, e.message) from e
        except openai.APIError as e:
            # Connection failures and timeouts carry no status
            raise AIServiceError(f"AI API error: {e}") from e

        return parse_tool_call(completion, tool_model, tool_name)


class AzureLLMClient(_OpenAIToolCallingClient):
    """Azure OpenAI client wrapper."""

    def __init__(self, azure_endpoint: str, api_key: str, api_version: str):
        self.client = AzureOpenAI(
            azure_endpoint=azure_endpoint,
            api_key=api_key,
            api_version=api_version
        )


class OpenAIClient(_OpenAIToolCallingClient):
    """OpenAI client wrapper (direct, or any OpenAI-compatible gateway)."""

    def __init__(self, api_key: str, base_url: Optional[str] = None):
        self.client = OpenAI(api_key=api_key, base_url=base_url)

"""Build the LLM client selected by a stage config."""

from .client import BaseLLMClient, AzureLLMClient, OpenAIClient

# Settings each provider cannot run without, with the env vars that fill them
_REQUIRED_SETTINGS = {
    "azure": {
        "llm_endpoint": "OPENAI_ENDPOINT",
        "llm_api_key": "OPENAI_KEY",
        "llm_model": "OPENAI_DEPLOYMENT",
    },
    "openai": {
        "llm_api_key": "LLM_API_KEY",
        "llm_model": "LLM_MODEL",
    },
}


def create_llm_client(config) -> BaseLLMClient:
    """
    Create the client for config.llm_provider ("azure" or "openai").

    Raises ValueError for an unknown provider or missing settings.
    """
    provider = (config.llm_provider or "").lower()

    if provider not in _REQUIRED_SETTINGS:
        raise ValueError(
            f"Unknown LLM provider: {provider}. Available: {', '.join(_REQUIRED_SETTINGS)}"
        )

    missing = [
        env_var for attr, env_var in _REQUIRED_SETTINGS[provider].items()
        if not getattr(config, attr, None)
    ]
    if missing:
        raise ValueError(f"{provider} provider is missing settings: {', '.join(missing)}")

    if provider == "azure":
        return AzureLLMClient(
            azure_endpoint=config.llm_endpoint,
            api_key=config.llm_api_key,
            api_version=config.llm_api_version
        )
    return OpenAIClient(api_key=config.llm_api_key, base_url=config.llm_base_url)

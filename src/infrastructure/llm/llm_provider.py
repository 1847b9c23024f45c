"""
Chat LLM providers - 2-model architecture.

Two LLM roles with different sampling behaviour:
  - Router: near-deterministic (t=0.1), used with structured output so the
            classification is constrained to the four specialist keys.
  - Chat:   more varied (t=0.7), answers in the selected agent's role.

Both are ``ChatOpenAI`` instances pointed at an OpenAI-compatible endpoint
(OpenRouter by default).
"""

from typing import Optional, Any
from langchain_openai import ChatOpenAI

from infrastructure.config import (
    ROUTER_MODEL,
    ROUTER_PROVIDER,
    ROUTER_TEMPERATURE,
    CHAT_MODEL,
    CHAT_PROVIDER,
    CHAT_TEMPERATURE,
    LLM_MAX_TOKENS,
    LLM_TIMEOUT_SECONDS,
    GROQ_BASE_URL,
    OPENROUTER_BASE_URL,
    get_api_key,
)


def _build_llm(
    model: str,
    provider: str,
    temperature: float,
    max_tokens: Optional[int] = LLM_MAX_TOKENS,
    **kwargs: Any,
) -> ChatOpenAI:
    """Internal factory - builds a ChatOpenAI for any supported provider."""
    llm_kwargs: dict[str, Any] = dict(
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=LLM_TIMEOUT_SECONDS,
        **kwargs,
    )

    if provider == "openrouter":
        llm_kwargs["openai_api_base"] = OPENROUTER_BASE_URL
        llm_kwargs["openai_api_key"] = get_api_key("openrouter")
    elif provider == "groq":
        llm_kwargs["openai_api_base"] = GROQ_BASE_URL
        llm_kwargs["openai_api_key"] = get_api_key("groq")
    elif provider == "openai":
        llm_kwargs["openai_api_key"] = get_api_key("openai")
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")

    return ChatOpenAI(**llm_kwargs)


def get_router_llm(temperature: float = ROUTER_TEMPERATURE, **kwargs: Any) -> ChatOpenAI:
    """LLM for agent classification (routing).

    Low temperature so identical requests route consistently.
    """
    return _build_llm(ROUTER_MODEL, ROUTER_PROVIDER, temperature=temperature, **kwargs)


def get_chat_llm(temperature: float = CHAT_TEMPERATURE, **kwargs: Any) -> ChatOpenAI:
    """LLM for user-facing agent replies."""
    return _build_llm(CHAT_MODEL, CHAT_PROVIDER, temperature=temperature, **kwargs)

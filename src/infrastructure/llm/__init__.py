"""
LLM provider wrappers — 2-model architecture.

  get_router_llm()  → low-temperature model (agent routing)
  get_chat_llm()    → higher-temperature model (agent replies)
"""

from .llm_provider import get_chat_llm, get_router_llm

__all__ = [
    "get_chat_llm",
    "get_router_llm",
]

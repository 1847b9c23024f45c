"""
Infrastructure layer - pure plumbing (LLM, config, logging, tracing).

No business logic here. Just clients and configuration loading.
"""

from .llm import get_chat_llm, get_router_llm
from .observability import observe, flush, get_langfuse

__all__ = [
    "get_chat_llm",
    "get_router_llm",
    "observe",
    "flush",
    "get_langfuse",
]

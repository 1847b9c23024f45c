"""
Agent prompt templates - router instruction, agent roles, request wrapper.

Prompts are fetched from LangFuse Prompt Management at runtime.
Local fallbacks are defined in 'agent_prompts.py'.
"""

from .agent_prompts import (
    LANGFUSE_PROMPT_NAMES,
    build_agent_prompt,
    build_agent_request_prompt,
    build_agent_system_prompt,
    build_router_prompt,
)

__all__ = [
    "LANGFUSE_PROMPT_NAMES",
    "build_agent_prompt",
    "build_agent_request_prompt",
    "build_agent_system_prompt",
    "build_router_prompt",
]

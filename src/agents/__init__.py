"""
SIA Garmen agent routing engine — the core agent module.

Public API:
    build_agent()              → ConversationOrchestrator (fully wired, ready to chat)
    ConversationOrchestrator   → owns the session, runs one turn per ``submit``
    TurnResult                 → outcome of a submitted message
    AgentRouter                → specialist classifier
    RoutingDecision            → routing result dataclass
    ResponseGenerator          → role-specific reply generation
    AgentKey / AGENTS          → agent identities and display profiles
"""

from .orchestrator import ConversationOrchestrator, TurnResult, build_agent
from .registry import AGENTS, SPECIALIST_KEYS, AgentKey, AgentProfile, get_profile
from .responder import ResponseGenerator
from .router import AgentRouter, RoutingDecision
from .schemas import ConversationMessage, Role

__all__ = [
    "AGENTS",
    "SPECIALIST_KEYS",
    "AgentKey",
    "AgentProfile",
    "AgentRouter",
    "ConversationMessage",
    "ConversationOrchestrator",
    "ResponseGenerator",
    "Role",
    "RoutingDecision",
    "TurnResult",
    "build_agent",
    "get_profile",
]

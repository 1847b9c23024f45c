"""
Conversation schemas.

Dataclasses for chat messages plus the ``Clock`` protocol the session uses
to stamp them.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Protocol

from agents.registry import AgentKey


class Role(str, Enum):
    """Who produced a message."""

    USER = "user"
    AGENT = "agent"
    SYSTEM = "system"


@dataclass(frozen=True)
class ConversationMessage:
    """
    A single entry of the session log.

    Immutable once created; only ever appended, never edited or removed.
    """
    id: str
    role: Role
    content: str
    timestamp: datetime
    agent: Optional[AgentKey] = None  # originating agent (None for user input)

    def as_history_line(self) -> str:
        """Render as ``"<role>: <content>"`` for the generator's context window."""
        return f"{self.role.value}: {self.content}"

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "agent": self.agent.value if self.agent else None,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ConversationMessage":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            role=Role(data["role"]),
            content=data["content"],
            agent=AgentKey(data["agent"]) if data.get("agent") else None,
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


class Clock(Protocol):
    """Time source used to stamp messages (swappable in tests)."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time in the local timezone."""

    def now(self) -> datetime:
        return datetime.now().astimezone()

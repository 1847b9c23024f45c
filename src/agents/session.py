"""
Session state — the in-memory conversation log for one chat session.

Holds the insertion-ordered message log, the active agent pointer and the
busy flag. Nothing is persisted; the state lives as long as the process.
Only the orchestrator mutates it.
"""

import uuid
from typing import List, Optional, Tuple

from loguru import logger

from agents.registry import AgentKey
from agents.schemas import Clock, ConversationMessage, Role, SystemClock

WELCOME_MESSAGE = (
    "Selamat datang di SIA Manufaktur Garmen. Saya Agen Utama. Apa yang bisa "
    "saya bantu? (Contoh: \"Buatkan invoice penjualan\", \"Berapa HPP batch A?\", "
    "\"Cek stok kain\")"
)


class SessionState:
    """
    Append-only message log plus the active agent and busy flag.

    Timestamps never go backwards: if the clock reports an earlier time
    than the last message, the last message's time is reused.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        welcome: Optional[str] = WELCOME_MESSAGE,
    ) -> None:
        self.session_id = uuid.uuid4().hex
        self.current_agent: AgentKey = AgentKey.MAIN
        self.busy = False
        self._clock = clock or SystemClock()
        self._messages: List[ConversationMessage] = []

        if welcome:
            self.append(Role.SYSTEM, welcome, agent=AgentKey.MAIN)

    @property
    def messages(self) -> Tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def append(
        self,
        role: Role,
        content: str,
        agent: Optional[AgentKey] = None,
    ) -> ConversationMessage:
        """Create, stamp and append a message; returns it."""
        ts = self._clock.now()
        if self._messages and ts < self._messages[-1].timestamp:
            ts = self._messages[-1].timestamp

        message = ConversationMessage(
            id=uuid.uuid4().hex,
            role=role,
            content=content,
            agent=agent,
            timestamp=ts,
        )
        self._messages.append(message)
        logger.debug(
            "Appended {} message ({} chars) to session {}",
            role.value, len(content), self.session_id,
        )
        return message

    def history(self, k: int) -> List[str]:
        """The last ``k`` messages as ``"role: content"`` lines, oldest first."""
        if k <= 0:
            return []
        return [m.as_history_line() for m in self._messages[-k:]]

    def to_dict(self) -> dict:
        """Snapshot for the presentation layer."""
        return {
            "session_id": self.session_id,
            "current_agent": self.current_agent.value,
            "busy": self.busy,
            "messages": [m.to_dict() for m in self._messages],
        }

"""
Conversation Orchestrator - main execution loop.

Flow for one submitted message:
  1. Reject empty input or input arriving while a turn is in flight.
  2. Log the user message and take the rolling history window.
  3. Route the message (router LLM → RoutingDecision).
  4. Switch the active agent; announce the switch when it is visible.
  5. Generate the reply in the target agent's role (chat LLM).
  6. Log the reply, tagged with the agent that produced it.

Failures never escape ``submit``: they end up as system messages in the
log, and the busy flag is always released.
"""

from loguru import logger
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from agents.registry import AGENTS, AgentKey, AgentProfile
from agents.responder import ResponseGenerator
from agents.router import AgentRouter, RoutingDecision
from agents.schemas import Clock, ConversationMessage, Role
from agents.session import SessionState
from infrastructure.config import HISTORY_WINDOW
from infrastructure.observability import (
    observe,
    update_current_trace,
    flush,
)

SYSTEM_ERROR_MESSAGE = "Maaf, terjadi kesalahan pada sistem agen."


@dataclass
class TurnResult:
    """
    Outcome of one ``submit`` call.

    Attributes:
        accepted: False when the input was rejected (empty or busy).
        decision: Routing decision for the turn (None if rejected or routing crashed).
        messages: Messages appended during this turn, in order.
        latency_ms: End-to-end processing time.
    """

    accepted: bool
    decision: Optional[RoutingDecision] = None
    messages: List[ConversationMessage] = field(default_factory=list)
    latency_ms: int = 0


class ConversationOrchestrator:
    """
    Owns the session and sequences router → notice → responder per message.

    Dependencies (injected via '__init__'):
        router     - AgentRouter (classify)
        responder  - ResponseGenerator (generate)
        clock      - optional Clock for message timestamps
    """

    def __init__(
        self,
        router: AgentRouter,
        responder: ResponseGenerator,
        history_window: int = HISTORY_WINDOW,
        clock: Optional[Clock] = None,
    ) -> None:
        self.router = router
        self.responder = responder
        self.history_window = history_window
        self._state = SessionState(clock=clock)

    # read accessors (presentation layer)

    @property
    def messages(self) -> Tuple[ConversationMessage, ...]:
        return self._state.messages

    @property
    def current_agent(self) -> AgentKey:
        return self._state.current_agent

    @property
    def current_profile(self) -> AgentProfile:
        return AGENTS[self._state.current_agent]

    @property
    def busy(self) -> bool:
        return self._state.busy

    @property
    def session_id(self) -> str:
        return self._state.session_id

    def snapshot(self) -> Dict[str, Any]:
        """Serializable view of the whole session."""
        return self._state.to_dict()

    # mutators

    def select_agent(self, agent: AgentKey) -> None:
        """Manually switch the active agent (no message is logged)."""
        self._state.current_agent = AgentKey(agent)
        logger.info("Active agent manually set to {}", self._state.current_agent.value)

    # public entry point

    @observe(name="agent_turn")
    async def submit(self, user_text: str) -> TurnResult:
        """
        Process one user message through the routing pipeline.

        Returns a not-accepted ``TurnResult`` without touching the session
        when the text is blank or another turn is still running.
        """
        if not user_text or not user_text.strip():
            return TurnResult(accepted=False)
        if self._state.busy:
            logger.info("Submission dropped: a turn is already in progress")
            return TurnResult(accepted=False)

        t0 = time.time()
        start = len(self._state)

        update_current_trace(session_id=self._state.session_id, tags=["sia-agent"])

        previous_agent = self._state.current_agent
        history = self._state.history(self.history_window)
        self._state.append(Role.USER, user_text)

        self._state.busy = True
        decision: Optional[RoutingDecision] = None
        try:
            # Step 1: Route
            decision = await self._route(user_text)
            logger.info(
                "Route: {} (fallback={}) - {}",
                decision.target_agent.value,
                decision.fallback,
                decision.reason,
            )

            # Step 2: Switch agent, announce when visible
            self._state.current_agent = decision.target_agent
            self._announce(decision, previous_agent)

            # Step 3: Generate reply
            reply = await self.responder.generate(decision.target_agent, user_text, history)
            self._state.append(Role.AGENT, reply, agent=decision.target_agent)

        except Exception:
            logger.exception("Agent turn failed")
            self._state.append(Role.SYSTEM, SYSTEM_ERROR_MESSAGE, agent=AgentKey.MAIN)
        finally:
            self._state.busy = False

        latency_ms = int((time.time() - t0) * 1000)
        update_current_trace(
            metadata={
                "agent": self._state.current_agent.value,
                "routing_fallback": decision.fallback if decision else None,
                "latency_ms": latency_ms,
            },
        )

        return TurnResult(
            accepted=True,
            decision=decision,
            messages=list(self._state.messages[start:]),
            latency_ms=latency_ms,
        )

    # internal steps

    async def _route(self, user_text: str) -> RoutingDecision:
        """Classify, treating a crashing router like a failed routing call."""
        try:
            return await self.router.classify(user_text)
        except Exception as exc:
            logger.error("Router raised instead of falling back: {}", exc)
            return RoutingDecision.routing_failed()

    def _announce(self, decision: RoutingDecision, previous_agent: AgentKey) -> None:
        """Log a system notice for a routing failure or a visible agent switch."""
        if decision.fallback:
            self._state.append(Role.SYSTEM, f"⚠️ {decision.reason}", agent=AgentKey.MAIN)
            return

        target = decision.target_agent
        if target != AgentKey.MAIN and target != previous_agent:
            self._state.append(
                Role.SYSTEM,
                f"🔀 Mengalihkan ke **{AGENTS[target].name}**: {decision.reason}",
                agent=AgentKey.MAIN,
            )

    def close(self) -> None:
        """Flush pending traces (call before process exit)."""
        flush()


# Factory: build a fully-wired orchestrator from config


def build_agent(
    router_llm: Optional[Any] = None,
    chat_llm: Optional[Any] = None,
) -> ConversationOrchestrator:
    """
    Convenience factory that constructs and wires all components.

    Reads config / env for API keys. Pre-built LLMs can be passed in to
    skip provider construction.

    Returns:
        A fully initialised ``ConversationOrchestrator``.
    """
    from dotenv import load_dotenv

    load_dotenv()

    # Eagerly init LangFuse so child spans are captured
    from infrastructure.observability import get_langfuse

    get_langfuse()

    from infrastructure.llm import get_chat_llm, get_router_llm

    router_llm = router_llm or get_router_llm()
    chat_llm = chat_llm or get_chat_llm()

    logger.info("LLM models loaded:")
    logger.info("   Router : {}", getattr(router_llm, "model_name", getattr(router_llm, "model", "?")))
    logger.info("   Chat   : {}", getattr(chat_llm, "model_name", getattr(chat_llm, "model", "?")))

    return ConversationOrchestrator(
        router=AgentRouter(router_llm),
        responder=ResponseGenerator(chat_llm),
    )

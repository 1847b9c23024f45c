"""
Agent Router — LLM-based classification into one of four specialist agents.

Takes a raw user message and returns a ``RoutingDecision`` telling the
orchestrator which agent should answer and why. The LLM call uses
structured output constrained to the specialist keys; MAIN is never a
classifier output, only the fallback when routing fails.
"""

from dataclasses import dataclass
from typing import Any, Literal

from loguru import logger
from pydantic import BaseModel, Field

from agents.prompts.agent_prompts import build_router_prompt
from agents.registry import AgentKey, SPECIALIST_KEYS
from infrastructure.observability import observe, update_current_observation

ROUTING_FAILED_REASON = "Gagal melakukan routing otomatis."


class RouterOutput(BaseModel):
    """Schema the router LLM must fill (one target, never MAIN)."""

    targetAgent: Literal[
        "SALES_AND_REVENUE",
        "PURCHASING_AND_INVENTORY",
        "FINANCIAL_REPORTING",
        "MANUFACTURING_COST_ACCOUNTING",
    ] = Field(description="The enum key of the target sub-agent.")
    reason: str = Field(description="A brief explanation of why this agent was selected.")


@dataclass(frozen=True)
class RoutingDecision:
    """
    Output of the router.

    Attributes:
        target_agent: Agent that should answer.
        reason: Short human-readable justification.
        fallback: True when routing failed and MAIN was used by default.
    """

    target_agent: AgentKey
    reason: str
    fallback: bool = False

    @classmethod
    def routing_failed(cls) -> "RoutingDecision":
        return cls(target_agent=AgentKey.MAIN, reason=ROUTING_FAILED_REASON, fallback=True)


class AgentRouter:
    """
    Routes user requests to a specialist agent.

    Uses an LLM call with structured output to classify the request.
    Falls back to MAIN on any error; ``classify`` never raises.
    """

    def __init__(self, llm: Any) -> None:
        """
        Args:
            llm: A LangChain chat model supporting ``with_structured_output``
                 (normally from ``get_router_llm()``).
        """
        self.llm = llm
        self._structured = None

    @observe(name="router", as_type="generation")
    async def classify(self, user_message: str) -> RoutingDecision:
        """Classify ``user_message`` into exactly one specialist agent."""
        update_current_observation(input=user_message[:1000], model=self._model_name())

        try:
            messages = [
                {"role": "system", "content": build_router_prompt()},
                {"role": "user", "content": user_message},
            ]
            raw = await self._structured_llm().ainvoke(messages)
            decision = self._to_decision(raw)
        except Exception as exc:
            logger.error("Routing Error: {}", exc)
            return RoutingDecision.routing_failed()

        update_current_observation(
            output=f"{decision.target_agent.value}: {decision.reason}"[:500],
        )
        return decision

    # ── helpers ───────────────────────────────────────────────

    def _structured_llm(self) -> Any:
        if self._structured is None:
            self._structured = self.llm.with_structured_output(RouterOutput)
        return self._structured

    @staticmethod
    def _to_decision(raw: Any) -> RoutingDecision:
        """Validate the structured payload; raises on anything malformed."""
        if raw is None:
            raise ValueError("Router returned no structured output")
        if not isinstance(raw, RouterOutput):
            raw = RouterOutput.model_validate(raw)

        target = AgentKey(raw.targetAgent)
        if target not in SPECIALIST_KEYS:
            raise ValueError(f"Router selected a non-specialist agent: {target.value}")
        return RoutingDecision(target_agent=target, reason=raw.reason.strip())

    def _model_name(self) -> str:
        """Extract model name from the LLM for LangFuse metadata."""
        if hasattr(self.llm, "model_name"):
            return self.llm.model_name
        if hasattr(self.llm, "model"):
            return self.llm.model
        return "unknown"

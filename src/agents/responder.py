"""
Response Generator — produces an agent's reply in its role.

The reply prompt is the agent's role instruction plus a rolling history
window and the new request. Errors and empty completions are turned into
fixed Indonesian messages; ``generate`` never raises.
"""

from typing import Any, Sequence

from loguru import logger

from agents.prompts.agent_prompts import build_agent_prompt
from agents.registry import AgentKey
from infrastructure.observability import observe, update_current_observation

EMPTY_RESPONSE_MESSAGE = "Maaf, saya tidak dapat menghasilkan respon saat ini."
GENERATION_ERROR_MESSAGE = "Terjadi kesalahan saat memproses permintaan Anda."


class ResponseGenerator:
    """Generates replies for any agent with a single chat LLM."""

    def __init__(self, llm: Any) -> None:
        self.llm = llm

    @observe(name="agent_response", as_type="generation")
    async def generate(
        self,
        agent: AgentKey,
        user_message: str,
        history: Sequence[str],
    ) -> str:
        """
        Generate the reply of ``agent`` to ``user_message``.

        Args:
            agent: Target agent; unknown keys get the generic role.
            user_message: The current request.
            history: Prior turns as ``"role: content"`` lines, oldest first.
        """
        try:
            system_prompt, user_prompt = build_agent_prompt(agent, user_message, history)
            update_current_observation(
                input=user_prompt[:1000],
                model=self._model_name(),
                metadata={"agent": getattr(agent, "value", str(agent))},
            )
            response = await self.llm.ainvoke(
                [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ]
            )
        except Exception as exc:
            logger.error("Generation Error: {}", exc)
            return GENERATION_ERROR_MESSAGE

        text = self._text(response)

        update_current_observation(
            output=text[:1000],
            usage=self._usage(response),
        )

        if not text:
            logger.warning("Agent {} returned an empty response", agent)
            return EMPTY_RESPONSE_MESSAGE
        return text

    # helpers

    @staticmethod
    def _text(response: Any) -> str:
        """Reply text from a message whose content is a string or a list of blocks."""
        content = response.content if hasattr(response, "content") else response
        if isinstance(content, str):
            return content.strip()
        if isinstance(content, list):
            parts = []
            for block in content:
                if isinstance(block, str):
                    parts.append(block)
                elif isinstance(block, dict) and block.get("type") == "text":
                    parts.append(block.get("text") or "")
            return "".join(parts).strip()
        return ""

    @staticmethod
    def _usage(response: Any) -> dict | None:
        """Token usage from the response metadata, if the provider reports it."""
        meta = getattr(response, "response_metadata", None) or {}
        token_usage = meta.get("token_usage") or meta.get("usage") or {}
        if not token_usage:
            return None
        return {
            "input": token_usage.get("prompt_tokens", 0),
            "output": token_usage.get("completion_tokens", 0),
            "total": token_usage.get("total_tokens", 0),
        }

    def _model_name(self) -> str:
        """Extract model name from the chat LLM for LangFuse metadata."""
        if hasattr(self.llm, "model_name"):
            return self.llm.model_name
        if hasattr(self.llm, "model"):
            return self.llm.model
        return "unknown"

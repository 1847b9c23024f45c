"""Shared fixtures -- fake LLMs, stub router/responder, stepping clock."""

import asyncio
from datetime import datetime, timedelta

import pytest
from langchain_core.messages import AIMessage

from agents.orchestrator import ConversationOrchestrator
from agents.registry import AgentKey
from agents.router import RoutingDecision


class FakeStructuredLLM:
    """What ``with_structured_output`` returns: records calls, replays a result."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.result


class FakeRouterLLM:
    """Chat model stand-in supporting structured output."""

    model_name = "fake-router"

    def __init__(self, result=None, error=None):
        self.structured = FakeStructuredLLM(result=result, error=error)
        self.schemas = []

    def with_structured_output(self, schema):
        self.schemas.append(schema)
        return self.structured


class FakeChatLLM:
    """Chat model stand-in returning a fixed ``AIMessage``."""

    model_name = "fake-chat"

    def __init__(self, content="Baik, berikut datanya.", error=None, response_metadata=None):
        self.content = content
        self.error = error
        self.response_metadata = response_metadata or {}
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.content, response_metadata=self.response_metadata)


class StubRouter:
    """Router stand-in; optionally waits on ``gate`` before answering."""

    def __init__(self, decision=None, error=None, gate=None):
        self.decisions = list(decision) if isinstance(decision, list) else [decision]
        self.error = error
        self.gate = gate
        self.calls = []

    async def classify(self, user_message):
        self.calls.append(user_message)
        await asyncio.sleep(0)  # yield like a real network call
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if len(self.decisions) > 1:
            return self.decisions.pop(0)
        return self.decisions[0]


class StubResponder:
    """Responder stand-in recording (agent, message, history) calls."""

    def __init__(self, reply="Baik, berikut datanya.", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate(self, agent, user_message, history):
        self.calls.append((agent, user_message, list(history)))
        if self.error is not None:
            raise self.error
        return self.reply


class SteppingClock:
    """Deterministic clock advancing by ``step`` on every read."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2024, 11, 4, 9, 0, 0)
        self.step = step

    def now(self):
        value = self.current
        self.current = self.current + self.step
        return value


def decision(agent, reason="cocok dengan domain agen"):
    return RoutingDecision(target_agent=agent, reason=reason)


@pytest.fixture
def sales_decision():
    return decision(AgentKey.SALES_AND_REVENUE, "contains faktur/pesanan keywords")


@pytest.fixture
def clock():
    return SteppingClock()


@pytest.fixture
def make_orchestrator(clock):
    """Factory: orchestrator wired to the given router/responder doubles."""

    def _make(router=None, responder=None, history_window=5):
        return ConversationOrchestrator(
            router=router or StubRouter(decision(AgentKey.SALES_AND_REVENUE)),
            responder=responder or StubResponder(),
            history_window=history_window,
            clock=clock,
        )

    return _make


@pytest.fixture
def gate():
    return asyncio.Event()

"""AgentRouter -- structured classification and routing-failure fallback."""

import pytest
from pydantic import ValidationError

from agents.registry import AgentKey, SPECIALIST_KEYS
from agents.router import ROUTING_FAILED_REASON, AgentRouter, RouterOutput, RoutingDecision

from conftest import FakeRouterLLM


class TestRouterOutputSchema:

    def test_enum_lists_only_the_four_specialists(self):
        schema = RouterOutput.model_json_schema()
        enum = schema["properties"]["targetAgent"]["enum"]
        assert sorted(enum) == sorted(k.value for k in SPECIALIST_KEYS)
        assert AgentKey.MAIN.value not in enum
        assert set(schema["required"]) == {"targetAgent", "reason"}

    def test_main_is_not_a_valid_target(self):
        with pytest.raises(ValidationError):
            RouterOutput(targetAgent="MAIN_ROUTER", reason="x")


class TestClassify:

    @pytest.mark.asyncio
    async def test_returns_structured_target_and_reason(self):
        llm = FakeRouterLLM(result=RouterOutput(
            targetAgent="SALES_AND_REVENUE", reason="Permintaan terkait faktur. "
        ))
        router = AgentRouter(llm)

        result = await router.classify("Buatkan invoice penjualan")

        assert result == RoutingDecision(
            target_agent=AgentKey.SALES_AND_REVENUE,
            reason="Permintaan terkait faktur.",
        )
        assert result.fallback is False

    @pytest.mark.asyncio
    async def test_sends_router_instruction_and_raw_message(self):
        llm = FakeRouterLLM(result={"targetAgent": "FINANCIAL_REPORTING", "reason": "neraca"})
        router = AgentRouter(llm)

        await router.classify("Tampilkan neraca bulan ini")

        assert llm.schemas == [RouterOutput]
        (messages,) = llm.structured.calls
        assert messages[0]["role"] == "system"
        assert "MANUFACTURING_COST_ACCOUNTING" in messages[0]["content"]
        assert "JANGAN pernah meneruskan permintaan ke lebih dari satu Sub-Agen" in messages[0]["content"]
        assert messages[1] == {"role": "user", "content": "Tampilkan neraca bulan ini"}

    @pytest.mark.asyncio
    async def test_accepts_dict_payload(self):
        llm = FakeRouterLLM(result={"targetAgent": "PURCHASING_AND_INVENTORY", "reason": "stok kain"})

        result = await AgentRouter(llm).classify("Cek stok kain")

        assert result.target_agent is AgentKey.PURCHASING_AND_INVENTORY
        assert result.reason == "stok kain"

    @pytest.mark.asyncio
    async def test_structured_llm_is_built_once(self):
        llm = FakeRouterLLM(result={"targetAgent": "SALES_AND_REVENUE", "reason": "r"})
        router = AgentRouter(llm)

        await router.classify("satu")
        await router.classify("dua")

        assert len(llm.schemas) == 1
        assert len(llm.structured.calls) == 2


class TestRoutingFailure:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "llm",
        [
            FakeRouterLLM(error=ConnectionError("network down")),
            FakeRouterLLM(result=None),
            FakeRouterLLM(result={"targetAgent": "MAIN_ROUTER", "reason": "x"}),
            FakeRouterLLM(result={"targetAgent": "HR", "reason": "x"}),
            FakeRouterLLM(result={"reason": "missing target"}),
            FakeRouterLLM(result="not json at all"),
        ],
        ids=["network", "empty", "main", "unknown-agent", "missing-field", "garbage"],
    )
    async def test_any_failure_defaults_to_main(self, llm):
        result = await AgentRouter(llm).classify("Berapa HPP batch A?")

        assert result.target_agent is AgentKey.MAIN
        assert result.reason == ROUTING_FAILED_REASON
        assert result.fallback is True

    @pytest.mark.asyncio
    async def test_structured_output_unsupported(self):
        class NoStructuredLLM:
            def with_structured_output(self, schema):
                raise NotImplementedError

        result = await AgentRouter(NoStructuredLLM()).classify("halo")

        assert result == RoutingDecision.routing_failed()

"""Agent registry and per-agent dashboard data."""

import pytest

from agents.registry import AGENTS, SPECIALIST_KEYS, AgentKey, get_profile, list_profiles
from services.dashboard_service import get_dashboard


class TestRegistry:

    def test_every_identity_has_exactly_one_profile(self):
        assert set(AGENTS) == set(AgentKey)
        assert all(profile.key is key for key, profile in AGENTS.items())

    def test_specialists_exclude_main(self):
        assert AgentKey.MAIN not in SPECIALIST_KEYS
        assert len(SPECIALIST_KEYS) == 4

    def test_profile_lookup_by_value(self):
        profile = get_profile("MANUFACTURING_COST_ACCOUNTING")
        assert profile.name == "Cost Accounting"
        assert profile.short_name == "Costing"
        assert profile.icon == "Factory"

    def test_sidebar_order_starts_with_main(self):
        assert list_profiles()[0].key is AgentKey.MAIN

    def test_profiles_are_immutable(self):
        with pytest.raises(AttributeError):
            AGENTS[AgentKey.MAIN].name = "x"

    def test_to_dict_uses_raw_key(self):
        data = AGENTS[AgentKey.SALES_AND_REVENUE].to_dict()
        assert data["key"] == "SALES_AND_REVENUE"
        assert data["name"] == "Sales & Revenue"


class TestDashboards:

    @pytest.mark.parametrize("key", list(AgentKey))
    def test_every_agent_has_a_dashboard(self, key):
        dashboard = get_dashboard(key)

        assert dashboard.agent is key
        assert dashboard.title == f"{AGENTS[key].name} Dashboard"
        assert dashboard.panels
        assert dashboard.to_dict()["agent"] == key.value

    def test_sales_dashboard_contents(self):
        panels = {p.title: p for p in get_dashboard(AgentKey.SALES_AND_REVENUE).panels}

        trend = panels["Tren Penjualan Mingguan"]
        assert trend.kind == "line_chart" and trend.wide
        assert [d["name"] for d in trend.data] == ["Sen", "Sel", "Rab", "Kam", "Jum", "Sab"]
        assert panels["Target Pendapatan"].data["progress"] == 0.85

    def test_cost_composition_totals(self):
        pie = get_dashboard(AgentKey.MANUFACTURING_COST_ACCOUNTING).panels[0]
        assert pie.kind == "pie_chart"
        assert sum(d["value"] for d in pie.data) == 90_000_000

    def test_unknown_agent_gets_main_placeholder(self):
        dashboard = get_dashboard("NOT_AN_AGENT")
        assert dashboard.agent is AgentKey.MAIN
        assert dashboard.panels[0].kind == "placeholder"

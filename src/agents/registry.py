"""
Agent Registry — the closed set of agent identities and their display metadata.

Five identities: the Main router (default / fallback) and four specialists.
Profiles are built once at import and never change at runtime.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Tuple


class AgentKey(str, Enum):
    """Agent identity. String-valued so it serialises as-is."""

    MAIN = "MAIN_ROUTER"
    SALES_AND_REVENUE = "SALES_AND_REVENUE"
    PURCHASING_AND_INVENTORY = "PURCHASING_AND_INVENTORY"
    FINANCIAL_REPORTING = "FINANCIAL_REPORTING"
    MANUFACTURING_COST_ACCOUNTING = "MANUFACTURING_COST_ACCOUNTING"


# The router may only ever pick one of these; MAIN is the fallback, not an output.
SPECIALIST_KEYS: Tuple[AgentKey, ...] = (
    AgentKey.SALES_AND_REVENUE,
    AgentKey.PURCHASING_AND_INVENTORY,
    AgentKey.FINANCIAL_REPORTING,
    AgentKey.MANUFACTURING_COST_ACCOUNTING,
)


@dataclass(frozen=True)
class AgentProfile:
    """
    Static descriptor consumed by the presentation layer.

    Attributes:
        key: Agent identity.
        name: Full display name ("Sales & Revenue").
        short_name: Compact label ("Sales").
        description: One-line scope description (Indonesian).
        icon: Lucide icon name.
        color: Text colour token.
        bg_gradient: Avatar gradient tokens.
    """

    key: AgentKey
    name: str
    short_name: str
    description: str
    icon: str
    color: str
    bg_gradient: str

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["key"] = self.key.value
        return data


AGENTS: Dict[AgentKey, AgentProfile] = {
    AgentKey.MAIN: AgentProfile(
        key=AgentKey.MAIN,
        name="SIA Manager",
        short_name="Manager",
        description="Router Pusat & Operasional",
        icon="Bot",
        color="text-slate-600",
        bg_gradient="from-slate-500 to-slate-700",
    ),
    AgentKey.SALES_AND_REVENUE: AgentProfile(
        key=AgentKey.SALES_AND_REVENUE,
        name="Sales & Revenue",
        short_name="Sales",
        description="Faktur, Pendapatan & Pesanan",
        icon="ShoppingCart",
        color="text-blue-600",
        bg_gradient="from-blue-500 to-blue-700",
    ),
    AgentKey.PURCHASING_AND_INVENTORY: AgentProfile(
        key=AgentKey.PURCHASING_AND_INVENTORY,
        name="Purchasing & Inventory",
        short_name="Inventory",
        description="Stok Bahan Baku & Supplier",
        icon="Activity",
        color="text-emerald-600",
        bg_gradient="from-emerald-500 to-emerald-700",
    ),
    AgentKey.MANUFACTURING_COST_ACCOUNTING: AgentProfile(
        key=AgentKey.MANUFACTURING_COST_ACCOUNTING,
        name="Cost Accounting",
        short_name="Costing",
        description="HPP, WIP & Biaya Produksi",
        icon="Factory",
        color="text-orange-600",
        bg_gradient="from-orange-500 to-orange-700",
    ),
    AgentKey.FINANCIAL_REPORTING: AgentProfile(
        key=AgentKey.FINANCIAL_REPORTING,
        name="Financial Reporting",
        short_name="Finance",
        description="Laporan Keuangan Formal",
        icon="FileText",
        color="text-violet-600",
        bg_gradient="from-violet-500 to-violet-700",
    ),
}

_missing = set(AgentKey) - set(AGENTS)
if _missing:
    raise RuntimeError(f"Agent registry is missing profiles for: {sorted(k.value for k in _missing)}")


def get_profile(key: AgentKey) -> AgentProfile:
    """Return the profile for ``key`` (accepts the raw string value too)."""
    return AGENTS[AgentKey(key)]


def list_profiles() -> list[AgentProfile]:
    """All profiles in sidebar order (Main first)."""
    return list(AGENTS.values())

"""
Dashboard data — mock datasets shown next to the chat for the active agent.

Data only: the presentation layer decides how a panel ``kind`` is drawn
(line / bar / pie chart, list, metric, alert, documents, placeholder).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from agents.registry import AGENTS, AgentKey


@dataclass(frozen=True)
class DashboardPanel:
    title: str
    kind: str
    data: Any
    wide: bool = False  # spans both grid columns

    def to_dict(self) -> Dict:
        return {"title": self.title, "kind": self.kind, "data": self.data, "wide": self.wide}


@dataclass(frozen=True)
class Dashboard:
    agent: AgentKey
    title: str
    subtitle: str
    panels: List[DashboardPanel] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "agent": self.agent.value,
            "title": self.title,
            "subtitle": self.subtitle,
            "panels": [p.to_dict() for p in self.panels],
        }


DATA_SALES = [
    {"name": "Sen", "value": 4000},
    {"name": "Sel", "value": 3000},
    {"name": "Rab", "value": 5000},
    {"name": "Kam", "value": 2780},
    {"name": "Jum", "value": 6890},
    {"name": "Sab", "value": 2390},
]

DATA_COST = [
    {"name": "Bahan Baku", "value": 45_000_000, "color": "#0088FE"},
    {"name": "Tenaga Kerja", "value": 30_000_000, "color": "#00C49F"},
    {"name": "Overhead", "value": 15_000_000, "color": "#FFBB28"},
]

DATA_INVENTORY = [
    {"name": "Kain Katun", "stok": 1200},
    {"name": "Benang Poliester", "stok": 800},
    {"name": "Kancing", "stok": 5000},
    {"name": "Resleting", "stok": 2000},
]

DATA_FINANCE = [
    {"name": "Q1", "revenue": 120, "profit": 40},
    {"name": "Q2", "revenue": 150, "profit": 55},
    {"name": "Q3", "revenue": 180, "profit": 70},
    {"name": "Q4", "revenue": 200, "profit": 90},
]


def _sales() -> List[DashboardPanel]:
    return [
        DashboardPanel("Tren Penjualan Mingguan", "line_chart", DATA_SALES, wide=True),
        DashboardPanel(
            "Order Terbaru",
            "list",
            [
                {"invoice": f"INV-{n}", "customer": "PT Maju Mundur", "status": "Lunas"}
                for n in (101, 102, 103)
            ],
        ),
        DashboardPanel(
            "Target Pendapatan",
            "metric",
            {"value": "Rp 1.2M", "label": "Pencapaian", "progress": 0.85},
        ),
    ]


def _cost_accounting() -> List[DashboardPanel]:
    return [
        DashboardPanel("Komposisi Biaya Produksi (Batch A-001)", "pie_chart", DATA_COST, wide=True),
        DashboardPanel(
            "WIP Valuation",
            "list",
            [
                {"department": "Cutting Dept", "amount": 15_000_000},
                {"department": "Sewing Dept", "amount": 42_500_000},
                {"department": "Finishing Dept", "amount": 8_200_000},
            ],
        ),
        DashboardPanel(
            "Job Order Status",
            "list",
            [
                {"job": "#2201", "status": "On Track", "level": "ok"},
                {"job": "#2204", "status": "Pending Material", "level": "warning"},
            ],
        ),
    ]


def _purchasing() -> List[DashboardPanel]:
    return [
        DashboardPanel("Stok Bahan Baku Utama", "bar_chart", DATA_INVENTORY, wide=True),
        DashboardPanel(
            "Peringatan Stok Rendah",
            "alert",
            {
                "item": "Benang Nylon Putih",
                "message": "Stok sisa 20 roll. Min: 50. Segera buat PO.",
                "stock": 20,
                "minimum": 50,
            },
        ),
        DashboardPanel(
            "Supplier Aktif",
            "list",
            [
                {"supplier": "PT Tekstil Nusantara", "grade": "A"},
                {"supplier": "CV Benang Jaya", "grade": "B"},
                {"supplier": "Global Accessories Ltd", "grade": "A"},
            ],
        ),
    ]


def _financial_reporting() -> List[DashboardPanel]:
    return [
        DashboardPanel("Kinerja Keuangan (Miliar Rp)", "bar_chart", DATA_FINANCE, wide=True),
        DashboardPanel(
            "Dokumen Tersedia",
            "documents",
            ["Laporan_Laba_Rugi_Q3.pdf", "Neraca_Saldo_Nov2024.xlsx"],
        ),
    ]


def _main() -> List[DashboardPanel]:
    return [
        DashboardPanel(
            "Dashboard Utama",
            "placeholder",
            "Silakan mulai percakapan untuk mengaktifkan agen spesialis "
            "(Sales, Inventory, Costing, atau Finance).",
            wide=True,
        ),
    ]


_PANEL_BUILDERS: Dict[AgentKey, Callable[[], List[DashboardPanel]]] = {
    AgentKey.MAIN: _main,
    AgentKey.SALES_AND_REVENUE: _sales,
    AgentKey.PURCHASING_AND_INVENTORY: _purchasing,
    AgentKey.FINANCIAL_REPORTING: _financial_reporting,
    AgentKey.MANUFACTURING_COST_ACCOUNTING: _cost_accounting,
}

_missing = set(AgentKey) - set(_PANEL_BUILDERS)
if _missing:
    raise RuntimeError(f"No dashboard defined for: {sorted(k.value for k in _missing)}")


def get_dashboard(agent: AgentKey) -> Dashboard:
    """Dashboard for ``agent``; unknown keys get the Main placeholder."""
    try:
        key = AgentKey(agent)
    except ValueError:
        key = AgentKey.MAIN
    return Dashboard(
        agent=key,
        title=f"{AGENTS[key].name} Dashboard",
        subtitle="Live data overview & document status",
        panels=_PANEL_BUILDERS[key](),
    )

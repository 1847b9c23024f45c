"""
Prompt templates for the SIA Garmen agents.

Prompts are fetched from **LangFuse Prompt Management** at runtime.
If a prompt hasn't been created in LangFuse yet, the local fallback
(defined below) is used instead - so the system works out-of-the-box.

To manage prompts via LangFuse Cloud:
  1. Open LangFuse → Prompts → + New Prompt
  2. Create prompts with the names listed in the LANGFUSE_PROMPT_NAMES dict
  3. Use {{variable}} (double-curly Mustache syntax) for template variables
  4. Set a version to "production" to make it active

Prompt roles:
  1. ROUTER     - classifies a request into one of four specialist agents
  2. AGENT ROLE - one persona per agent (generic fallback for unknown keys)
  3. REQUEST    - rolling history + the new request, sent to the chat model
"""

from typing import Dict, Sequence

from agents.registry import AgentKey
from infrastructure.observability import fetch_prompt


# LangFuse prompt names → create these in your dashboard


LANGFUSE_PROMPT_NAMES = {
    "router_system":   "sia-router-system",
    "agent_request":   "sia-agent-request",
    "agent_generic":   "sia-agent-generic",
    AgentKey.SALES_AND_REVENUE:             "sia-agent-sales-revenue",
    AgentKey.PURCHASING_AND_INVENTORY:      "sia-agent-purchasing-inventory",
    AgentKey.FINANCIAL_REPORTING:           "sia-agent-financial-reporting",
    AgentKey.MANUFACTURING_COST_ACCOUNTING: "sia-agent-cost-accounting",
}


# 1. ROUTER - Agent classification (fallback)


_ROUTER_SYSTEM_FALLBACK = """\
Sebagai Agen Utama dalam Sistem Informasi Akuntansi (SIA) Manufaktur Garmen, peran Anda adalah menjadi router cerdas (Manage Accounting Operations). Anda harus secara konsisten dan akurat mengarahkan permintaan pengguna ke salah satu dari empat Sub-Agen spesialis di bawah.

DEFINISI SUB-AGEN SPESIALIS:

1.  SALES_AND_REVENUE: Memproses pesanan penjualan, menghasilkan faktur, dan melacak pendapatan real-time.
2.  PURCHASING_AND_INVENTORY: Mengelola pengadaan bahan baku, memantau tingkat persediaan, dan menyediakan informasi pemasok.
3.  FINANCIAL_REPORTING: Menghasilkan laporan keuangan formal (Laba Rugi, Neraca, Arus Kas) dan laporan analitis.
4.  MANUFACTURING_COST_ACCOUNTING: Menghitung Harga Pokok Produksi (HPP) garmen per job order, melacak biaya (bahan baku, tenaga kerja, overhead), dan menilai persediaan WIP/Barang Jadi.

LOGIKA PERUTEAN (Wajib Dipatuhi):

*   Jika permintaan terkait FAKTUR, PESANAN PENJUALAN, atau PELACAKAN PENDAPATAN, teruskan ke: SALES_AND_REVENUE.
*   Jika permintaan terkait PEMBELIAN BAHAN BAKU, TINGKAT STOK/INVENTARIS, atau INFORMASI PEMASOK, teruskan ke: PURCHASING_AND_INVENTORY.
*   Jika permintaan terkait LAPORAN LABA RUGI, NERACA, ARUS KAS, atau KEPATUHAN AKUNTANSI, teruskan ke: FINANCIAL_REPORTING.
*   Jika permintaan terkait PERHITUNGAN HPP, BIAYA PRODUKSI, PENGGUNAAN BAHAN BAKU, atau PENILAIAN WIP, teruskan ke: MANUFACTURING_COST_ACCOUNTING.
*   JANGAN pernah meneruskan permintaan ke lebih dari satu Sub-Agen.

Hasilkan output JSON yang berisi kunci agen target dan alasan singkat.
"""


# 2. AGENT ROLES - one persona per identity (fallbacks)


_AGENT_ROLE_FALLBACKS: Dict[AgentKey, str] = {
    AgentKey.SALES_AND_REVENUE: (
        "Anda adalah Agen Penjualan & Pendapatan. Tugas Anda: Membuat invoice, "
        "cek status pesanan, dan rekap pendapatan. Bersikaplah profesional dan "
        "ringkas. Gunakan format tabel jika menyajikan data angka."
    ),
    AgentKey.PURCHASING_AND_INVENTORY: (
        "Anda adalah Agen Pembelian & Persediaan. Tugas Anda: Cek stok kain/benang, "
        "buat PO (Purchase Order) ke supplier, dan manajemen gudang. Berikan "
        "estimasi level stok secara simulasi."
    ),
    AgentKey.FINANCIAL_REPORTING: (
        "Anda adalah Agen Pelaporan Keuangan. Tugas Anda: Menyajikan Laba Rugi, "
        "Neraca, dan Arus Kas. Gunakan bahasa akuntansi formal (PSAK)."
    ),
    AgentKey.MANUFACTURING_COST_ACCOUNTING: (
        "Anda adalah Agen Akuntansi Biaya Manufaktur. Fokus: Job Order Costing, "
        "HPP, Overhead Pabrik, dan WIP. Jelaskan perhitungan biaya dengan detail."
    ),
}

# MAIN has no dedicated persona; it shares the generic one.
_AGENT_GENERIC_FALLBACK = "Anda adalah asisten umum."


# 3. REQUEST - history block + new request (fallback)


_AGENT_REQUEST_FALLBACK = """\
Context History:
{history}

User Request: {user_message}"""


# Prompt builders - fetch from LangFuse, fall back to local


def build_router_prompt() -> str:
    """Return the router system instruction."""
    return fetch_prompt(
        LANGFUSE_PROMPT_NAMES["router_system"],
        fallback=_ROUTER_SYSTEM_FALLBACK,
    )


def build_agent_system_prompt(agent: AgentKey) -> str:
    """Return the role instruction for ``agent`` (generic for unknown keys)."""
    if agent in _AGENT_ROLE_FALLBACKS:
        return fetch_prompt(
            LANGFUSE_PROMPT_NAMES[agent],
            fallback=_AGENT_ROLE_FALLBACKS[agent],
        )
    return fetch_prompt(
        LANGFUSE_PROMPT_NAMES["agent_generic"],
        fallback=_AGENT_GENERIC_FALLBACK,
    )


def build_agent_request_prompt(user_message: str, history: Sequence[str]) -> str:
    """Return the user prompt: rolling history followed by the new request."""
    return fetch_prompt(
        LANGFUSE_PROMPT_NAMES["agent_request"],
        fallback=_AGENT_REQUEST_FALLBACK,
        history="\n".join(history),
        user_message=user_message,
    )


def build_agent_prompt(
    agent: AgentKey,
    user_message: str,
    history: Sequence[str],
) -> tuple[str, str]:
    """Return (system_prompt, user_prompt) for an agent reply."""
    return (
        build_agent_system_prompt(agent),
        build_agent_request_prompt(user_message, history),
    )

"""
Application configuration - loads from YAML param files.

CONFIGURATION POLICY:
====================
Configuration is loaded from config/param.yaml.
Secrets (API keys) live ONLY in .env and are loaded via os.getenv().

Supports multiple LLM providers through an OpenAI-compatible API:
- OpenRouter (unified multi-provider access, default)
- OpenAI (direct)
- Groq (direct)
"""

from pathlib import Path
from typing import Any, Dict, Optional
import os
import yaml
from loguru import logger

# ========================================
# Project Paths
# ========================================

# Get project root (parent of src/infrastructure/)
_PROJECT_ROOT = Path(__file__).parent.parent.parent
_CONFIG_DIR = _PROJECT_ROOT / "config"

# ========================================
# YAML Config Loading
# ========================================

def _load_yaml(filename: str) -> Dict[str, Any]:
    """Load a YAML config file."""
    filepath = _CONFIG_DIR / filename
    if not filepath.exists():
        return {}
    with open(filepath, "r") as f:
        return yaml.safe_load(f) or {}


def _get_nested(d: Dict, *keys, default=None):
    """Get nested dictionary value safely."""
    for key in keys:
        if isinstance(d, dict):
            d = d.get(key, default)
        else:
            return default
    return d if d is not None else default


_PARAMS = _load_yaml("param.yaml")

# ========================================
# Provider Configuration
# ========================================

PROVIDER = _get_nested(_PARAMS, "provider", "default", default="openrouter")
OPENROUTER_BASE_URL = _get_nested(_PARAMS, "provider", "openrouter_base_url",
                                   default="https://openrouter.ai/api/v1")
GROQ_BASE_URL = _get_nested(_PARAMS, "provider", "groq_base_url",
                             default="https://api.groq.com/openai/v1")

# ========================================
# 2-Model Architecture
# ========================================
# Routing: low temperature, structured JSON output (one of four specialists)
# Chat:    higher temperature, free-form answer in the agent's role

ROUTER_MODEL = _get_nested(_PARAMS, "models", "router", default="google/gemini-2.5-flash")
ROUTER_PROVIDER = _get_nested(_PARAMS, "models", "router_provider", default=PROVIDER)

CHAT_MODEL = _get_nested(_PARAMS, "models", "chat", default="google/gemini-2.5-flash")
CHAT_PROVIDER = _get_nested(_PARAMS, "models", "chat_provider", default=PROVIDER)

# ========================================
# LLM Defaults
# ========================================

ROUTER_TEMPERATURE = _get_nested(_PARAMS, "llm", "router_temperature", default=0.1)
CHAT_TEMPERATURE = _get_nested(_PARAMS, "llm", "chat_temperature", default=0.7)
LLM_MAX_TOKENS = _get_nested(_PARAMS, "llm", "max_tokens", default=2000)
LLM_TIMEOUT_SECONDS = _get_nested(_PARAMS, "llm", "timeout_seconds", default=60)

# ========================================
# Session Configuration
# ========================================

# Number of prior messages handed to the response generator as context
HISTORY_WINDOW = _get_nested(_PARAMS, "session", "history_window", default=5)

# ========================================
# Helper Functions
# ========================================

def get_api_key(provider: Optional[str] = None) -> Optional[str]:
    """Get API key for the specified provider."""
    provider = provider or PROVIDER
    key_map = {
        "openrouter": "OPENROUTER_API_KEY",
        "openai": "OPENAI_API_KEY",
        "groq": "GROQ_API_KEY",
    }
    env_var = key_map.get(provider, f"{provider.upper()}_API_KEY")
    return os.getenv(env_var)


def validate() -> None:
    """
    Validate configuration.

    Raises:
        ValueError: If required secrets are missing
    """
    for provider in {ROUTER_PROVIDER, CHAT_PROVIDER}:
        if not get_api_key(provider):
            key_name = "OPENROUTER_API_KEY" if provider == "openrouter" else f"{provider.upper()}_API_KEY"
            raise ValueError(
                f" Missing required secret: {key_name}\n"
                f"Please add it to your .env file."
            )


def dump() -> None:
    """Log all active non-secret configuration values for debugging."""
    logger.info("\n" + "=" * 60)
    logger.info("CONFIGURATION (NON-SECRETS ONLY)")
    logger.info("=" * 60)

    logger.info("\n Provider:")
    logger.info(f"   Default Provider: {PROVIDER}")
    logger.info(f"   Router Model: {ROUTER_MODEL} ({ROUTER_PROVIDER}, t={ROUTER_TEMPERATURE})")
    logger.info(f"   Chat Model: {CHAT_MODEL} ({CHAT_PROVIDER}, t={CHAT_TEMPERATURE})")
    logger.info(f"   Max Tokens: {LLM_MAX_TOKENS}")

    logger.info("\n Session:")
    logger.info(f"   History Window: {HISTORY_WINDOW} messages")

    logger.info("\n Observability:")
    logger.info(f"   Enabled: {_get_nested(_PARAMS, 'observability', 'enabled', default=False)}")
    logger.info(f"   LangFuse Keys: {'set' if os.getenv('LANGFUSE_SECRET_KEY') else 'not set'}")

    logger.info("\n" + "=" * 60 + "\n")

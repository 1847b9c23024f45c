"""
Observability layer — LangFuse v3 integration for tracing and prompt management.

Provides:
- ``get_langfuse()``               — singleton Langfuse client
- ``fetch_prompt()``               — pull prompts from LangFuse Prompt Management
- ``observe``                      — decorator for auto-tracing (sync or async)
- ``update_current_trace``         — tag the turn trace with session / agent
- ``update_current_observation``   — attach I/O + metadata to the current span
- ``flush()``                      — ensure events are sent before process exit

Configuration:
    .env must contain:
        LANGFUSE_SECRET_KEY
        LANGFUSE_PUBLIC_KEY
        LANGFUSE_BASE_URL   (default: https://us.cloud.langfuse.com)

    config/param.yaml:
        observability:
          enabled: true

When ``enabled`` is false every helper is a no-op and ``observe`` returns
the function unchanged, so tracing can be turned off without code changes.
"""

from loguru import logger
import os
import time
from typing import Dict, Optional

from langfuse import Langfuse
from langfuse import get_client as _get_lf_client
from langfuse import observe as _lf_observe

# ---------------------------------------------------------------------------
# Config flag
# ---------------------------------------------------------------------------

_ENABLED: Optional[bool] = None


def _is_enabled() -> bool:
    """Check if observability is enabled (from param.yaml)."""
    global _ENABLED
    if _ENABLED is None:
        from infrastructure.config import _get_nested, _PARAMS
        _ENABLED = bool(_get_nested(_PARAMS, "observability", "enabled", default=False))
    return _ENABLED


# ---------------------------------------------------------------------------
# Singleton LangFuse client
# ---------------------------------------------------------------------------

_langfuse_client: Optional[Langfuse] = None
_initialised = False


def get_langfuse() -> Optional[Langfuse]:
    """
    Return a singleton Langfuse client.

    Returns None if observability is disabled or keys are missing.
    """
    global _langfuse_client, _initialised
    if _initialised:
        return _langfuse_client

    _initialised = True

    if not _is_enabled():
        logger.info("Observability disabled via config — LangFuse not initialised.")
        return None

    secret_key = os.getenv("LANGFUSE_SECRET_KEY")
    public_key = os.getenv("LANGFUSE_PUBLIC_KEY")
    base_url = os.getenv("LANGFUSE_BASE_URL", "https://us.cloud.langfuse.com")

    if not secret_key or not public_key:
        logger.warning(
            "LangFuse keys not set (LANGFUSE_SECRET_KEY / LANGFUSE_PUBLIC_KEY). "
            "Tracing is disabled."
        )
        return None

    try:
        _langfuse_client = Langfuse(
            secret_key=secret_key,
            public_key=public_key,
            host=base_url,
        )
        logger.info("LangFuse client initialised (host={})", base_url)
    except Exception as exc:
        logger.error("Failed to initialise LangFuse: {}", exc)
        _langfuse_client = None
    return _langfuse_client


# ---------------------------------------------------------------------------
# Prompt Management - fetch from LangFuse with local fallback
# ---------------------------------------------------------------------------


# prompt name -> monotonic time of the last failed fetch
_FAILED_PROMPTS: Dict[str, float] = {}


def fetch_prompt(
    name: str,
    /,
    *,
    fallback: str,
    cache_ttl_seconds: int = 300,
    **compile_vars: str,
) -> str:
    """
    Fetch a prompt template from **LangFuse Prompt Management**.

    If the prompt exists in LangFuse it is compiled with ``compile_vars``
    (``{{variable}}`` Mustache syntax). Otherwise the local ``fallback``
    string is used (Python ``{variable}`` syntax).

    A failed fetch is remembered for ``cache_ttl_seconds`` so missing
    prompts do not cost a blocking round trip on every call.

    Args:
        name:  Prompt name as registered in LangFuse (e.g. ``"sia-router-system"``).
        fallback:  Local prompt used when LangFuse is unavailable or the
                   prompt hasn't been created yet.
        cache_ttl_seconds:  Client-side cache TTL (default 5 min).
        **compile_vars:  Variables to substitute into the template.

    Returns:
        Compiled prompt string ready to send to the LLM.
    """
    client = get_langfuse()

    failed_at = _FAILED_PROMPTS.get(name)
    if failed_at is not None and time.monotonic() - failed_at < cache_ttl_seconds:
        client = None

    if client is not None:
        try:
            prompt_obj = client.get_prompt(
                name,
                type="text",
                cache_ttl_seconds=cache_ttl_seconds,
            )
            compiled = prompt_obj.compile(**compile_vars)
            logger.debug("LangFuse prompt '{}' loaded (version={})", name, getattr(prompt_obj, "version", "?"))
            _FAILED_PROMPTS.pop(name, None)
            return compiled
        except Exception as exc:
            _FAILED_PROMPTS[name] = time.monotonic()
            logger.debug(
                "LangFuse prompt '{}' not found or fetch failed: {}. Using local fallback.",
                name,
                exc,
            )

    if compile_vars:
        return fallback.format(**compile_vars)
    return fallback


# ---------------------------------------------------------------------------
# @observe decorator (wraps langfuse.observe, v3 API)
# ---------------------------------------------------------------------------


def observe(
    *,
    name: Optional[str] = None,
    as_type: Optional[str] = None,
):
    """
    Decorator that wraps ``langfuse.observe``; a passthrough when
    observability is disabled in config.

    Args:
        name: Span name (defaults to the function name).
        as_type: One of ``"generation"`` | ``None`` (span).
    """
    def _noop_decorator(fn):
        return fn

    if not _is_enabled():
        return _noop_decorator

    kwargs = {}
    if name is not None:
        kwargs["name"] = name
    if as_type is not None:
        kwargs["as_type"] = as_type

    return _lf_observe(**kwargs)


# ---------------------------------------------------------------------------
# Trace & Span Update Helpers (v3 API, uses get_client())
# ---------------------------------------------------------------------------


def update_current_trace(
    *,
    session_id: Optional[str] = None,
    metadata: Optional[dict] = None,
    tags: Optional[list] = None,
) -> None:
    """
    Update the current LangFuse trace with session info.

    Safe to call even when tracing is disabled (no-op).
    """
    if not _is_enabled():
        return
    try:
        kwargs = {}
        if session_id is not None:
            kwargs["session_id"] = session_id
        if metadata is not None:
            kwargs["metadata"] = metadata
        if tags is not None:
            kwargs["tags"] = tags
        _get_lf_client().update_current_trace(**kwargs)
    except Exception as exc:
        logger.debug("update_current_trace failed (non-critical): {}", exc)


def update_current_observation(
    *,
    input: Optional[str] = None,
    output: Optional[str] = None,
    metadata: Optional[dict] = None,
    usage: Optional[dict] = None,
    model: Optional[str] = None,
) -> None:
    """
    Update the current span/generation with I/O and usage data.

    Generation updates (``model`` or ``usage`` given) go through
    ``update_current_generation()``; everything else updates the span.

    Safe to call even when tracing is disabled (no-op).
    """
    if not _is_enabled():
        return

    fields = {}
    if input is not None:
        fields["input"] = input
    if output is not None:
        fields["output"] = output
    if metadata is not None:
        fields["metadata"] = metadata

    try:
        client = _get_lf_client()
        if usage is not None or model is not None:
            if model is not None:
                fields["model"] = model
            if usage is not None:
                fields["usage_details"] = usage
            client.update_current_generation(**fields)
        elif fields:
            client.update_current_span(**fields)
    except Exception as exc:
        logger.debug("update_current_observation failed (non-critical): {}", exc)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def flush() -> None:
    """Flush pending LangFuse events (call before program exit)."""
    if not _is_enabled():
        return
    try:
        _get_lf_client().flush()
        logger.debug("LangFuse flushed.")
    except Exception as exc:
        logger.debug("LangFuse flush failed: {}", exc)

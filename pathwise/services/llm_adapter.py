# pathwise/services/llm_adapter.py
"""
Pluggable LLM adapter loader and facade.

Environment:
- LLM_ADAPTER: "mock" (default) or "openai", or a dotted module path
- LLM_ALLOW_FALLBACK: "true" to fall back to the mock adapter when the configured one fails

Public:
- async def complete(task: str, payload: dict) -> str

payload keys:
- system: optional system prompt
- messages: list of {"role", "content"} dicts
- json: ask the provider for a JSON object
- input: the structured inputs the prompt was built from (used by the mock adapter)
"""

import importlib
import logging
from types import ModuleType
from typing import Any, Dict

from pathwise.core.config import settings
from pathwise.core.errors import UpstreamServiceError

logger = logging.getLogger(__name__)

_ADAPTER_MODULES = {
    "mock": "pathwise.services.llm_adapters.mock_adapter",
    "openai": "pathwise.services.llm_adapters.openai_adapter",
}

_loaded: Dict[str, ModuleType] = {}


def _load_adapter(name: str) -> ModuleType:
    if name in _loaded:
        return _loaded[name]
    mod = importlib.import_module(_ADAPTER_MODULES.get(name, name))
    # adapter module must implement async complete
    if not hasattr(mod, "complete"):
        raise RuntimeError(f"Adapter {name} does not expose complete()")
    _loaded[name] = mod
    return mod


def adapter_name() -> str:
    return settings.LLM_ADAPTER


async def complete(task: str, payload: Dict[str, Any]) -> str:
    """
    Unified entry to call the configured adapter.
    Failures surface as UpstreamServiceError unless fallback to mock is allowed.
    """
    name = adapter_name()
    try:
        adapter = _load_adapter(name)
        return await adapter.complete(task, payload)
    except Exception as exc:
        if settings.LLM_ALLOW_FALLBACK and name != "mock":
            logger.warning("LLM adapter %s failed for task %s, falling back to mock: %s", name, task, exc)
            return await _load_adapter("mock").complete(task, payload)
        if isinstance(exc, UpstreamServiceError):
            raise
        logger.exception("LLM adapter %s failed for task %s", name, task)
        raise UpstreamServiceError("llm", str(exc)) from exc

# pathwise/services/llm_adapters/openai_adapter.py
"""
OpenAI chat-completions adapter.

Env configuration:
- OPENAI_API_KEY: required for this adapter
- OPENAI_MODEL: model name (default gpt-4o)
- LLM_TIMEOUT_SEC: request timeout
"""

from typing import Any, Dict, Optional

from openai import AsyncOpenAI, OpenAIError

from pathwise.core.config import settings
from pathwise.core.errors import UpstreamServiceError

_client: Optional[AsyncOpenAI] = None


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        if not settings.OPENAI_API_KEY:
            raise UpstreamServiceError("llm", "Missing OPENAI_API_KEY environment variable")
        _client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, timeout=settings.LLM_TIMEOUT_SEC)
    return _client


async def complete(task: str, payload: Dict[str, Any]) -> str:
    client = _get_client()
    messages = []
    if payload.get("system"):
        messages.append({"role": "system", "content": payload["system"]})
    messages.extend(payload.get("messages", []))

    kwargs: Dict[str, Any] = {
        "model": settings.OPENAI_MODEL,
        "messages": messages,
        "temperature": payload.get("temperature", 0.7),
        "max_tokens": payload.get("max_tokens", 1500),
    }
    if payload.get("json"):
        kwargs["response_format"] = {"type": "json_object"}

    try:
        response = await client.chat.completions.create(**kwargs)
    except OpenAIError as exc:
        raise UpstreamServiceError("llm", f"{task}: {exc}") from exc

    if not response.choices:
        raise UpstreamServiceError("llm", f"{task}: empty completion")
    return response.choices[0].message.content or ""

import time
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from openai import AsyncOpenAI

log = logging.getLogger("adapter")


# ---------------------------
# Result type returned to callers
# ---------------------------
@dataclass
class LLMResult:
    text: str
    model: str
    response_id: Optional[str] = None
    prompt_tokens: int = 0
    completion_tokens: int = 0
    latency_ms: int = 0


# ---------------------------
# Adapter protocol (for typing)
# ---------------------------
class Adapter(Protocol):
    async def generate(self, system: str, prompt: str, max_tokens: int, temperature: Optional[float] = None) -> LLMResult: ...


# ---------------------------
# Helpers
# ---------------------------

def _extract_text(resp_obj) -> str:
    """First choice's message content from a chat completion, or ''."""
    choices = getattr(resp_obj, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if isinstance(content, str):
        return content
    # Some SDK shapes return a list of content parts
    if isinstance(content, list):
        parts = []
        for part in content:
            t = part.get("text") if isinstance(part, dict) else getattr(part, "text", None)
            if isinstance(t, str) and t.strip():
                parts.append(t)
        return "\n".join(parts)
    return ""


def _usage_int(usage, *names) -> int:
    for n in names:
        v = getattr(usage, n, None)
        if isinstance(v, (int, float)):
            return int(v)
    return 0


# ---------------------------
# Concrete adapter
# ---------------------------
class OpenAIAdapter:
    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        timeout_s: Optional[float] = None,
    ):
        # Prefer an injected client (useful for tests); otherwise construct here.
        # SDK retries are disabled: a failed call goes straight to the template fallback.
        self.model = model
        if client is not None:
            self._client = client
        else:
            kwargs: Dict[str, Any] = {"max_retries": 0}
            if api_key:
                kwargs["api_key"] = api_key
            if timeout_s:
                kwargs["timeout"] = timeout_s
            self._client = AsyncOpenAI(**kwargs)

    async def generate(self, system: str, prompt: str, max_tokens: int, temperature: Optional[float] = None) -> LLMResult:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature

        t0 = time.perf_counter()
        resp = await self._client.chat.completions.create(**kwargs)
        latency_ms = int((time.perf_counter() - t0) * 1000)

        text = _extract_text(resp)
        if not text.strip():
            log.warning(
                "adapter.extract_text.empty model=%s choices=%s",
                self.model,
                len(getattr(resp, "choices", None) or []),
            )

        u = getattr(resp, "usage", None)
        return LLMResult(
            text=text or "",
            model=getattr(resp, "model", None) or self.model,
            response_id=getattr(resp, "id", None),
            prompt_tokens=_usage_int(u, "prompt_tokens", "input_tokens") if u else 0,
            completion_tokens=_usage_int(u, "completion_tokens", "output_tokens") if u else 0,
            latency_ms=latency_ms,
        )

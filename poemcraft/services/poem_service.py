import logging
from dataclasses import dataclass
from typing import Optional

from poemcraft.core.config import Settings
from poemcraft.core.types import PoemRequest
from poemcraft.adapters.registry import Adapter
from poemcraft.services.prompt_builder import build_prompt
from poemcraft.services.templates import render_fallback

log = logging.getLogger("poem")

SYSTEM_PROMPT = (
    "You are a talented poet who creates beautiful, personalized poems for special occasions. "
    "Your poems should be heartfelt, well-structured, and appropriate for the given event and style. "
    "Always create original content that captures the emotion and significance of the occasion."
)

EMPTY_OUTPUT_REASON = "No poem content generated"


@dataclass(frozen=True)
class GenerationResult:
    content: str
    succeeded: bool
    failure_reason: Optional[str] = None


def _fallback(req: PoemRequest, reason: str) -> GenerationResult:
    return GenerationResult(content=render_fallback(req), succeeded=False, failure_reason=reason)


async def generate_poem(cfg: Settings, adapter: Adapter, req: PoemRequest) -> GenerationResult:
    """One model call, then the template bank if it fails or returns nothing.

    Provider errors never propagate: the result always carries poem text.
    """
    prompt = build_prompt(req)
    try:
        res = await adapter.generate(
            system=SYSTEM_PROMPT,
            prompt=prompt,
            max_tokens=cfg.MAX_OUTPUT_TOKENS,
            temperature=cfg.TEMPERATURE,
        )
    except Exception as e:
        log.exception("model_error occasion=%s style=%s: %s", req.occasion, req.style, e)
        return _fallback(req, str(e) or type(e).__name__)

    text = (getattr(res, "text", "") or "").strip()
    if not text:
        log.warning("empty_poem_from_model model=%s occasion=%s", getattr(res, "model", None), req.occasion)
        return _fallback(req, EMPTY_OUTPUT_REASON)

    log.info(
        "poem_ok model=%s response_id=%s occasion=%s style=%s prompt_tokens=%s completion_tokens=%s latency_ms=%s",
        res.model, res.response_id, req.occasion, req.style,
        res.prompt_tokens, res.completion_tokens, res.latency_ms,
    )
    return GenerationResult(content=text, succeeded=True)

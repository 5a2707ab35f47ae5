import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from poemcraft.core.config import Settings, get_settings
from poemcraft.core.types import (
    ChildrenTheme,
    NewPoem,
    Option,
    PoemOptions,
    PoemRecord,
    PoemRequest,
    STYLES,
)
from poemcraft.adapters.registry import Adapter, OpenAIAdapter
from poemcraft.data.poems import DEFAULT_RECENT_LIMIT, PoemStore, get_store
from poemcraft.services.poem_service import generate_poem
from poemcraft.services.prompt_builder import LEARNING_TOPICS
from poemcraft.services.templates import CHILDREN_THEMES, OCCASIONS

router = APIRouter(prefix="/api/poems")
log = logging.getLogger("routes")


def get_adapter(cfg: Settings = Depends(get_settings)) -> Adapter:
    return OpenAIAdapter(
        api_key=cfg.OPENAI_API_KEY,
        model=cfg.POEM_MODEL,
        timeout_s=cfg.PROVIDER_TIMEOUT_S,
    )


def get_poem_store(cfg: Settings = Depends(get_settings)) -> PoemStore:
    return get_store(cfg)


@router.post("/generate", response_model=PoemRecord)
async def post_generate(
    req: PoemRequest,
    cfg: Settings = Depends(get_settings),
    adapter: Adapter = Depends(get_adapter),
    store: PoemStore = Depends(get_poem_store),
):
    result = await generate_poem(cfg, adapter, req)
    try:
        return store.create(
            NewPoem(
                occasion=req.occasion,
                names=req.names,
                style=req.style,
                content=result.content,
                childrenTheme=req.childrenTheme,
                childrenOptions=req.childrenOptions,
                learningTopic=req.learningTopic,
                status="ok" if result.succeeded else "fallback",
                failureReason=result.failure_reason,
            )
        )
    except Exception:
        log.exception("poem_store_error occasion=%s", req.occasion)
        raise HTTPException(status_code=500, detail="Failed to generate poem")


@router.get("/recent", response_model=list[PoemRecord])
async def get_recent(
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=1),
    store: PoemStore = Depends(get_poem_store),
):
    try:
        return store.list_recent(limit)
    except Exception:
        log.exception("poem_store_error op=list_recent")
        raise HTTPException(status_code=500, detail="Failed to fetch recent poems")


@router.get("/options", response_model=PoemOptions)
async def get_options():
    """Everything the request form is built from."""
    return PoemOptions(
        occasions=[Option(value=v, label=label) for v, label in OCCASIONS],
        styles=[Option(value=s, label=s.capitalize()) for s in STYLES],
        childrenThemes=[ChildrenTheme(**t) for t in CHILDREN_THEMES],
        learningTopics=[Option(value=v, label=label) for v, label in LEARNING_TOPICS.items()],
    )


@router.get("/{poem_id}", response_model=PoemRecord)
async def get_poem(poem_id: str, store: PoemStore = Depends(get_poem_store)):
    # Non-numeric ids cannot match any record
    if not poem_id.isdigit():
        raise HTTPException(status_code=404, detail="Poem not found")
    try:
        poem = store.get_by_id(int(poem_id))
    except Exception:
        log.exception("poem_store_error op=get_by_id id=%s", poem_id)
        raise HTTPException(status_code=500, detail="Failed to fetch poem")
    if poem is None:
        raise HTTPException(status_code=404, detail="Poem not found")
    return poem

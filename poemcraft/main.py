from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from poemcraft.core.config import get_settings
from poemcraft.core.logging import setup_logging
from poemcraft.routes import poems

import os
import logging
from starlette.staticfiles import StaticFiles
from starlette.responses import FileResponse, Response
from starlette.middleware.gzip import GZipMiddleware

setup_logging()
log = logging.getLogger(__name__)
app = FastAPI(title="PoemCraft", version="1.0")

# Serve built frontend (Vite output) if present; support both Vite defaults and custom outDir
_STATIC_CANDIDATES = ["web/dist", "web/build"]
STATIC_DIR = next(
    (p for p in _STATIC_CANDIDATES if os.path.exists(os.path.join(p, "index.html"))),
    None,
)
if STATIC_DIR and os.path.isdir(os.path.join(STATIC_DIR, "assets")):
    app.mount(
        "/assets",
        StaticFiles(directory=os.path.join(STATIC_DIR, "assets")),
        name="assets",
    )
INDEX_PATH = os.path.join(STATIC_DIR, "index.html") if STATIC_DIR else None

cfg = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cfg.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=500)


@app.exception_handler(RequestValidationError)
async def invalid_input(request: Request, exc: RequestValidationError):
    """400 with one entry per offending field; the poem pipeline never runs."""
    errors = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    log.info("invalid_input path=%s fields=%s", request.url.path, [e["field"] for e in errors])
    return JSONResponse({"message": "Invalid input", "errors": errors}, status_code=400)


@app.get("/healthz")
async def healthz():
    return {"ok": True}


app.include_router(poems.router)


def _index_response():
    if INDEX_PATH and os.path.exists(INDEX_PATH):
        return FileResponse(INDEX_PATH)
    return Response(
        "Frontend build not found. Run `npm run build` in ./web.",
        media_type="text/plain",
        status_code=404,
    )


@app.get("/")
async def index():
    return _index_response()


@app.get("/{full_path:path}")
async def spa(full_path: str):
    # Do not intercept API paths
    if full_path.startswith("api/"):
        return Response(status_code=404)
    return _index_response()

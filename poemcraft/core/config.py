# poemcraft/core/config.py
import os, json
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

# Load .env into process environment early
load_dotenv()


def _get(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    return v if v is not None else default


def _get_list(name: str, default_list: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default_list)
    s = raw.strip()
    # Try JSON first
    if s.startswith("[") and s.endswith("]"):
        try:
            parsed = json.loads(s)
            if isinstance(parsed, list):
                return [str(x) for x in parsed]
        except ValueError:
            pass
    # Fallback to CSV
    return [x.strip() for x in s.split(",") if x.strip()]


def _get_int(name: str, default: int) -> int:
    try:
        return int(float(_get(name, str(default)) or default))
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    try:
        return float(_get(name, str(default)) or default)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    OPENAI_API_KEY: str
    POEM_MODEL: str = "gpt-4o"
    MAX_OUTPUT_TOKENS: int = 500
    TEMPERATURE: float = 0.8
    PROVIDER_TIMEOUT_S: float = 30.0
    STORAGE_BACKEND: str = "memory"   # memory | sql
    DATABASE_URL: str = "sqlite:///data/poems.db"
    CORS_ORIGINS: List[str] = field(default_factory=lambda: ["*"])


def get_settings() -> Settings:
    key = _get("OPENAI_API_KEY")
    if not key:
        raise RuntimeError("OPENAI_API_KEY is required in .env")

    backend = (_get("STORAGE_BACKEND", "memory") or "memory").strip().lower()
    if backend not in ("memory", "sql"):
        backend = "memory"

    return Settings(
        OPENAI_API_KEY=key.strip(),
        POEM_MODEL=(_get("POEM_MODEL", "gpt-4o") or "gpt-4o").strip(),
        MAX_OUTPUT_TOKENS=max(1, _get_int("MAX_OUTPUT_TOKENS", 500)),
        TEMPERATURE=_get_float("TEMPERATURE", 0.8),
        PROVIDER_TIMEOUT_S=_get_float("PROVIDER_TIMEOUT_S", 30.0),
        STORAGE_BACKEND=backend,
        DATABASE_URL=(_get("DATABASE_URL", "sqlite:///data/poems.db") or "").strip(),
        CORS_ORIGINS=_get_list("CORS_ORIGINS", ["*"]),
    )

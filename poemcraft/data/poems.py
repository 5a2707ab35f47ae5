# Poem record store (in-memory by default, SQLite/Postgres when STORAGE_BACKEND=sql)
# Table:
#   poems(
#     id INTEGER PRIMARY KEY,        -- SERIAL on Postgres
#     created_at TEXT NOT NULL,      -- UTC ISO-8601, microsecond precision
#     occasion TEXT NOT NULL,
#     names TEXT,
#     style TEXT NOT NULL,
#     content TEXT NOT NULL,
#     children_theme TEXT,
#     children_options TEXT,         -- JSON array
#     learning_topic TEXT,
#     status TEXT,
#     failure_reason TEXT
#   )
import json
import logging
import threading
import datetime as dt
from typing import Dict, List, Optional, Protocol

from sqlalchemy import text
from sqlalchemy.engine import Engine

from poemcraft.core.config import Settings
from poemcraft.core.types import NewPoem, PoemRecord
from poemcraft.db import build_engine, is_postgres

log = logging.getLogger("store")

DEFAULT_RECENT_LIMIT = 10


class PoemStore(Protocol):
    def create(self, poem: NewPoem) -> PoemRecord: ...

    def list_recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> List[PoemRecord]: ...

    def get_by_id(self, poem_id: int) -> Optional[PoemRecord]: ...


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _normalized(poem: NewPoem) -> dict:
    """Blank optional echoes are stored as null."""
    row = poem.model_dump()
    for key in ("names", "childrenTheme", "learningTopic"):
        if not (row.get(key) or "").strip():
            row[key] = None
    if not row.get("childrenOptions"):
        row["childrenOptions"] = None
    return row


class MemoryPoemStore:
    """Process-local store. Records live until the process exits."""

    def __init__(self):
        self._lock = threading.Lock()
        self._poems: Dict[int, PoemRecord] = {}
        self._next_id = 1

    def create(self, poem: NewPoem) -> PoemRecord:
        row = _normalized(poem)
        with self._lock:
            record = PoemRecord(**row, id=self._next_id, createdAt=_utc_now())
            self._poems[record.id] = record
            self._next_id += 1
        return record

    def list_recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> List[PoemRecord]:
        if limit <= 0:
            return []
        with self._lock:
            poems = list(self._poems.values())
        poems.sort(key=lambda p: (p.createdAt, p.id), reverse=True)
        return poems[:limit]

    def get_by_id(self, poem_id: int) -> Optional[PoemRecord]:
        with self._lock:
            return self._poems.get(poem_id)


class SqlPoemStore:
    """Same contract over a SQL table; ids come from the database key."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._init_lock = threading.Lock()
        self._ready = False

    def init_db(self) -> None:
        with self._init_lock:
            if self._ready:
                return
            id_col = "id SERIAL PRIMARY KEY" if is_postgres(self.engine) else "id INTEGER PRIMARY KEY AUTOINCREMENT"
            with self.engine.begin() as conn:
                conn.execute(
                    text(
                        f"""
                    CREATE TABLE IF NOT EXISTS poems(
                        {id_col},
                        created_at TEXT NOT NULL,
                        occasion TEXT NOT NULL,
                        names TEXT,
                        style TEXT NOT NULL,
                        content TEXT NOT NULL,
                        children_theme TEXT,
                        children_options TEXT,
                        learning_topic TEXT,
                        status TEXT,
                        failure_reason TEXT
                    )
                    """
                    )
                )
                conn.execute(
                    text("CREATE INDEX IF NOT EXISTS idx_poems_created ON poems(created_at)")
                )
            self._ready = True

    def create(self, poem: NewPoem) -> PoemRecord:
        self.init_db()
        row = _normalized(poem)
        created_at = _utc_now()
        params = {
            "created_at": created_at.isoformat(),
            "occasion": row["occasion"],
            "names": row["names"],
            "style": row["style"],
            "content": row["content"],
            "children_theme": row["childrenTheme"],
            "children_options": json.dumps(row["childrenOptions"]) if row["childrenOptions"] else None,
            "learning_topic": row["learningTopic"],
            "status": row["status"],
            "failure_reason": row["failureReason"],
        }
        sql = (
            "INSERT INTO poems(created_at, occasion, names, style, content, children_theme, "
            "children_options, learning_topic, status, failure_reason) "
            "VALUES (:created_at, :occasion, :names, :style, :content, :children_theme, "
            ":children_options, :learning_topic, :status, :failure_reason)"
        )
        with self.engine.begin() as conn:
            if is_postgres(self.engine):
                poem_id = conn.execute(text(sql + " RETURNING id"), params).scalar_one()
            else:
                poem_id = conn.execute(text(sql), params).lastrowid
        return PoemRecord(**row, id=int(poem_id), createdAt=created_at)

    def list_recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> List[PoemRecord]:
        if limit <= 0:
            return []
        self.init_db()
        with self.engine.begin() as conn:
            rows = conn.execute(
                text("SELECT * FROM poems ORDER BY created_at DESC, id DESC LIMIT :limit"),
                {"limit": int(limit)},
            ).mappings().all()
        return [self._to_record(r) for r in rows]

    def get_by_id(self, poem_id: int) -> Optional[PoemRecord]:
        self.init_db()
        with self.engine.begin() as conn:
            row = conn.execute(
                text("SELECT * FROM poems WHERE id = :id"), {"id": int(poem_id)}
            ).mappings().first()
        return self._to_record(row) if row else None

    @staticmethod
    def _to_record(r) -> PoemRecord:
        created = dt.datetime.fromisoformat(r["created_at"])
        if created.tzinfo is None:
            created = created.replace(tzinfo=dt.timezone.utc)
        return PoemRecord(
            id=int(r["id"]),
            createdAt=created,
            occasion=r["occasion"],
            names=r["names"],
            style=r["style"],
            content=r["content"],
            childrenTheme=r["children_theme"],
            childrenOptions=json.loads(r["children_options"]) if r["children_options"] else None,
            learningTopic=r["learning_topic"],
            status=r["status"] or "ok",
            failureReason=r["failure_reason"],
        )


_STORE: Optional[PoemStore] = None
_STORE_LOCK = threading.Lock()


def build_store(cfg: Settings) -> PoemStore:
    if cfg.STORAGE_BACKEND == "sql":
        store = SqlPoemStore(build_engine(cfg.DATABASE_URL))
        store.init_db()
        return store
    return MemoryPoemStore()


def get_store(cfg: Settings) -> PoemStore:
    """Process-wide store, built on first use."""
    global _STORE
    with _STORE_LOCK:
        if _STORE is None:
            _STORE = build_store(cfg)
            log.info("store ready backend=%s", cfg.STORAGE_BACKEND)
        return _STORE

import os
import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

DB_ECHO = os.getenv("DB_ECHO") == "1"

log = logging.getLogger(__name__)


def _ensure_dir_for_sqlite(url: str) -> None:
    if not url.startswith("sqlite:///"):
        return
    path = url.replace("sqlite:///", "", 1)
    if path == ":memory:":
        return
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite:"):
        _ensure_dir_for_sqlite(url)
        eng = create_engine(
            url,
            future=True,
            pool_pre_ping=True,
            connect_args={"check_same_thread": False},
            echo=DB_ECHO,
        )

        @event.listens_for(eng, "connect")
        def _sqlite_pragmas(dbapi_conn, _):
            cur = dbapi_conn.cursor()
            try:
                cur.execute("PRAGMA journal_mode=WAL")
                cur.execute("PRAGMA synchronous=NORMAL")
                cur.execute("PRAGMA busy_timeout=5000")
            finally:
                cur.close()

        log.info("DB engine ready dialect=%s", eng.dialect.name)
        return eng

    # Postgres / others
    pool_size = int(os.getenv("DB_POOL_SIZE", "5"))
    max_overflow = int(os.getenv("DB_MAX_OVERFLOW", "10"))
    pool_recycle = int(os.getenv("DB_POOL_RECYCLE_S", "300"))
    eng = create_engine(
        url,
        future=True,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=pool_recycle,
        echo=DB_ECHO,
    )
    log.info("DB engine ready dialect=%s", eng.dialect.name)
    return eng


def is_postgres(engine: Engine) -> bool:
    return engine.dialect.name == "postgresql"

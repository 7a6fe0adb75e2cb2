from __future__ import annotations

import ssl
from functools import lru_cache
from typing import Any, Dict, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from netprophet.config import settings

_SSL_OFF = {"0", "false", "off", "disable"}


def _verified_ssl_context() -> ssl.SSLContext:
    ctx = ssl.create_default_context()
    ctx.check_hostname = True
    ctx.verify_mode = ssl.CERT_REQUIRED
    return ctx


def normalize_asyncpg_url_and_ssl(db_url: str) -> Tuple[str, Dict[str, Any]]:
    """
    Strip libpq-style sslmode/ssl params from the URL and turn them into
    asyncpg connect_args. Also upgrades a bare postgresql:// scheme.
    """
    if db_url.startswith("postgresql://"):
        db_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    parts = urlsplit(db_url)
    q = dict(parse_qsl(parts.query, keep_blank_values=True))

    sslmode = (q.pop("sslmode", None) or "").strip().lower()
    ssl_param = (q.pop("ssl", None) or "").strip().lower()
    q.pop("channel_binding", None)

    cleaned_url = urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(q, doseq=True), parts.fragment))

    connect_args: Dict[str, Any] = {}
    requested = sslmode or ssl_param
    if requested:
        connect_args["ssl"] = False if requested in _SSL_OFF else _verified_ssl_context()

    return cleaned_url, connect_args


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    if not settings.database_url:
        raise RuntimeError("Missing DATABASE_URL (expected postgresql+asyncpg://...)")

    normalized_url, connect_args = normalize_asyncpg_url_and_ssl(settings.database_url)

    return create_async_engine(
        normalized_url,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args,
    )

from __future__ import annotations

import ssl

from netprophet.db.engine import normalize_asyncpg_url_and_ssl


def test_plain_scheme_is_upgraded():
    url, args = normalize_asyncpg_url_and_ssl("postgresql://u:p@host:5432/db")
    assert url == "postgresql+asyncpg://u:p@host:5432/db"
    assert args == {}


def test_sslmode_require_becomes_context():
    url, args = normalize_asyncpg_url_and_ssl(
        "postgresql://u:p@host/db?sslmode=require&channel_binding=require&application_name=odds"
    )
    assert url == "postgresql+asyncpg://u:p@host/db?application_name=odds"
    assert isinstance(args["ssl"], ssl.SSLContext)


def test_sslmode_disable_turns_ssl_off():
    url, args = normalize_asyncpg_url_and_ssl("postgresql+asyncpg://u:p@localhost/db?sslmode=disable")
    assert url == "postgresql+asyncpg://u:p@localhost/db"
    assert args == {"ssl": False}

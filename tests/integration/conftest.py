import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest
from psycopg import sql

from upload_pipeline.config.settings import Settings
from upload_pipeline.database.connection import close_pool, get_connection, init_pool


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "uploads_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def products_table(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    """A throwaway table with a serial id, a title and an image name column."""
    table = f"products_{uuid.uuid4().hex[:8]}"
    db_conn.execute(
        sql.SQL(
            "CREATE TABLE {} (id SERIAL PRIMARY KEY, title TEXT NOT NULL, images TEXT)"
        ).format(sql.Identifier(table))
    )
    db_conn.commit()
    try:
        yield table
    finally:
        db_conn.execute(sql.SQL("DROP TABLE IF EXISTS {}").format(sql.Identifier(table)))
        db_conn.commit()

import os
from collections.abc import Generator
from importlib import resources
from typing import Any

import psycopg
import pytest
from psycopg.rows import dict_row

from screening.config.settings import Settings
from screening.database.connection import close_pool, get_connection, init_pool
from screening.database.models import JobRecord


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "screening_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings, max_size=4)
        with get_connection() as conn:
            conn.execute(resources.files("screening.database").joinpath("schema.sql").read_text())
            conn.commit()
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
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    """Case ids to delete after the test; documents and jobs cascade."""
    case_ids: list[int] = []
    yield case_ids
    if not case_ids:
        return
    with get_connection() as conn:
        conn.execute("DELETE FROM cases WHERE id = ANY(%s)", (case_ids,))
        conn.commit()


@pytest.fixture
def seed_case(db_conn: psycopg.Connection[Any], integration_cleanup: list[int]) -> int:
    with db_conn.cursor() as cur:
        cur.execute("INSERT INTO cases (status) VALUES ('pending') RETURNING id")
        row = cur.fetchone()
        assert row is not None
        case_id = row[0]
    db_conn.commit()
    integration_cleanup.append(case_id)
    return case_id


@pytest.fixture
def seed_document(db_conn: psycopg.Connection[Any], seed_case: int) -> int:
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO case_documents (case_id, filename, stored_name)
            VALUES (%s, %s, %s)
            RETURNING id
            """,
            (seed_case, "report.pdf", "abc-123.pdf"),
        )
        row = cur.fetchone()
        assert row is not None
        document_id = row[0]
    db_conn.commit()
    return document_id


@pytest.fixture
def seed_job(db_conn: psycopg.Connection[Any], seed_case: int) -> JobRecord:
    with db_conn.cursor(row_factory=dict_row) as cur:
        cur.execute(
            """
            INSERT INTO case_jobs (case_id, status, attempts)
            VALUES (%s, 'pending', 0)
            RETURNING id, case_id, status, attempts
            """,
            (seed_case,),
        )
        row = cur.fetchone()
        assert row is not None
    db_conn.commit()
    return JobRecord(
        id=row["id"],
        case_id=row["case_id"],
        status=row["status"],
        attempts=row["attempts"],
    )

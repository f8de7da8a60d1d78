import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from backend.database import ensure_certificate_schema


@pytest.fixture
def legacy_engine():
    engine = create_engine('sqlite://', poolclass=StaticPool)
    with engine.begin() as connection:
        connection.execute(
            text(
                'CREATE TABLE certificates ('
                'id INTEGER PRIMARY KEY, certificate_id VARCHAR(16), '
                'user_id INTEGER, exam_result_id INTEGER)'
            )
        )
    try:
        yield engine
    finally:
        engine.dispose()


def test_ensure_certificate_schema_adds_revocation_columns(legacy_engine) -> None:
    ensure_certificate_schema(bind=legacy_engine)

    columns = {column['name'] for column in inspect(legacy_engine).get_columns('certificates')}
    assert {'revoked', 'issued_at'} <= columns


def test_ensure_certificate_schema_enforces_unique_certificate_ids(legacy_engine) -> None:
    ensure_certificate_schema(bind=legacy_engine)

    with legacy_engine.begin() as connection:
        connection.execute(
            text("INSERT INTO certificates (certificate_id, user_id, exam_result_id) VALUES ('aaaa', 1, 1)")
        )
    with pytest.raises(IntegrityError):
        with legacy_engine.begin() as connection:
            connection.execute(
                text("INSERT INTO certificates (certificate_id, user_id, exam_result_id) VALUES ('aaaa', 2, 2)")
            )


def test_ensure_certificate_schema_is_idempotent(legacy_engine) -> None:
    ensure_certificate_schema(bind=legacy_engine)
    ensure_certificate_schema(bind=legacy_engine)

    revoked_default = [
        column for column in inspect(legacy_engine).get_columns('certificates') if column['name'] == 'revoked'
    ]
    assert len(revoked_default) == 1


def test_ensure_certificate_schema_skips_fresh_tables(session_factory) -> None:
    engine = session_factory.kw['bind']
    before = inspect(engine).get_indexes('certificates')

    ensure_certificate_schema(bind=engine)

    assert inspect(engine).get_indexes('certificates') == before

from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.core import config


def _connect_args(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    config.DATABASE_URL,
    echo=config.DATABASE_ECHO,
    connect_args=_connect_args(config.DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_certificate_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _has_unique_certificate_id(inspector) -> bool:
    for index in inspector.get_indexes('certificates'):
        if index.get('unique') and index.get('column_names') == ['certificate_id']:
            return True
    for constraint in inspector.get_unique_constraints('certificates'):
        if constraint.get('column_names') == ['certificate_id']:
            return True
    return False


def ensure_certificate_schema(bind: Engine | None = None) -> None:
    """Upgrade a certificates table created before revocation existed."""
    global _certificate_schema_checked

    if _certificate_schema_checked and bind is None:
        return

    target = bind or engine

    with _schema_lock:
        if _certificate_schema_checked and bind is None:
            return

        inspector = inspect(target)

        if 'certificates' not in inspector.get_table_names():
            _certificate_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('certificates')}
        migration_steps = [
            ('revoked', 'ALTER TABLE certificates ADD COLUMN revoked BOOLEAN NOT NULL DEFAULT FALSE'),
            ('issued_at', 'ALTER TABLE certificates ADD COLUMN issued_at TIMESTAMP'),
        ]
        needs_unique_index = not _has_unique_certificate_id(inspector)

        with target.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))
            if needs_unique_index:
                connection.execute(
                    text('CREATE UNIQUE INDEX IF NOT EXISTS uq_certificates_certificate_id ON certificates(certificate_id)')
                )

        _certificate_schema_checked = True

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')

from backend.auth import jwt_handler, passwords  # noqa: E402
from backend.core.config import AuthSettings, get_auth_settings  # noqa: E402
from backend.database import Base, get_db  # noqa: E402
from backend.main import app  # noqa: E402
from backend.models.exam_result import ExamResult  # noqa: E402
from backend.models.user import User  # noqa: E402

TEST_PASSWORD = 'pw123'


@pytest.fixture
def auth_settings() -> AuthSettings:
    # bcrypt's minimum cost keeps the suite fast.
    return AuthSettings(secret_key='test-secret', algorithm='HS256', expires_minutes=60, bcrypt_rounds=4)


@pytest.fixture
def session_factory():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    try:
        yield factory
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory, auth_settings):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_auth_settings] = lambda: auth_settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session, auth_settings):
    def _make_user(
        email: str,
        role: str = 'student',
        approved: bool = True,
        name: str = 'Test User',
        password: str = TEST_PASSWORD,
    ) -> User:
        user = User(
            name=name,
            email=email,
            hashed_password=passwords.hash_password(password, auth_settings.bcrypt_rounds),
            role=role,
            is_approved=approved,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_exam_result(db_session):
    def _make_exam_result(user_id: int, exam_name: str = 'Finals', year: int = 2024, scores=None) -> ExamResult:
        exam_result = ExamResult(
            user_id=user_id,
            exam_name=exam_name,
            year=year,
            scores=scores or {'math': 90},
        )
        db_session.add(exam_result)
        db_session.commit()
        db_session.refresh(exam_result)
        return exam_result

    return _make_exam_result


@pytest.fixture
def token_for(auth_settings):
    def _token_for(user: User) -> str:
        return jwt_handler.create_access_token(user.id, user.role, auth_settings)

    return _token_for


@pytest.fixture
def admin_headers(make_user, token_for) -> dict:
    admin = make_user('admin@x.com', role='admin')
    return {'Authorization': f'Bearer {token_for(admin)}'}

import os
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')

from storefront.auth.jwt_handler import create_access_token  # noqa: E402
from storefront.auth.password import hash_password  # noqa: E402
from storefront.core.config import Settings  # noqa: E402
from storefront.crud.users import create_user  # noqa: E402
from storefront.database import Base, build_session_factory, create_tables  # noqa: E402
from storefront.main import create_app  # noqa: E402

TEST_SECRET = 'super-secret-jwt-token-for-testing-only'
TEST_ROUNDS = 4


@pytest.fixture
def settings() -> Settings:
    return Settings(
        APP_ENV='test',
        DATABASE_URL='sqlite://',
        JWT_SECRET_KEY=TEST_SECRET,
        JWT_EXPIRES_MINUTES=60,
        BCRYPT_ROUNDS=TEST_ROUNDS,
    )


@pytest.fixture
def engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db(engine):
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(settings, engine):
    return create_app(settings, engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    def _make_user(
        email: str = 'john@example.com',
        password: str = 'password123',
        role: int = 0,
        answer: str = 'Football',
        name: str = 'John Doe',
    ):
        return create_user(
            db,
            name=name,
            email=email,
            password_hash=hash_password(password, rounds=TEST_ROUNDS),
            phone='12344000',
            address='123 Street',
            answer=answer,
            dob=date(2000, 1, 1),
            role=role,
        )

    return _make_user


@pytest.fixture
def token_for(settings):
    def _token_for(user_id: int, role: int = 0, minutes: int = 60) -> str:
        return create_access_token(
            user_id,
            role,
            secret=settings.JWT_SECRET_KEY,
            expires_delta=timedelta(minutes=minutes),
        )

    return _token_for

"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.exceptions import EmailDeliveryError  # noqa: E402
from app.models.game_stats import GameStats  # noqa: E402, F401
from app.models.user import User, utcnow  # noqa: E402, F401
from app.services.auth import AuthService, get_auth_service  # noqa: E402
from app.services.jwt import get_jwt_service  # noqa: E402
from app.services.mail import MailMessage  # noqa: E402
from app.services.password import get_password_hasher  # noqa: E402


class FakeMailSender:
    """Records outgoing mail; set ``fail`` to simulate a delivery error."""

    def __init__(self) -> None:
        self.sent: list[MailMessage] = []
        self.fail = False

    def send(self, message: MailMessage) -> None:
        if self.fail:
            raise EmailDeliveryError()
        self.sent.append(message)


class FakeClock:
    """Controllable replacement for the service's UTC clock."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="mail_sender")
def mail_sender_fixture() -> FakeMailSender:
    return FakeMailSender()


@pytest.fixture(name="clock")
def clock_fixture() -> FakeClock:
    return FakeClock(utcnow())


@pytest.fixture(name="auth_service")
def auth_service_fixture(mail_sender: FakeMailSender, clock: FakeClock) -> AuthService:
    """Auth service wired to the fake mailer and clock."""
    return AuthService(
        hasher=get_password_hasher(),
        jwt_service=get_jwt_service(),
        mail_sender=mail_sender,
        reset_code_ttl=timedelta(minutes=15),
        clock=clock,
    )


@pytest.fixture(name="client")
def client_fixture(db_session: Session, auth_service: AuthService):
    """Create a test client with overridden DB and auth dependencies and disabled rate limiting."""
    from app.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session, auth_service: AuthService):
    """Create a test user and return its public fields, password and session token."""
    user = auth_service.register(db_session, "Ana", "ana@x.com", "secret1")
    token = get_jwt_service().create_token(user_id=user.id, email=user.email)

    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "password": "secret1",
        "token": token,
    }

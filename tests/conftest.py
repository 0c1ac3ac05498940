"""
Pytest fixtures for the LeaseKeeper test suite.

Provides:
- an in-memory SQLite database per test
- a recording fake of the mail sender
- factories for landlords, properties and tenancies
- a FastAPI TestClient wired to the above
"""

from datetime import date, datetime
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from leasekeeper.config import Settings, get_settings
from leasekeeper.database.init import Base, get_db
from leasekeeper.database.models import Property, Tenant, User
from leasekeeper.enums.role import Role
from leasekeeper.schemas.auth_schema import Principal
from leasekeeper.schemas.property_schema import PropertyCreate, RenovationCreate
from leasekeeper.schemas.tenant_schema import TenantCreate
from leasekeeper.services.email_service import MailResult
from leasekeeper.services.property_service import PropertyService
from leasekeeper.services.tenant_service import TenantService
from leasekeeper.utils.dependencies import get_mail_sender, hash_password

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct horse battery"
ADMIN_ADDRESS = "admin@example.com"


class FakeMailSender:
    """Records every email; can be told to reject or blow up for some recipients."""

    def __init__(self):
        self.sent: List[dict] = []
        self.reject: set = set()
        self.explode: set = set()

    async def send_email(self, to: str, subject: str, html: str) -> MailResult:
        self.sent.append({"to": to, "subject": subject, "html": html})
        if to in self.explode:
            raise ConnectionError("SMTP server unreachable")
        if to in self.reject:
            return MailResult(success=False, error="550 mailbox unavailable")
        return MailResult(success=True)


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(scope="session")
def admin_password_hash() -> str:
    return hash_password(ADMIN_PASSWORD)


@pytest.fixture
def settings(admin_password_hash) -> Settings:
    return Settings(
        admin_username=ADMIN_USERNAME,
        admin_password_hash=admin_password_hash,
        admin_notification_address=ADMIN_ADDRESS,
        token_signing_key="test-signing-key",
        database_url="sqlite://",
    )


@pytest.fixture
def admin_credentials() -> dict:
    return {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}


@pytest.fixture
def admin() -> Principal:
    return Principal(subject=ADMIN_USERNAME, role=Role.ADMIN)


@pytest.fixture
def landlord_principal() -> Principal:
    return Principal(subject="landlord@example.com", role=Role.LANDLORD, account_id=1)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def mail_sender() -> FakeMailSender:
    return FakeMailSender()


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(
        email: Optional[str] = None,
        password: str = "secret-password",
        is_banned: bool = False,
        is_active: bool = True,
    ) -> User:
        counter["n"] += 1
        user = User(
            name=f"Landlord {counter['n']}",
            email=email or f"landlord{counter['n']}@example.com",
            phone="+15550000000",
            hashed_password=hash_password(password),
            is_active=is_active and not is_banned,
            is_banned=is_banned,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_property(db):
    service = PropertyService()

    def _make_property(landlord: User, title: str = "Maple Court", renovation_costs=()) -> Property:
        payload = PropertyCreate(
            title=title,
            address="12 Maple Street",
            lat=51.5,
            lng=-0.12,
            renovations=[
                RenovationCreate(type="repainting", cost=cost) for cost in renovation_costs
            ],
        )
        return service.create_property(db, landlord.id, payload)

    return _make_property


@pytest.fixture
def make_tenancy(db):
    service = TenantService()

    def _make_tenancy(
        landlord: User,
        property_obj: Property,
        rent_start: date = date(2024, 1, 1),
        rent_duration: str = "12 months",
        rent_amount: float = 1000.0,
        is_active: bool = True,
        name: str = "Ada Tenant",
    ) -> Tenant:
        tenant = service.create_tenant(
            db,
            TenantCreate(
                property_id=property_obj.id,
                name=name,
                email="ada@example.com",
                phone="+15551112222",
                rent_amount=rent_amount,
                rent_start=rent_start,
                rent_duration=rent_duration,
            ),
            landlord.id,
        )
        if not is_active:
            tenant.is_active = False
            db.commit()
        return tenant

    return _make_tenancy


# =============================================================================
# HTTP client
# =============================================================================


@pytest.fixture
def client(session_factory, settings, mail_sender):
    from leasekeeper.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_mail_sender] = lambda: mail_sender
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def frozen_now():
    return datetime(2024, 12, 15, 9, 0, 0)

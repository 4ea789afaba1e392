"""
Shared fixtures.

The app runs in-process against an in-memory SQLite database; outbound email
and auth-admin calls go to recording fakes swapped in through
dependency_overrides.
"""
import os

# Must be set before anything under app/ reads settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["TOPUP_CALLBACK_DELAY_SECONDS"] = "0"
os.environ["RESEND_API_KEY"] = "re_test"
os.environ["APP_URL"] = "https://jobtoken.test"

from datetime import datetime
from typing import List, Optional

import httpx
import pytest
from sqlalchemy import select

from app.api.deps import get_auth_admin, get_mailer
from app.core.database import Base, async_session_maker, engine
from app.core.security import create_access_token
from app.main import app
from app.models import Application, Job, Profile, Transaction, Wallet
from app.models.profile import ROLE_ADMIN, ROLE_EMPLOYER, ROLE_SEEKER


class FakeMailer:
    """Stands in for ResendClient; remembers what would have been sent."""

    def __init__(self):
        self.sent: List[dict] = []
        self.error: Optional[Exception] = None

    async def send(self, *, sender, to, subject, html):
        if self.error:
            raise self.error
        self.sent.append({"from": sender, "to": to, "subject": subject, "html": html})
        return f"msg_{len(self.sent)}"


class FakeAuthAdmin:
    """Stands in for SupabaseAuthAdmin."""

    def __init__(self):
        self.calls: List[dict] = []
        self.error: Optional[Exception] = None

    async def generate_magic_link(self, email, redirect_to):
        if self.error:
            raise self.error
        self.calls.append({"email": email, "redirect_to": redirect_to})
        return f"https://auth.test/verify?token=abc&email={email}"


@pytest.fixture(autouse=True)
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def auth_admin():
    return FakeAuthAdmin()


@pytest.fixture
async def client(mailer, auth_admin):
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_auth_admin] = lambda: auth_admin
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(profile: Profile) -> dict:
        token = create_access_token({"sub": str(profile.id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_profile():
    async def _make(
        email: str,
        *,
        role: str = ROLE_SEEKER,
        full_name: Optional[str] = None,
        balance: Optional[int] = 0,
        expires_at: Optional[datetime] = None,
    ) -> Profile:
        """Profile plus wallet; balance=None skips the wallet."""
        async with async_session_maker() as session:
            profile = Profile(email=email, role=role, full_name=full_name)
            session.add(profile)
            await session.flush()
            if balance is not None:
                session.add(Wallet(user_id=profile.id, token_balance=balance, expires_at=expires_at))
            await session.commit()
            return profile

    return _make


@pytest.fixture
async def seeker(make_profile):
    return await make_profile("seeker@example.com", full_name="Amina Seeker", balance=5)


@pytest.fixture
async def employer(make_profile):
    return await make_profile("employer@example.com", role=ROLE_EMPLOYER, full_name="Acme HR")


@pytest.fixture
async def admin(make_profile):
    return await make_profile("admin@example.com", role=ROLE_ADMIN, full_name="Admin")


@pytest.fixture
def make_job():
    async def _make(
        poster: Optional[Profile],
        *,
        title: str = "Backend Engineer",
        job_type: str = "Full-time",
        token_cost: int = 1,
    ) -> Job:
        async with async_session_maker() as session:
            job = Job(
                title=title,
                description="Build APIs",
                job_type=job_type,
                token_cost=token_cost,
                posted_by=poster.id if poster else None,
            )
            session.add(job)
            await session.commit()
            return job

    return _make


@pytest.fixture
def make_application():
    async def _make(job: Job, applicant: Profile, **kwargs) -> Application:
        async with async_session_maker() as session:
            application = Application(job_id=job.id, user_id=applicant.id, **kwargs)
            session.add(application)
            await session.commit()
            return application

    return _make


@pytest.fixture
def make_transaction():
    async def _make(
        owner: Profile,
        *,
        tokens_added: int,
        type: str,
        reference_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Transaction:
        """Ledger row only; the wallet balance is left alone."""
        async with async_session_maker() as session:
            wallet = (
                await session.execute(select(Wallet).where(Wallet.user_id == owner.id))
            ).scalar_one()
            tx = Transaction(
                wallet_id=wallet.id,
                tokens_added=tokens_added,
                type=type,
                reference_id=reference_id,
            )
            if created_at is not None:
                tx.created_at = created_at
            session.add(tx)
            await session.commit()
            return tx

    return _make

"""
Seed script - populates a local database with test data for development.

Usage:
    python -m scripts.seed

In production the hosted store owns the schema and profiles are created by
its sign-up trigger. Locally there's neither, so this script creates the
tables, one profile per role, wallets and a handful of jobs, then prints
bearer tokens for each profile.

This script is IDEMPOTENT - running it twice won't create duplicates.
It checks for existing data before inserting.
"""
import asyncio
import sys
import os
from datetime import timedelta

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import settings
from app.core.database import Base, async_session_maker, close_db, engine
from app.core.security import create_access_token
from app.models import Job, Profile, Transaction, Wallet
from app.models.profile import ROLE_ADMIN, ROLE_EMPLOYER, ROLE_SEEKER
from app.models.transaction import TX_TOPUP
from app.utils.helpers import generate_reference, utcnow
from sqlalchemy import select


# ─── Profiles ─────────────────────────────────────────────────

PROFILES = [
    {"email": "seeker@jobtoken.dev", "full_name": "Wanjiku Seeker", "role": ROLE_SEEKER},
    {"email": "employer@jobtoken.dev", "full_name": "Otieno Employer", "role": ROLE_EMPLOYER},
    {"email": "admin@jobtoken.dev", "full_name": "Admin User", "role": ROLE_ADMIN},
]


# ─── Sample Jobs ──────────────────────────────────────────────
# Posted by the employer profile above.

SAMPLE_JOBS = [
    {
        "title": "Backend Engineer (Python)",
        "description": "Build and run the APIs behind our M-Pesa integrations.",
        "job_type": "Full-time",
        "token_cost": 2,
    },
    {
        "title": "Frontend Developer",
        "description": "React and TypeScript across our customer dashboard.",
        "job_type": "Contract",
        "token_cost": 1,
    },
    {
        "title": "Data Analyst Intern",
        "description": "SQL, spreadsheets and a curious mind.",
        "job_type": "Internship",
        "token_cost": 1,
    },
    {
        "title": "DevOps Engineer",
        "description": "Terraform, Kubernetes and on-call for the platform team.",
        "job_type": "Remote",
        "token_cost": 3,
    },
]


async def seed():
    """Run the seed process."""
    print("Seeding database...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("  Tables ready")

    async with async_session_maker() as db:

        # ── Profiles + wallets ────────────────────────────
        profiles = {}
        for data in PROFILES:
            existing = (await db.execute(
                select(Profile).where(Profile.email == data["email"])
            )).scalar_one_or_none()
            if existing:
                profiles[data["role"]] = existing
                continue

            profile = Profile(**data)
            db.add(profile)
            await db.flush()

            wallet = Wallet(user_id=profile.id, token_balance=0)
            db.add(wallet)
            await db.flush()

            # Start the seeker with one bundle so they can apply straight away
            if data["role"] == ROLE_SEEKER:
                wallet.token_balance = settings.topup_tokens
                wallet.expires_at = utcnow() + timedelta(days=settings.wallet_validity_days)
                db.add(Transaction(
                    wallet_id=wallet.id,
                    tokens_added=settings.topup_tokens,
                    type=TX_TOPUP,
                    reference_id=generate_reference("MPESA", 8),
                ))

            profiles[data["role"]] = profile
            print(f"  Created {data['role']}: {data['email']}")

        await db.commit()

        # ── Jobs ──────────────────────────────────────────
        employer = profiles[ROLE_EMPLOYER]
        created = 0
        for data in SAMPLE_JOBS:
            existing = (await db.execute(
                select(Job).where(Job.title == data["title"], Job.posted_by == employer.id)
            )).scalar_one_or_none()
            if existing:
                continue
            db.add(Job(posted_by=employer.id, **data))
            created += 1

        await db.commit()
        print(f"  Created {created} jobs ({len(SAMPLE_JOBS) - created} already present)")

    # ── Dev tokens ────────────────────────────────────────
    print("\nBearer tokens (valid 24h):")
    for role, profile in profiles.items():
        token = create_access_token({"sub": str(profile.id)}, expires_delta=timedelta(hours=24))
        print(f"  {role:<9} {token}")

    await close_db()
    print("\nDone.")


if __name__ == "__main__":
    asyncio.run(seed())

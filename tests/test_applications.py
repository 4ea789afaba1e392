"""Applying with tokens, status updates and the seeker/employer application reads."""
from datetime import timedelta
from uuid import uuid4

from sqlalchemy import select

from app.core.database import async_session_maker
from app.core.exceptions import EmailDeliveryException
from app.models import Application, Transaction, Wallet
from app.models.transaction import TX_DEDUCTION
from app.services.application_service import (
    ERR_ALREADY_APPLIED,
    ERR_EXPIRED,
    ERR_INSUFFICIENT,
    ERR_JOB_NOT_FOUND,
    ERR_WALLET_NOT_FOUND,
)
from app.utils.helpers import utcnow


async def _state(user_id):
    """(balance, ledger rows, application count) for one user."""
    async with async_session_maker() as session:
        wallet = (
            await session.execute(select(Wallet).where(Wallet.user_id == user_id))
        ).scalar_one()
        ledger = (
            await session.execute(select(Transaction).where(Transaction.wallet_id == wallet.id))
        ).scalars().all()
        apps = (
            await session.execute(select(Application).where(Application.user_id == user_id))
        ).scalars().all()
        return wallet.token_balance, list(ledger), list(apps)


async def _apply(client, job_id, headers):
    return await client.post("/api/applications/apply", json={"jobId": str(job_id)}, headers=headers)


# ── Apply ────────────────────────────────────────────────────────────────────


async def test_apply_deducts_cost_once_and_records_everything(
    client, seeker, employer, make_job, mailer, auth_headers
):
    job = await make_job(employer, title="Data Engineer", token_cost=2)

    resp = await _apply(client, job.id, auth_headers(seeker))

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["newBalance"] == 3
    assert "applicationId" in body
    assert "jobTitle" not in body

    balance, ledger, apps = await _state(seeker.id)
    assert balance == 3
    assert len(apps) == 1
    assert apps[0].status == "pending"
    assert str(apps[0].id) == body["applicationId"]
    assert len(ledger) == 1
    assert ledger[0].type == TX_DEDUCTION
    assert ledger[0].tokens_added == -2
    assert ledger[0].reference_id == f"APPLY-{apps[0].id}"

    # Receipt goes out as a background task
    assert len(mailer.sent) == 1
    assert mailer.sent[0]["to"] == ["seeker@example.com"]
    assert mailer.sent[0]["subject"] == "Application Confirmed: Data Engineer"


async def test_second_apply_to_same_job_is_refused(
    client, seeker, employer, make_job, auth_headers
):
    job = await make_job(employer)
    await _apply(client, job.id, auth_headers(seeker))

    resp = await _apply(client, job.id, auth_headers(seeker))

    assert resp.json() == {"success": False, "error": ERR_ALREADY_APPLIED}
    balance, ledger, apps = await _state(seeker.id)
    assert balance == 4
    assert len(ledger) == 1
    assert len(apps) == 1


async def test_apply_with_expired_wallet_is_refused(
    client, make_profile, employer, make_job, mailer, auth_headers
):
    user = await make_profile(
        "expired@example.com", balance=10, expires_at=utcnow() - timedelta(minutes=1)
    )
    job = await make_job(employer)

    resp = await _apply(client, job.id, auth_headers(user))

    assert resp.json() == {"success": False, "error": ERR_EXPIRED}
    balance, ledger, apps = await _state(user.id)
    assert (balance, ledger, apps) == (10, [], [])
    assert mailer.sent == []


async def test_apply_without_enough_tokens_is_refused(
    client, make_profile, employer, make_job, auth_headers
):
    user = await make_profile("broke@example.com", balance=1)
    job = await make_job(employer, token_cost=3)

    resp = await _apply(client, job.id, auth_headers(user))

    assert resp.json() == {"success": False, "error": ERR_INSUFFICIENT}
    balance, ledger, apps = await _state(user.id)
    assert (balance, ledger, apps) == (1, [], [])


async def test_apply_to_unknown_job(client, seeker, auth_headers):
    resp = await _apply(client, uuid4(), auth_headers(seeker))
    assert resp.json() == {"success": False, "error": ERR_JOB_NOT_FOUND}


async def test_apply_without_wallet(client, make_profile, employer, make_job, auth_headers):
    user = await make_profile("nowallet@example.com", balance=None)
    job = await make_job(employer)

    resp = await _apply(client, job.id, auth_headers(user))
    assert resp.json() == {"success": False, "error": ERR_WALLET_NOT_FOUND}


async def test_receipt_failure_does_not_fail_apply(
    client, seeker, employer, make_job, mailer, auth_headers
):
    mailer.error = EmailDeliveryException("provider down")
    job = await make_job(employer)

    resp = await _apply(client, job.id, auth_headers(seeker))

    assert resp.status_code == 200
    assert resp.json()["success"] is True


# ── Status updates ───────────────────────────────────────────────────────────


async def test_shortlisting_emails_the_applicant(
    client, seeker, employer, make_job, make_application, mailer, auth_headers
):
    job = await make_job(employer, title="QA Lead")
    application = await make_application(job, seeker)

    resp = await client.post(
        "/api/applications/update-status",
        json={"applicationId": str(application.id), "status": "shortlisted", "notes": "Call Monday"},
        headers=auth_headers(employer),
    )

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert len(mailer.sent) == 1
    email = mailer.sent[0]
    assert email["to"] == ["seeker@example.com"]
    assert email["subject"] == "Great news: You've been shortlisted for QA Lead"
    assert "Amina Seeker" in email["html"]
    assert "Call Monday" in email["html"]

    async with async_session_maker() as session:
        stored = await session.get(Application, application.id)
        assert stored.status == "shortlisted"
        assert stored.notes == "Call Monday"


async def test_rejection_emails_the_applicant(
    client, seeker, employer, make_job, make_application, mailer, auth_headers
):
    job = await make_job(employer, title="QA Lead")
    application = await make_application(job, seeker)

    await client.post(
        "/api/applications/update-status",
        json={"applicationId": str(application.id), "status": "rejected"},
        headers=auth_headers(employer),
    )

    assert [e["subject"] for e in mailer.sent] == ["Update on your application for QA Lead"]


async def test_other_statuses_are_stored_without_email(
    client, seeker, employer, make_job, make_application, mailer, auth_headers
):
    job = await make_job(employer)
    application = await make_application(job, seeker)

    resp = await client.post(
        "/api/applications/update-status",
        json={"applicationId": str(application.id), "status": "interviewing"},
        headers=auth_headers(employer),
    )

    assert resp.status_code == 200
    assert mailer.sent == []
    async with async_session_maker() as session:
        assert (await session.get(Application, application.id)).status == "interviewing"


async def test_update_status_unknown_application(client, employer, auth_headers):
    resp = await client.post(
        "/api/applications/update-status",
        json={"applicationId": str(uuid4()), "status": "shortlisted"},
        headers=auth_headers(employer),
    )

    assert resp.status_code == 500
    assert resp.json()["message"] == "Application not found"


async def test_update_status_requires_status(client, employer, auth_headers):
    resp = await client.post(
        "/api/applications/update-status",
        json={"applicationId": str(uuid4())},
        headers=auth_headers(employer),
    )

    assert resp.status_code == 400
    assert resp.json()["message"] == "status is required"
    assert resp.json()["error"] == "VALIDATION_ERROR"
    assert resp.json()["details"][0]["field"] == "body.status"


async def test_employer_cannot_review_another_employers_job(
    client, seeker, employer, make_profile, make_job, make_application, mailer, auth_headers
):
    rival = await make_profile("rival@example.com", role="employer")
    job = await make_job(employer)
    application = await make_application(job, seeker)

    resp = await client.post(
        "/api/applications/update-status",
        json={"applicationId": str(application.id), "status": "rejected"},
        headers=auth_headers(rival),
    )

    assert resp.status_code == 403
    assert mailer.sent == []


async def test_seekers_cannot_update_status(
    client, seeker, employer, make_job, make_application, auth_headers
):
    job = await make_job(employer)
    application = await make_application(job, seeker)

    resp = await client.post(
        "/api/applications/update-status",
        json={"applicationId": str(application.id), "status": "shortlisted"},
        headers=auth_headers(seeker),
    )
    assert resp.status_code == 403


async def test_status_email_failure_surfaces_after_update(
    client, seeker, employer, make_job, make_application, mailer, auth_headers
):
    mailer.error = EmailDeliveryException("Invalid `to` field")
    job = await make_job(employer)
    application = await make_application(job, seeker)

    resp = await client.post(
        "/api/applications/update-status",
        json={"applicationId": str(application.id), "status": "shortlisted"},
        headers=auth_headers(employer),
    )

    assert resp.status_code == 500
    assert resp.json()["message"] == "Invalid `to` field"
    async with async_session_maker() as session:
        assert (await session.get(Application, application.id)).status == "shortlisted"


# ── Reads ────────────────────────────────────────────────────────────────────


async def test_my_applications_and_stats(
    client, seeker, employer, make_job, auth_headers
):
    first = await make_job(employer, title="First", token_cost=1)
    second = await make_job(employer, title="Second", token_cost=2)
    await _apply(client, first.id, auth_headers(seeker))
    await _apply(client, second.id, auth_headers(seeker))

    mine = (await client.get("/api/applications/mine", headers=auth_headers(seeker))).json()
    assert {a["job_title"] for a in mine["applications"]} == {"First", "Second"}
    assert set(mine["applied_job_ids"]) == {str(first.id), str(second.id)}

    stats = (await client.get("/api/applications/stats", headers=auth_headers(seeker))).json()
    assert stats == {"applications": 2, "spent": 3}


async def test_employer_sees_applications_to_own_jobs_only(
    client, seeker, employer, make_profile, make_job, make_application, auth_headers
):
    rival = await make_profile("rival@example.com", role="employer")
    mine = await make_job(employer, title="Mine")
    theirs = await make_job(rival, title="Theirs")
    await make_application(mine, seeker)
    await make_application(theirs, seeker)

    resp = await client.get("/api/employer/applications", headers=auth_headers(employer))

    rows = resp.json()
    assert len(rows) == 1
    assert rows[0]["job_title"] == "Mine"
    assert rows[0]["applicant_email"] == "seeker@example.com"
    assert rows[0]["applicant_name"] == "Amina Seeker"
    assert rows[0]["status"] == "pending"

"""Admin portal: grants, moderation, stats, charts, export and search."""
import csv
import io
from datetime import timedelta

from sqlalchemy import select

from app.core.database import async_session_maker
from app.models import Application, Job, Transaction, Wallet
from app.models.transaction import TX_ADMIN_GRANT, TX_DEDUCTION, TX_TOPUP
from app.utils.helpers import utcnow


# ── Grants ───────────────────────────────────────────────────────────────────


async def test_grant_adds_exact_amount_and_one_ledger_row(client, admin, seeker, auth_headers):
    resp = await client.post(
        "/api/admin/tokens/grant",
        json={"email": "seeker@example.com", "amount": 7},
        headers=auth_headers(admin),
    )

    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    async with async_session_maker() as session:
        wallet = (
            await session.execute(select(Wallet).where(Wallet.user_id == seeker.id))
        ).scalar_one()
        ledger = (
            await session.execute(select(Transaction).where(Transaction.wallet_id == wallet.id))
        ).scalars().all()

    assert wallet.token_balance == 12
    assert wallet.expires_at is None
    assert len(ledger) == 1
    assert ledger[0].type == TX_ADMIN_GRANT
    assert ledger[0].tokens_added == 7
    assert ledger[0].reference_id.startswith("ADMIN-")
    assert len(ledger[0].reference_id) == len("ADMIN-") + 6


async def test_grant_to_unknown_email(client, admin, auth_headers):
    resp = await client.post(
        "/api/admin/tokens/grant",
        json={"email": "nobody@example.com", "amount": 5},
        headers=auth_headers(admin),
    )

    assert resp.status_code == 500
    assert resp.json()["message"] == "User not found"


async def test_grant_to_profile_without_wallet(client, admin, make_profile, auth_headers):
    await make_profile("nowallet@example.com", balance=None)
    resp = await client.post(
        "/api/admin/tokens/grant",
        json={"email": "nowallet@example.com", "amount": 5},
        headers=auth_headers(admin),
    )

    assert resp.status_code == 500
    assert resp.json()["message"] == "Wallet not found"


async def test_grant_rejects_non_positive_amount(client, admin, seeker, auth_headers):
    resp = await client.post(
        "/api/admin/tokens/grant",
        json={"email": "seeker@example.com", "amount": 0},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 400


async def test_admin_endpoints_require_admin(client, employer, auth_headers):
    for path in ("/api/admin/stats", "/api/admin/chart-data", "/api/admin/export-csv"):
        resp = await client.get(path, headers=auth_headers(employer))
        assert resp.status_code == 403, path


# ── Jobs ─────────────────────────────────────────────────────────────────────


async def test_delete_job(client, admin, employer, make_job, auth_headers):
    job = await make_job(employer)

    resp = await client.post(
        "/api/admin/jobs/delete", json={"jobId": str(job.id)}, headers=auth_headers(admin)
    )

    assert resp.json() == {"success": True}
    async with async_session_maker() as session:
        assert await session.get(Job, job.id) is None


async def test_delete_job_removes_its_applications(
    client, admin, seeker, employer, make_job, make_application, auth_headers
):
    job = await make_job(employer)
    application = await make_application(job, seeker)

    resp = await client.post(
        "/api/admin/jobs/delete", json={"jobId": str(job.id)}, headers=auth_headers(admin)
    )

    assert resp.json() == {"success": True}
    async with async_session_maker() as session:
        left = await session.execute(select(Application).where(Application.job_id == job.id))
        assert left.scalars().all() == []

    stats = (await client.get("/api/admin/stats", headers=auth_headers(admin))).json()
    assert stats["total_applications"] == 0

    resp = await client.post(
        "/api/applications/update-status",
        json={"applicationId": str(application.id), "status": "shortlisted"},
        headers=auth_headers(employer),
    )
    assert resp.status_code == 500
    assert resp.json()["message"] == "Application not found"


async def test_delete_unknown_job_is_a_no_op(client, admin, auth_headers):
    resp = await client.post(
        "/api/admin/jobs/delete",
        json={"jobId": "00000000-0000-0000-0000-000000000000"},
        headers=auth_headers(admin),
    )

    assert resp.json() == {"success": True}


async def test_admin_job_list_names_the_poster(client, admin, employer, make_job, auth_headers):
    await make_job(employer, title="Designer")

    rows = (await client.get("/api/admin/jobs", headers=auth_headers(admin))).json()

    assert rows[0]["title"] == "Designer"
    assert rows[0]["poster_name"] == "Acme HR"
    assert rows[0]["poster_email"] == "employer@example.com"


# ── Stats ────────────────────────────────────────────────────────────────────


async def test_stats(
    client, admin, seeker, employer, make_profile, make_job, make_application,
    make_transaction, auth_headers,
):
    await make_profile("second@example.com")
    job = await make_job(employer)
    await make_application(job, seeker)
    await make_transaction(seeker, tokens_added=5, type=TX_TOPUP, reference_id="MPESA-AAAAAAAA")
    await make_transaction(seeker, tokens_added=5, type=TX_TOPUP, reference_id="MPESA-BBBBBBBB")
    await make_transaction(seeker, tokens_added=3, type=TX_ADMIN_GRANT, reference_id="ADMIN-CCCCCC")

    resp = await client.get("/api/admin/stats", headers=auth_headers(admin))

    assert resp.json() == {
        "total_revenue": 200,
        "active_seekers": 2,
        "registered_employers": 1,
        "total_applications": 1,
    }


async def test_advanced_stats(
    client, admin, seeker, employer, make_profile, make_job, make_application, auth_headers
):
    other = await make_profile("second@example.com", balance=4)
    remote = await make_job(employer, job_type="Remote")
    contract = await make_job(employer, job_type="Contract")
    now = utcnow()
    await make_application(
        remote, seeker, status="shortlisted",
        created_at=now - timedelta(days=3), updated_at=now,
    )
    await make_application(
        remote, other, status="shortlisted",
        created_at=now - timedelta(days=2), updated_at=now,
    )
    await make_application(contract, seeker)

    body = (await client.get("/api/admin/advanced-stats", headers=auth_headers(admin))).json()

    # seeker 5 + other 4 + employer 0 + admin 0
    assert body["token_liability"] == 9
    assert body["revenue_per_category"] == {"Remote": 40, "Contract": 20}
    assert body["avg_time_to_hire"] == 2.5


async def test_advanced_stats_with_nothing_shortlisted(client, admin, auth_headers):
    body = (await client.get("/api/admin/advanced-stats", headers=auth_headers(admin))).json()

    assert body["avg_time_to_hire"] == 0.0
    assert body["revenue_per_category"] == {}


async def test_advanced_stats_keeps_categories_without_applications(
    client, admin, employer, make_job, auth_headers
):
    await make_job(employer, job_type="Contract")

    body = (await client.get("/api/admin/advanced-stats", headers=auth_headers(admin))).json()

    assert body["revenue_per_category"] == {"Contract": 0}


async def test_analytics_report_falls_back_to_computed_rows(
    client, admin, seeker, employer, make_job, make_application, auth_headers
):
    job = await make_job(employer, title="Analyst", job_type="Internship")
    await make_application(job, seeker)

    rows = (await client.get("/api/admin/analytics-report", headers=auth_headers(admin))).json()

    assert len(rows) == 1
    row = rows[0]
    assert row["id"] == str(job.id)
    assert row["title"] == "Analyst"
    assert row["category"] == "Internship"
    assert row["employer"] == "Acme HR"
    assert row["applicant_count"] == 1
    assert "posted_at" in row


async def test_chart_data_covers_seven_days_ending_today(
    client, admin, seeker, employer, make_job, make_application, make_transaction, auth_headers
):
    job = await make_job(employer)
    await make_application(job, seeker)
    await make_transaction(seeker, tokens_added=5, type=TX_TOPUP, reference_id="MPESA-TODAY001")
    await make_transaction(
        seeker, tokens_added=5, type=TX_TOPUP, reference_id="MPESA-OLD00001",
        created_at=utcnow() - timedelta(days=10),
    )
    await make_transaction(seeker, tokens_added=-1, type=TX_DEDUCTION, reference_id="APPLY-x")

    points = (await client.get("/api/admin/chart-data", headers=auth_headers(admin))).json()

    today = utcnow().date()
    assert [p["date"] for p in points] == [
        (today - timedelta(days=i)).isoformat() for i in range(6, -1, -1)
    ]
    assert points[-1] == {"date": today.isoformat(), "applications": 1, "revenue": 100}
    assert all(p["applications"] == 0 and p["revenue"] == 0 for p in points[:-1])


# ── Export ───────────────────────────────────────────────────────────────────


async def test_export_csv_keeps_last_30_days_newest_first(
    client, admin, seeker, make_transaction, auth_headers
):
    now = utcnow()
    await make_transaction(
        seeker, tokens_added=5, type=TX_TOPUP, reference_id="MPESA-OLDEST01",
        created_at=now - timedelta(days=20),
    )
    await make_transaction(
        seeker, tokens_added=-1, type=TX_DEDUCTION, reference_id="APPLY-123",
        created_at=now - timedelta(days=1),
    )
    await make_transaction(
        seeker, tokens_added=5, type=TX_TOPUP, reference_id="MPESA-TOOOLD01",
        created_at=now - timedelta(days=45),
    )

    resp = await client.get("/api/admin/export-csv", headers=auth_headers(admin))

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.headers["content-disposition"] == "attachment; filename=financial_log.csv"

    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == ["Date", "User Email", "Tokens", "Type", "Reference ID"]
    assert [r[4] for r in rows[1:]] == ["APPLY-123", "MPESA-OLDEST01"]
    assert rows[1][1:4] == ["seeker@example.com", "-1", "deduction"]


async def test_export_csv_with_no_transactions_is_just_the_header(client, admin, auth_headers):
    resp = await client.get("/api/admin/export-csv", headers=auth_headers(admin))
    assert resp.text == "Date,User Email,Tokens,Type,Reference ID\n"


# ── Search ───────────────────────────────────────────────────────────────────


async def test_global_search_matches_reference_and_email(
    client, admin, seeker, make_transaction, auth_headers
):
    await make_transaction(seeker, tokens_added=5, type=TX_TOPUP, reference_id="MPESA-XYZ12345")

    by_ref = (
        await client.get(
            "/api/admin/global-search", params={"query": "xyz12"}, headers=auth_headers(admin)
        )
    ).json()
    assert [t["reference_id"] for t in by_ref["transactions"]] == ["MPESA-XYZ12345"]
    assert by_ref["transactions"][0]["email"] == "seeker@example.com"

    by_email = (
        await client.get(
            "/api/admin/global-search", params={"query": "SEEKER@"}, headers=auth_headers(admin)
        )
    ).json()
    assert [p["email"] for p in by_email["profiles"]] == ["seeker@example.com"]


async def test_global_search_ignores_short_queries(
    client, admin, seeker, make_transaction, auth_headers
):
    await make_transaction(seeker, tokens_added=5, type=TX_TOPUP, reference_id="MPESA-AB000000")

    for query in ("", "a", "ab"):
        body = (
            await client.get(
                "/api/admin/global-search", params={"query": query}, headers=auth_headers(admin)
            )
        ).json()
        assert body == {"transactions": [], "profiles": []}, query


async def test_global_search_caps_results(client, admin, make_profile, auth_headers):
    for i in range(8):
        await make_profile(f"bulk{i}@example.com")

    body = (
        await client.get(
            "/api/admin/global-search", params={"query": "bulk"}, headers=auth_headers(admin)
        )
    ).json()
    assert len(body["profiles"]) == 5


async def test_recent_transactions_include_owner_email(
    client, admin, seeker, make_transaction, auth_headers
):
    await make_transaction(seeker, tokens_added=5, type=TX_TOPUP, reference_id="MPESA-RECENT01")

    rows = (await client.get("/api/admin/transactions", headers=auth_headers(admin))).json()

    assert rows[0]["reference_id"] == "MPESA-RECENT01"
    assert rows[0]["email"] == "seeker@example.com"

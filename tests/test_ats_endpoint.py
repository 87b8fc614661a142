"""
Integration tests for the ATS endpoints.
"""
from cvgenius.core.rate_limit import RateLimiter
from cvgenius.db.models.ats_report import ATSReportRecord
from cvgenius.main import app


RESUME = (
    "Experienced software engineer with 5 years experience. Skills: Python, Go. "
    "Education: BS Computer Science. Summary: results-driven."
)
JD = "Looking for software engineer with python experience and cloud skills"


def _scan(client, headers, **extra):
    body = {"resumeContent": RESUME, "jobDescription": JD}
    body.update(extra)
    return client.post("/api/ats/test", json=body, headers=headers)


def test_ats_test_returns_report(client, auth_headers):
    """POST /api/ats/test wraps the report in a success envelope."""
    response = _scan(client, auth_headers())

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True

    report = data["report"]
    assert report["atsScore"] == 85
    assert report["keyword"]["score"] == 30
    assert report["keyword"]["matches"] == 6
    assert report["keyword"]["missingKeywords"] == ["looking", "cloud"]
    assert report["formatting"]["score"] == 30
    assert report["structure"]["score"] == 20
    assert report["structure"]["sections"] == {
        "hasExperience": True,
        "hasEducation": True,
        "hasSkills": True,
        "hasSummary": True,
    }
    assert report["content"]["score"] == 5


def test_ats_test_requires_both_texts(client, auth_headers, db_session):
    """Missing or blank texts are rejected before scoring and do not use quota."""
    headers = auth_headers()

    assert client.post("/api/ats/test", json={"resumeContent": RESUME}, headers=headers).status_code == 400
    assert client.post("/api/ats/test", json={"jobDescription": JD}, headers=headers).status_code == 400
    response = client.post(
        "/api/ats/test",
        json={"resumeContent": "   ", "jobDescription": JD},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Resume and job description required"

    usage = client.get("/api/me/usage", headers=headers).json()
    ats = next(f for f in usage["features"] if f["feature"] == "ats_scan")
    assert ats["used"] == 0
    assert db_session.query(ATSReportRecord).count() == 0


def test_ats_test_requires_auth(client):
    response = client.post("/api/ats/test", json={"resumeContent": RESUME, "jobDescription": JD})
    assert response.status_code in (401, 403)


def test_ats_test_rejects_invalid_token(client):
    headers = {"Authorization": "Bearer not-a-token"}
    response = client.post("/api/ats/test", json={"resumeContent": RESUME, "jobDescription": JD}, headers=headers)
    assert response.status_code == 401


def test_ats_test_stores_history(client, auth_headers, db_session):
    """Each scan is stored verbatim in the caller's history."""
    headers = auth_headers()
    report = _scan(client, headers).json()["report"]

    record = db_session.query(ATSReportRecord).one()
    assert record.user_id == "user_1"
    assert record.resume_id is None
    assert record.score == report["atsScore"]
    assert record.report == report


def test_ats_test_updates_resume_score(client, auth_headers):
    """A resumeId owned by the caller gets its ATS score updated."""
    headers = auth_headers()
    resume_id = client.post("/api/resumes", json={"title": "Backend"}, headers=headers).json()["resumeId"]

    report = _scan(client, headers, resumeId=resume_id).json()["report"]

    resume = client.get(f"/api/resumes/{resume_id}", headers=headers).json()
    assert resume["atsScore"] == report["atsScore"]

    history = client.get("/api/ats/history", params={"resumeId": resume_id}, headers=headers).json()
    assert len(history) == 1
    assert history[0]["resumeId"] == resume_id


def test_ats_test_ignores_foreign_resume(client, auth_headers):
    """Another user's resumeId is not touched."""
    owner = auth_headers("owner")
    resume_id = client.post("/api/resumes", json={}, headers=owner).json()["resumeId"]

    response = _scan(client, auth_headers("intruder"), resumeId=resume_id)

    assert response.status_code == 200
    assert client.get(f"/api/resumes/{resume_id}", headers=owner).json()["atsScore"] == 0


def test_ats_history_newest_first_and_scoped(client, auth_headers):
    headers = auth_headers()
    client.post("/api/ats/test", json={"resumeContent": "first resume", "jobDescription": JD}, headers=headers)
    _scan(client, headers)
    _scan(client, auth_headers("someone_else"))

    history = client.get("/api/ats/history", headers=headers).json()

    assert len(history) == 2
    assert history[0]["score"] == 85
    assert history[1]["report"]["content"]["wordCount"] == 2


def test_ats_free_plan_quota(client, auth_headers):
    """Free plan allows 5 scans per month, then 429 with structured detail."""
    headers = auth_headers()
    for _ in range(5):
        assert _scan(client, headers).status_code == 200

    response = _scan(client, headers)

    assert response.status_code == 429
    detail = response.json()["detail"]
    assert detail["error"] == "quota_exceeded"
    assert detail["feature"] == "ats_scan"
    assert detail["plan"] == "free"
    assert detail["limit"] == 5
    assert detail["used"] == 5
    assert detail["remaining"] == 0


def test_ats_premium_plan_unlimited(client, auth_headers, make_subscription):
    make_subscription("user_1", "premium")
    headers = auth_headers()

    for _ in range(7):
        assert _scan(client, headers).status_code == 200


def test_ats_rate_limit(client, auth_headers, make_subscription):
    """The per-user rate limiter answers 429 once the window is used up."""
    make_subscription("user_1", "premium")
    original = app.state.rate_limiter
    app.state.rate_limiter = RateLimiter(max_requests=2, window_seconds=60)
    try:
        headers = auth_headers()
        assert _scan(client, headers).status_code == 200
        assert _scan(client, headers).status_code == 200

        response = _scan(client, headers)
        assert response.status_code == 429
        assert "Rate limit exceeded" in response.json()["detail"]

        # Other users have their own window
        assert _scan(client, auth_headers("user_2")).status_code == 200
    finally:
        app.state.rate_limiter = original


def test_blank_request_does_not_use_rate_window(client, auth_headers, make_subscription):
    make_subscription("user_1", "premium")
    original = app.state.rate_limiter
    app.state.rate_limiter = RateLimiter(max_requests=1, window_seconds=60)
    try:
        headers = auth_headers()
        blank = client.post("/api/ats/test", json={"resumeContent": " ", "jobDescription": JD}, headers=headers)
        assert blank.status_code == 400

        assert _scan(client, headers).status_code == 200
        assert _scan(client, headers).status_code == 429
    finally:
        app.state.rate_limiter = original

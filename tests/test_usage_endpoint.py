"""
Integration tests for GET /api/me/usage and the public endpoints.
"""


def test_get_usage_free_plan_no_usage(client, auth_headers):
    response = client.get("/api/me/usage", headers=auth_headers())

    assert response.status_code == 200
    data = response.json()
    assert data["plan"] == "free"
    assert len(data["month_key"]) == 7
    assert [f["feature"] for f in data["features"]] == ["ats_scan", "ai_suggestions"]
    for feature in data["features"]:
        assert feature["limit"] == 5
        assert feature["used"] == 0
        assert feature["remaining"] == 5
        assert feature["unlimited"] is False


def test_get_usage_counts_scans(client, auth_headers):
    headers = auth_headers()
    client.post(
        "/api/ats/test",
        json={"resumeContent": "Python developer", "jobDescription": "python developer"},
        headers=headers,
    )

    data = client.get("/api/me/usage", headers=headers).json()

    ats = next(f for f in data["features"] if f["feature"] == "ats_scan")
    assert ats["used"] == 1
    assert ats["remaining"] == 4


def test_get_usage_premium_unlimited(client, auth_headers, make_subscription):
    make_subscription("user_1", "premium")

    data = client.get("/api/me/usage", headers=auth_headers()).json()

    assert data["plan"] == "premium"
    for feature in data["features"]:
        assert feature["unlimited"] is True
        assert feature["limit"] is None
        assert feature["remaining"] is None


def test_get_usage_unauthorized(client):
    assert client.get("/api/me/usage").status_code in (401, 403)


def test_get_usage_invalid_token(client):
    response = client.get("/api/me/usage", headers={"Authorization": "Bearer invalid_token"})
    assert response.status_code == 401


def test_plans_catalogue(client):
    response = client.get("/api/plans")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert [p["id"] for p in data["plans"]] == ["free", "pro", "premium"]
    assert [p["price"] for p in data["plans"]] == [0, 9.99, 19.99]
    assert next(p for p in data["plans"] if p["id"] == "pro")["popular"] is True


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


def test_root(client):
    assert client.get("/").json() == {"status": "CVGenius API running"}

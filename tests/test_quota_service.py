"""
Unit tests for quota service.
Tests quota checking, usage recording, and plan limits.
"""
import pytest
from fastapi import HTTPException

from cvgenius.core.plan_limits import get_plan_limit, has_unlimited_quota, normalize_plan
from cvgenius.core.quota_guard import enforce_quota, require_quota
from cvgenius.db.models.usage import UsageEvent
from cvgenius.services.quota_service import (
    get_plan_for_user,
    get_month_usage,
    check_and_consume,
    check_quota,
    record_usage,
    get_usage_for_response,
)


def _add_usage(db, user_id, feature, amount, month_key=None):
    db.add(UsageEvent(
        user_id=user_id,
        feature=feature,
        amount=amount,
        month_key=month_key or UsageEvent.get_month_key(),
    ))
    db.commit()


def test_plan_limits_table():
    assert get_plan_limit("free", "ats_scan") == 5
    assert get_plan_limit("PRO", "ai_suggestions") == 50
    assert has_unlimited_quota("premium", "ats_scan")
    assert normalize_plan("enterprise") == "free"
    assert normalize_plan(None) == "free"


def test_get_plan_for_user_no_subscription(db_session):
    """Users without a subscription are on the free plan."""
    assert get_plan_for_user(db_session, "user_1") == "free"


def test_get_plan_for_user_pro(db_session, make_subscription):
    make_subscription("user_1", "pro")
    assert get_plan_for_user(db_session, "user_1") == "pro"


def test_inactive_subscription_counts_as_free(db_session, make_subscription):
    make_subscription("user_1", "premium", status="canceled")
    assert get_plan_for_user(db_session, "user_1") == "free"


def test_get_month_usage_sums_per_feature(db_session):
    _add_usage(db_session, "user_1", "ats_scan", 2)
    _add_usage(db_session, "user_1", "ats_scan", 3)
    _add_usage(db_session, "user_1", "ai_suggestions", 1)
    _add_usage(db_session, "user_1", "ats_scan", 9, month_key="2000-01")
    _add_usage(db_session, "user_2", "ats_scan", 4)

    usage = get_month_usage(db_session, "user_1", UsageEvent.get_month_key())

    assert usage == {"ats_scan": 5, "ai_suggestions": 1}


def test_check_and_consume_under_limit(db_session):
    allowed, used, limit, remaining = check_and_consume(db_session, "user_1", "ats_scan")

    assert allowed is True
    assert (used, limit, remaining) == (1, 5, 4)
    assert get_month_usage(db_session, "user_1", UsageEvent.get_month_key())["ats_scan"] == 1


def test_check_and_consume_last_credit_is_allowed(db_session):
    """Reaching the limit exactly is allowed; only going past it is refused."""
    _add_usage(db_session, "user_1", "ats_scan", 4)

    allowed, used, limit, remaining = check_and_consume(db_session, "user_1", "ats_scan")

    assert allowed is True
    assert (used, remaining) == (5, 0)


def test_check_and_consume_exceeds_limit(db_session):
    _add_usage(db_session, "user_1", "ats_scan", 5)

    allowed, used, limit, remaining = check_and_consume(db_session, "user_1", "ats_scan")

    assert allowed is False
    assert (used, limit, remaining) == (5, 5, 0)
    # Usage is not recorded on refusal
    assert get_month_usage(db_session, "user_1", UsageEvent.get_month_key())["ats_scan"] == 5


def test_check_and_consume_premium_unlimited(db_session, make_subscription):
    make_subscription("user_1", "premium")
    _add_usage(db_session, "user_1", "ats_scan", 1000)

    allowed, used, limit, remaining = check_and_consume(db_session, "user_1", "ats_scan")

    assert allowed is True
    assert limit is None
    assert remaining == -1
    assert used == 1001


def test_enforce_quota_raises_429(db_session):
    _add_usage(db_session, "user_1", "ai_suggestions", 5)

    with pytest.raises(HTTPException) as exc_info:
        enforce_quota(db_session, "user_1", "ai_suggestions")

    assert exc_info.value.status_code == 429
    assert exc_info.value.detail["error"] == "quota_exceeded"
    assert exc_info.value.detail["limit"] == 5


def test_enforce_quota_returns_remaining(db_session, make_subscription):
    assert enforce_quota(db_session, "user_1", "ats_scan") == 4
    make_subscription("user_2", "premium")
    assert enforce_quota(db_session, "user_2", "ats_scan") is None


def test_check_quota_records_nothing(db_session):
    _add_usage(db_session, "user_1", "ai_suggestions", 4)

    assert check_quota(db_session, "user_1", "ai_suggestions") == (True, 4, 5, 1)
    assert check_quota(db_session, "user_1", "ai_suggestions", amount=2) == (False, 4, 5, 1)
    assert get_month_usage(db_session, "user_1", UsageEvent.get_month_key())["ai_suggestions"] == 4


def test_require_quota_then_record_usage(db_session):
    _add_usage(db_session, "user_1", "ai_suggestions", 4)

    require_quota(db_session, "user_1", "ai_suggestions")
    record_usage(db_session, "user_1", "ai_suggestions")

    with pytest.raises(HTTPException) as exc_info:
        require_quota(db_session, "user_1", "ai_suggestions")
    assert exc_info.value.status_code == 429
    assert exc_info.value.detail["used"] == 5


def test_get_usage_for_response(db_session):
    _add_usage(db_session, "user_1", "ats_scan", 1)

    result = get_usage_for_response(db_session, "user_1")

    assert result["plan"] == "free"
    assert result["month_key"] == UsageEvent.get_month_key()
    ats = next(f for f in result["features"] if f["feature"] == "ats_scan")
    assert ats == {"feature": "ats_scan", "limit": 5, "used": 1, "remaining": 4, "unlimited": False}

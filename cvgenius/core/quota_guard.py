"""
Quota enforcement for metered features.

Routes call these guards after the request body has been validated, so a
rejected request never consumes quota. enforce_quota() checks and consumes in
one step; require_quota() only checks, for work that records its usage once
it has succeeded.
"""
import logging
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from cvgenius.services.quota_service import get_plan_for_user, check_and_consume, check_quota

logger = logging.getLogger(__name__)


def _quota_exceeded(db: Session, user_id: str, feature: str, limit: Optional[int], used: int) -> HTTPException:
    plan_type = get_plan_for_user(db, user_id)
    logger.warning(
        f"Quota exceeded: user_id={user_id}, feature={feature}, "
        f"plan={plan_type}, limit={limit}, used={used}"
    )
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail={
            "error": "quota_exceeded",
            "feature": feature,
            "plan": plan_type,
            "limit": limit,
            "used": used,
            "remaining": 0,
            "message": (
                f"You have reached your monthly limit of {limit} {feature} requests. "
                "Upgrade your plan for more quota."
            ),
        }
    )


def require_quota(db: Session, user_id: str, feature: str, amount: int = 1) -> None:
    """
    Raise 429 unless ``amount`` more units of ``feature`` fit in this month's quota.

    Nothing is recorded; the caller records usage with
    quota_service.record_usage() once the metered work succeeds.
    """
    allowed, used, limit, _ = check_quota(db, user_id, feature, amount)
    if not allowed:
        raise _quota_exceeded(db, user_id, feature, limit, used)


def enforce_quota(db: Session, user_id: str, feature: str, amount: int = 1) -> Optional[int]:
    """
    Check the monthly quota for ``feature`` and consume ``amount`` if allowed.

    Args:
        db: Database session
        user_id: Caller's user id
        feature: Feature name ("ats_scan" or "ai_suggestions")
        amount: Credits to consume (default: 1)

    Returns:
        Remaining quota after this request, or None when unlimited

    Raises:
        HTTPException 429: Quota exceeded, with structured error detail
    """
    allowed, used, limit, remaining = check_and_consume(db, user_id, feature, amount)

    if not allowed:
        raise _quota_exceeded(db, user_id, feature, limit, used)

    logger.debug(
        f"Quota check passed: user_id={user_id}, feature={feature}, "
        f"remaining={remaining if limit is not None else 'unlimited'}"
    )
    return remaining if limit is not None else None

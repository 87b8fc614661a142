"""
Quota service for managing usage limits and tracking.

Handles quota checking, usage recording, and monthly aggregation.
"""
import logging
from typing import Dict, Tuple, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func, and_

from cvgenius.db.models.subscription import Subscription
from cvgenius.db.models.usage import UsageEvent
from cvgenius.core.plan_limits import (
    DEFAULT_PLAN,
    PLAN_LIMITS,
    SUPPORTED_FEATURES,
    get_plan_limit,
    normalize_plan,
)

logger = logging.getLogger(__name__)


def get_plan_for_user(db: Session, user_id: str) -> str:
    """
    Get user's plan type from subscription, defaulting to 'free' if none exists.

    Inactive subscriptions count as free.
    """
    subscription = db.query(Subscription).filter(Subscription.user_id == user_id).first()
    if not subscription or subscription.status != "active":
        return DEFAULT_PLAN
    return normalize_plan(subscription.plan_type)


def get_month_usage(db: Session, user_id: str, month_key: str) -> Dict[str, int]:
    """
    Get per-feature usage totals for a user in a given month.

    Args:
        db: Database session
        user_id: User ID
        month_key: Month key in "YYYY-MM" format

    Returns:
        Dictionary mapping feature names to total usage amounts
    """
    usage_query = db.query(
        UsageEvent.feature,
        func.sum(UsageEvent.amount).label('total')
    ).filter(
        and_(
            UsageEvent.user_id == user_id,
            UsageEvent.month_key == month_key
        )
    ).group_by(UsageEvent.feature).all()

    return {feature: int(total) for feature, total in usage_query}


def record_usage(db: Session, user_id: str, feature: str, amount: int = 1,
                 month_key: Optional[str] = None) -> None:
    """Record a usage event. Commits the session, along with anything else pending on it."""
    db.add(UsageEvent(
        user_id=user_id,
        feature=feature,
        amount=amount,
        month_key=month_key or UsageEvent.get_month_key()
    ))
    db.commit()


def check_quota(
    db: Session,
    user_id: str,
    feature: str,
    amount: int = 1
) -> Tuple[bool, int, Optional[int], int]:
    """
    Check whether ``amount`` more units fit in this month's quota. Records nothing.

    Returns:
        Tuple of (allowed, used, limit, remaining)
        - allowed: False when the request would exceed the limit
        - used: Current usage this month
        - limit: Plan limit (None for unlimited)
        - remaining: Remaining quota before this request; -1 for unlimited
    """
    plan_type = get_plan_for_user(db, user_id)
    current_usage = get_month_usage(db, user_id, UsageEvent.get_month_key()).get(feature, 0)
    limit = get_plan_limit(plan_type, feature)

    if limit is None:
        return (True, current_usage, None, -1)

    return (current_usage + amount <= limit, current_usage, limit, max(0, limit - current_usage))


def check_and_consume(
    db: Session,
    user_id: str,
    feature: str,
    amount: int = 1
) -> Tuple[bool, int, Optional[int], int]:
    """
    Check quota and consume usage if allowed.

    Args:
        db: Database session
        user_id: User ID
        feature: Feature name (ats_scan, ai_suggestions)
        amount: Amount to consume (default: 1)

    Returns:
        Tuple of (allowed, used, limit, remaining)
        - allowed: False when the request would exceed the limit
        - used: Total usage after consuming (unchanged if exceeded)
        - limit: Plan limit (None for unlimited)
        - remaining: Remaining quota; 0 when exceeded, -1 for unlimited

    Note:
        If quota is exceeded, usage is NOT recorded.
    """
    allowed, current_usage, limit, _ = check_quota(db, user_id, feature, amount)

    if not allowed:
        return (False, current_usage, limit, 0)

    record_usage(db, user_id, feature, amount)
    final_usage = current_usage + amount

    if limit is None:
        logger.info(
            f"Usage consumed (unlimited): user_id={user_id}, feature={feature}, amount={amount}"
        )
        return (True, final_usage, None, -1)

    remaining = limit - final_usage
    logger.info(
        f"Usage consumed: user_id={user_id}, feature={feature}, amount={amount}, "
        f"used={final_usage}/{limit}, remaining={remaining}"
    )

    return (True, final_usage, limit, remaining)


def get_usage_for_response(db: Session, user_id: str) -> Dict:
    """
    Get usage data formatted for GET /api/me/usage.

    Returns:
        Dictionary with plan, month_key and a list of per-feature details
    """
    plan_type = get_plan_for_user(db, user_id)
    month_key = UsageEvent.get_month_key()
    usage_dict = get_month_usage(db, user_id, month_key)
    plan_limits = PLAN_LIMITS[plan_type]

    features = []
    for feature in SUPPORTED_FEATURES:
        limit = plan_limits.get(feature)
        used = usage_dict.get(feature, 0)
        features.append({
            "feature": feature,
            "limit": limit,
            "used": used,
            "remaining": None if limit is None else max(0, limit - used),
            "unlimited": limit is None,
        })

    return {
        "plan": plan_type,
        "month_key": month_key,
        "features": features,
    }

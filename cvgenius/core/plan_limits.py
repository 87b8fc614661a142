"""
Plan-based usage limits and pricing catalogue.

Single source of truth for monthly quota limits per plan.
None means unlimited quota for that feature.
"""
from typing import Any, Dict, List, Optional

DEFAULT_PLAN = "free"

# Supported features
SUPPORTED_FEATURES: List[str] = [
    "ats_scan",
    "ai_suggestions",
]

# Plan limits (per month)
PLAN_LIMITS: Dict[str, Dict[str, Optional[int]]] = {
    "free": {
        "ats_scan": 5,
        "ai_suggestions": 5,
    },
    "pro": {
        "ats_scan": 50,
        "ai_suggestions": 50,
    },
    "premium": {
        "ats_scan": None,  # Unlimited
        "ai_suggestions": None,
    },
}

# Pricing shown on the plans page
PLAN_CATALOG: List[Dict[str, Any]] = [
    {
        "id": "free",
        "name": "Free",
        "price": 0,
        "billing": "Forever Free",
        "popular": False,
        "features": [
            "1 Resume",
            "Basic Templates",
            "AI Suggestions (5/month)",
            "ATS Testing (5/month)",
            "Email Support",
        ],
    },
    {
        "id": "pro",
        "name": "Pro",
        "price": 9.99,
        "billing": "per month",
        "popular": True,
        "features": [
            "5 Resumes",
            "All Templates",
            "AI Suggestions (50/month)",
            "ATS Testing (50/month)",
            "PDF Export",
            "Email Support",
        ],
    },
    {
        "id": "premium",
        "name": "Premium",
        "price": 19.99,
        "billing": "per month",
        "popular": False,
        "features": [
            "Unlimited Resumes",
            "All Templates",
            "Unlimited AI Suggestions",
            "Unlimited ATS Testing",
            "PDF & Word Export",
            "Priority 24/7 Support",
            "LinkedIn Optimization",
            "Interview Prep",
        ],
    },
]


def normalize_plan(plan_type: Optional[str]) -> str:
    """Lower-case a plan name, falling back to free for unknown plans."""
    plan_type = plan_type.lower() if plan_type else DEFAULT_PLAN
    return plan_type if plan_type in PLAN_LIMITS else DEFAULT_PLAN


def get_plan_limit(plan_type: str, feature: str) -> Optional[int]:
    """
    Get the monthly limit for a feature in a given plan.

    Args:
        plan_type: Plan type (free, pro, premium)
        feature: Feature name (ats_scan, ai_suggestions)

    Returns:
        Monthly limit (int) or None for unlimited
    """
    return PLAN_LIMITS[normalize_plan(plan_type)].get(feature)


def has_unlimited_quota(plan_type: str, feature: str) -> bool:
    """Check if the plan has unlimited quota for a feature."""
    return get_plan_limit(plan_type, feature) is None


"""
Usage tracking endpoints.

Provides usage statistics and quota information for authenticated users.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cvgenius.core.auth_dependency import get_current_user, get_db
from cvgenius.schemas.usage import UsageResponse
from cvgenius.services.quota_service import get_usage_for_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/me", tags=["Usage"])


@router.get("/usage", response_model=UsageResponse, status_code=status.HTTP_200_OK)
def get_usage(
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get current month usage statistics for the authenticated user.
    
    Returns:
    - plan: Current plan type (free, pro, premium)
    - month_key: Current month in YYYY-MM format
    - features: Per-feature limit, used, remaining, unlimited
    """
    usage_data = get_usage_for_response(db, user_id)
    logger.debug(f"Usage summary requested: user_id={user_id}, plan={usage_data['plan']}")
    return usage_data

from fastapi import APIRouter

from cvgenius.core.plan_limits import PLAN_CATALOG
from cvgenius.schemas.plans import PlansResponse

router = APIRouter(prefix="/api/plans", tags=["Plans"])


@router.get("", response_model=PlansResponse)
def list_plans():
    return PlansResponse(plans=PLAN_CATALOG)

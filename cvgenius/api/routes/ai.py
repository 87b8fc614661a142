"""
AI-assisted resume writing endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cvgenius.core.auth_dependency import get_current_user, get_db
from cvgenius.core.quota_guard import require_quota
from cvgenius.llm.provider import LLMProvider
from cvgenius.llm.router import get_llm_provider
from cvgenius.schemas.ai import SuggestionRequest, SuggestionResponse
from cvgenius.services.ai_service import improve_section

router = APIRouter(prefix="/api/ai", tags=["AI"])


@router.post("/suggestions", response_model=SuggestionResponse)
def ai_suggestions(
    payload: SuggestionRequest,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
    provider: LLMProvider = Depends(get_llm_provider),
):
    """
    Rewrite a resume section and return coaching suggestions.

    The quota is checked up front; one ``ai_suggestions`` credit is charged
    only once the rewrite succeeds.
    """
    require_quota(db, user_id, "ai_suggestions")
    improved, suggestions = improve_section(db, provider, user_id, payload.content, payload.section)
    return SuggestionResponse(improved=improved, suggestions=suggestions)

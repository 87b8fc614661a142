"""
AI service for resume section rewriting.

Two completions per request: an improved version of the section and a short
list of coaching suggestions. Every successful rewrite is saved to the AI
history table and charged one ``ai_suggestions`` credit in the same commit.
"""
import logging
import re
from typing import List, Tuple
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from cvgenius.db.models.ai_history import AIHistoryRecord
from cvgenius.llm.provider import LLMError, LLMProvider
from cvgenius.services.quota_service import record_usage

logger = logging.getLogger(__name__)

REWRITE_MAX_TOKENS = 1024
SUGGESTIONS_MAX_TOKENS = 500
SUGGESTION_COUNT = 4

_BULLET_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def build_rewrite_prompt(content: str, section: str) -> str:
    return (
        f"You are a professional career coach. Improve this resume {section} section "
        "to be high-impact, professional, and result-oriented. Use action verbs, numbers, "
        f"and metrics. Return only the improved text:\n\n\"{content}\""
    )


def build_suggestions_prompt(content: str, section: str) -> str:
    return (
        f"As a career coach, provide {SUGGESTION_COUNT} specific suggestions to improve "
        f"this {section} section: \"{content}\". Format as bullet points."
    )


def parse_suggestions(text: str) -> List[str]:
    """Split a bullet list into clean, non-blank lines."""
    suggestions = []
    for line in text.splitlines():
        cleaned = _BULLET_RE.sub("", line).strip()
        if cleaned:
            suggestions.append(cleaned)
    return suggestions


def _complete(provider: LLMProvider, prompt: str, max_tokens: int) -> str:
    try:
        response = provider.chat(
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
        )
    except LLMError as e:
        logger.error(f"AI generation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="AI generation failed. Please try again later."
        )
    return response.content.strip()


def improve_section(
    db: Session,
    provider: LLMProvider,
    user_id: str,
    content: str,
    section: str,
) -> Tuple[str, List[str]]:
    """
    Rewrite a resume section and collect suggestions for it.

    Returns:
        (improved text, list of suggestions)

    Raises:
        HTTPException 502: if the provider fails
    """
    improved = _complete(provider, build_rewrite_prompt(content, section), REWRITE_MAX_TOKENS)

    db.add(AIHistoryRecord(
        user_id=user_id,
        section=section,
        original_content=content,
        improved_content=improved,
    ))
    record_usage(db, user_id, "ai_suggestions")

    suggestions = parse_suggestions(
        _complete(provider, build_suggestions_prompt(content, section), SUGGESTIONS_MAX_TOKENS)
    )

    logger.info(
        f"AI rewrite completed: user_id={user_id}, section={section}, "
        f"suggestions={len(suggestions)}"
    )
    return improved, suggestions

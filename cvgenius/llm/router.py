"""
Provider selection for request handlers.
"""
import logging
from functools import lru_cache
from fastapi import HTTPException, status

from cvgenius.core import config
from cvgenius.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _openai_provider() -> LLMProvider:
    from cvgenius.llm.openai_provider import OpenAIProvider
    return OpenAIProvider()


def get_llm_provider() -> LLMProvider:
    """Dependency returning the configured provider, 503 when no key is set."""
    if not config.OPENAI_API_KEY:
        logger.warning("AI request rejected: OPENAI_API_KEY not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI API key not configured"
        )
    return _openai_provider()

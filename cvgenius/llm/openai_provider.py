"""
OpenAI provider implementation.
"""
import logging
from typing import Optional, Dict
from openai import OpenAI, APIError

from cvgenius.core import config
from cvgenius.llm.provider import LLMError, LLMProvider, LLMResponse

logger = logging.getLogger(__name__)

# Model pricing per 1M tokens (input/output)
MODEL_PRICING = {
    "gpt-4o-mini": {"input": 0.15, "output": 0.60},
    "gpt-4o": {"input": 2.50, "output": 10.00},
}


class OpenAIProvider(LLMProvider):
    """OpenAI provider using official OpenAI SDK."""

    def __init__(self, api_key: Optional[str] = None, default_model: Optional[str] = None):
        """Initialize OpenAI client."""
        self.api_key = api_key or config.OPENAI_API_KEY
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY not configured")
        self.default_model = default_model or config.OPENAI_MODEL
        self.client = OpenAI(api_key=self.api_key)
        logger.info("OpenAI provider initialized")

    def chat(
        self,
        messages: list[Dict[str, str]],
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate a chat completion."""
        model = model or self.default_model
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens or 1024,
                **kwargs
            )
        except APIError as e:
            logger.error(f"OpenAI API error: {e}", exc_info=True)
            raise LLMError(str(e)) from e

        content = response.choices[0].message.content or ""
        tokens_in = response.usage.prompt_tokens if response.usage else 0
        tokens_out = response.usage.completion_tokens if response.usage else 0

        return LLMResponse(
            content=content,
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            model=model,
            cost_estimate=self.estimate_cost(tokens_in, tokens_out, model),
            metadata={
                "finish_reason": response.choices[0].finish_reason,
            }
        )

    def estimate_cost(self, tokens_in: int, tokens_out: int, model: str) -> float:
        """Estimate cost in USD."""
        pricing = MODEL_PRICING.get(model, MODEL_PRICING["gpt-4o-mini"])
        cost_input = (tokens_in / 1_000_000) * pricing["input"]
        cost_output = (tokens_out / 1_000_000) * pricing["output"]
        return cost_input + cost_output

"""LLM configuration for the AI gateway.

The gateway speaks the OpenAI chat-completions protocol, so the myth checker
talks to it through ChatOpenAI with a custom base_url.
"""

from langchain_openai import ChatOpenAI
from langchain_core.language_models import BaseChatModel
from app.config.settings import settings
from typing import Optional
from pydantic import SecretStr
import logging

logger = logging.getLogger(__name__)

_myth_checker_model: Optional[BaseChatModel] = None


def _create_model(model_name: str) -> BaseChatModel:
    """Instantiate a ChatOpenAI client pointed at the AI gateway."""
    if not settings.ai_gateway_api_key:
        raise ValueError(
            "AI gateway API key not configured. "
            "Please set AI_GATEWAY_API_KEY in your .env file."
        )

    logger.info(f"Creating AI gateway client: {model_name}")
    return ChatOpenAI(
        base_url=settings.ai_gateway_url,
        api_key=SecretStr(settings.ai_gateway_api_key),
        model=model_name,
        temperature=settings.model_temperature,
        max_completion_tokens=settings.model_max_tokens,
    )


def get_myth_checker_model() -> BaseChatModel:
    """Shared chat model for the health myth checker."""
    global _myth_checker_model

    if _myth_checker_model is None:
        _myth_checker_model = _create_model(settings.model_name)
    return _myth_checker_model


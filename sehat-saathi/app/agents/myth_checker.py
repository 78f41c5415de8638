"""Health myth checker.

Forwards a user's claim to the AI gateway and normalizes the reply into a
verdict the chat widget can colour (TRUE / FALSE) plus the English and Hindi
explanations. Runs in mock mode when no gateway key is configured.
"""

import re
import logging
from typing import Optional

from langchain_core.messages import HumanMessage, SystemMessage

from app.agents.prompts import MOCK_REPLY_TEMPLATE, MYTH_CHECKER_SYSTEM_PROMPT
from app.config import llm_config
from app.config.settings import settings
from app.models.enums import MythStatus
from app.models.messages import EmergencyHint, HealthChatResponse
from app.tools.emergency_numbers import get_emergency_numbers
from app.utils.llm_helpers import content_to_text, invoke_llm_with_timeout
from app.utils.red_flags import detect_red_flags

logger = logging.getLogger(__name__)

_STATUS_RE = re.compile(r"Status:\s*(TRUE|FALSE)", re.IGNORECASE)


class EmptyReplyError(RuntimeError):
    """The gateway answered but the reply had no text."""


def parse_myth_reply(text: str) -> HealthChatResponse:
    """Split a raw reply into status / English / Hindi fields."""
    match = _STATUS_RE.search(text)
    status: Optional[MythStatus] = MythStatus(match.group(1).upper()) if match else None

    english = None
    hindi = None
    for line in text.splitlines():
        stripped = line.strip()
        if english is None and stripped.startswith("English:"):
            english = stripped[len("English:"):].strip() or None
        elif hindi is None and stripped.startswith("Hindi:"):
            hindi = stripped[len("Hindi:"):].strip() or None

    return HealthChatResponse(reply=text, status=status, english=english, hindi=hindi)


def _use_mock() -> bool:
    return settings.mock_ai_replies or not settings.ai_gateway_configured


async def _ask_gateway(message: str) -> str:
    llm = llm_config.get_myth_checker_model()
    response = await invoke_llm_with_timeout(
        llm,
        [
            SystemMessage(content=MYTH_CHECKER_SYSTEM_PROMPT),
            HumanMessage(content=message),
        ],
    )
    text = content_to_text(getattr(response, "content", None))
    if not text:
        raise EmptyReplyError("AI gateway returned an empty reply")
    return text


async def check_myth(message: str) -> HealthChatResponse:
    """
    Verify a health myth.

    Args:
        message: The user's claim, already stripped and non-empty

    Returns:
        Normalized HealthChatResponse (with an emergency hint when red flags match)

    Raises:
        EmptyReplyError, asyncio.TimeoutError or any gateway error
    """
    if _use_mock():
        logger.info("Processing message (mock mode)")
        reply = MOCK_REPLY_TEMPLATE.format(message=message)
    else:
        reply = await _ask_gateway(message)

    result = parse_myth_reply(reply)

    has_flags, categories = detect_red_flags(message)
    if has_flags:
        numbers = get_emergency_numbers(settings.default_country)
        result.emergency = EmergencyHint(
            categories=categories, ambulance=numbers["ambulance"]
        )
        logger.warning(f"Emergency red flags in chat message: {categories}")

    if result.status is None:
        logger.warning("Myth checker reply had no Status line")
    return result

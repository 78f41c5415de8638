"""Health chat proxy (myth checker) endpoint.

Always answers with JSON carrying a `reply`, so the chat widget can render
something even when the AI gateway fails or the request is malformed.
"""

from fastapi import APIRouter, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from app.agents.myth_checker import check_myth
from app.agents.prompts import ERROR_REPLY
from app.models.messages import HealthChatRequest, HealthChatResponse
from typing import Callable
import asyncio
import logging

logger = logging.getLogger(__name__)


def _error_reply(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": error, "reply": ERROR_REPLY}
    )


class HealthChatRoute(APIRoute):
    """Route that reports body validation errors as {error, reply}."""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def route_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except RequestValidationError as e:
                errors = e.errors()
                error = errors[0].get("msg") if errors else "Invalid request"
                logger.warning(f"Rejected health-chat request: {error}")
                return _error_reply(status.HTTP_422_UNPROCESSABLE_ENTITY, error)

        return route_handler


router = APIRouter(
    prefix="/api/v1/health-chat", tags=["Health Chat"], route_class=HealthChatRoute
)


@router.post("", response_model=HealthChatResponse)
async def health_chat(request: HealthChatRequest):
    """
    Verify a health myth.

    Returns the raw reply plus the parsed TRUE/FALSE status and the English
    and Hindi explanations (null when the reply has none). `emergency` is
    only present when the message reads like an emergency.
    """
    message = request.message.strip()
    if not message:
        return _error_reply(status.HTTP_400_BAD_REQUEST, "Message is required")

    try:
        result = await check_myth(message)
    except asyncio.TimeoutError:
        return _error_reply(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "The AI service took too long to answer",
        )
    except Exception as e:
        logger.error(f"Error in health-chat: {e}", exc_info=True)
        return _error_reply(
            status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or "An error occurred"
        )

    exclude = {"emergency"} if result.emergency is None else None
    return JSONResponse(content=result.model_dump(mode="json", exclude=exclude))

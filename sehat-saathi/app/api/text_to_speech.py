"""Text-to-speech proxy endpoint."""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse
from app.models.messages import TextToSpeechRequest, TextToSpeechResponse
from app.tools.text_to_speech import (
    browser_fallback,
    language_code_for,
    synthesize_speech,
)
import httpx
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/text-to-speech", tags=["Text to Speech"])


@router.post("", response_model=TextToSpeechResponse)
async def text_to_speech(request: TextToSpeechRequest):
    """
    Read text aloud in Hindi or Indian English.

    When the speech API is unavailable the error body carries a `fallback`
    block with the parameters for the browser's own speech engine.
    """
    text = request.text.strip()
    if not text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Text is required"
        )

    language_code = language_code_for(request.language)

    try:
        audio = await synthesize_speech(text, language_code)
    except ValueError as e:
        logger.warning(f"TTS unavailable: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "detail": "Text-to-speech is not configured",
                "fallback": browser_fallback(language_code),
            },
        )
    except httpx.HTTPError as e:
        logger.error(f"TTS API request failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={
                "detail": "Text-to-speech service failed",
                "fallback": browser_fallback(language_code),
            },
        )

    return TextToSpeechResponse(audioContent=audio, languageCode=language_code)

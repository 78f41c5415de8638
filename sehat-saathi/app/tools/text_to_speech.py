"""Text-to-speech proxy for the Google Cloud Text-to-Speech REST API."""

import httpx
import logging
from typing import Dict
from app.config.settings import settings

logger = logging.getLogger(__name__)

HINDI_CODE = "hi-IN"
ENGLISH_CODE = "en-IN"


def language_code_for(language: str) -> str:
    """Map the UI language ('hi' / 'en') to a BCP-47 voice language."""
    return HINDI_CODE if (language or "").lower().startswith("hi") else ENGLISH_CODE


def browser_fallback(language_code: str) -> Dict:
    """Parameters for the client's built-in speech engine."""
    return {
        "engine": "browser",
        "lang": language_code,
        "rate": settings.tts_speaking_rate,
    }


async def synthesize_speech(text: str, language_code: str) -> str:
    """
    Synthesize MP3 audio for text.

    Args:
        text: Text to read aloud
        language_code: hi-IN or en-IN

    Returns:
        Base64 encoded MP3 audio, exactly as the API returns it

    Raises:
        ValueError: If the TTS API key is not configured
        httpx.HTTPError: If the API request fails or returns no audio
    """
    if not settings.tts_api_key:
        raise ValueError(
            "Text-to-speech API key not configured. "
            "Please set TTS_API_KEY in your .env file."
        )

    payload = {
        "input": {"text": text},
        "voice": {"languageCode": language_code, "ssmlGender": "FEMALE"},
        "audioConfig": {
            "audioEncoding": "MP3",
            "speakingRate": settings.tts_speaking_rate,
        },
    }

    async with httpx.AsyncClient(timeout=settings.tts_timeout) as client:
        resp = await client.post(
            settings.tts_api_url,
            params={"key": settings.tts_api_key},
            json=payload,
        )
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as e:
            raise httpx.HTTPError(f"Text-to-speech API returned invalid JSON: {e}")

    audio = data.get("audioContent")
    if not audio:
        raise httpx.HTTPError("Text-to-speech API returned no audioContent")

    logger.info(f"Synthesized {len(text)} chars of {language_code} speech")
    return audio

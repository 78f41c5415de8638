import httpx
import pytest

from app.config.settings import settings
from app.tools import text_to_speech as tts
from app.tools.text_to_speech import language_code_for

_RealAsyncClient = httpx.AsyncClient


@pytest.fixture
def tts_api(monkeypatch):
    """Route the TTS tool's HTTP calls to a handler function."""
    monkeypatch.setattr(settings, "tts_api_key", "tts-key")

    def install(handler):
        transport = httpx.MockTransport(handler)
        monkeypatch.setattr(
            tts.httpx,
            "AsyncClient",
            lambda **kwargs: _RealAsyncClient(transport=transport, **kwargs),
        )

    return install


def test_language_mapping():
    assert language_code_for("hi") == "hi-IN"
    assert language_code_for("HI") == "hi-IN"
    assert language_code_for("en") == "en-IN"
    assert language_code_for("") == "en-IN"


def test_synthesizes_hindi_audio(client, tts_api):
    seen = {}

    def handler(request: httpx.Request):
        seen["key"] = request.url.params["key"]
        seen["body"] = request.read().decode()
        return httpx.Response(200, json={"audioContent": "SUQzBAAAAAAA"})

    tts_api(handler)

    resp = client.post("/api/v1/text-to-speech", json={"text": "नमस्ते", "language": "hi"})

    assert resp.status_code == 200
    assert resp.json() == {
        "audioContent": "SUQzBAAAAAAA",
        "languageCode": "hi-IN",
        "mimeType": "audio/mp3",
    }
    assert seen["key"] == "tts-key"
    assert '"languageCode":"hi-IN"' in seen["body"].replace(" ", "")
    assert '"audioEncoding":"MP3"' in seen["body"].replace(" ", "")


def test_not_configured_offers_browser_fallback(client, offline_settings):
    resp = client.post("/api/v1/text-to-speech", json={"text": "Drink clean water"})

    assert resp.status_code == 503
    assert resp.json()["fallback"] == {"engine": "browser", "lang": "en-IN", "rate": 0.9}


def test_upstream_error_offers_browser_fallback(client, tts_api):
    tts_api(lambda request: httpx.Response(403, json={"error": "denied"}))

    resp = client.post("/api/v1/text-to-speech", json={"text": "Hello", "language": "hi"})

    assert resp.status_code == 502
    assert resp.json()["fallback"]["lang"] == "hi-IN"


def test_missing_audio_is_upstream_error(client, tts_api):
    tts_api(lambda request: httpx.Response(200, json={}))

    resp = client.post("/api/v1/text-to-speech", json={"text": "Hello"})

    assert resp.status_code == 502


def test_blank_text_rejected(client, tts_api):
    resp = client.post("/api/v1/text-to-speech", json={"text": "  "})
    assert resp.status_code == 400


def test_non_json_reply_is_upstream_error(client, tts_api):
    tts_api(lambda request: httpx.Response(200, text="<html>quota page</html>"))

    resp = client.post("/api/v1/text-to-speech", json={"text": "Hello", "language": "hi"})

    assert resp.status_code == 502
    assert resp.json()["fallback"]["lang"] == "hi-IN"


def test_text_over_limit_rejected(client, tts_api):
    calls = []
    tts_api(lambda request: calls.append(request) or httpx.Response(200, json={}))

    resp = client.post("/api/v1/text-to-speech", json={"text": "a" * 5001})

    assert resp.status_code == 422
    assert calls == []

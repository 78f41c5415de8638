from types import SimpleNamespace

import pytest

from app.agents.myth_checker import parse_myth_reply
from app.agents.prompts import ERROR_REPLY, MYTH_CHECKER_SYSTEM_PROMPT
from app.config import llm_config
from app.config.settings import settings


class FakeLLM:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error:
            raise self.error
        return SimpleNamespace(content=self.content)


@pytest.fixture
def gateway(monkeypatch):
    monkeypatch.setattr(settings, "ai_gateway_api_key", "test-key")
    monkeypatch.setattr(settings, "mock_ai_replies", False)

    def install(llm):
        monkeypatch.setattr(llm_config, "get_myth_checker_model", lambda: llm)
        return llm

    return install


def test_mock_mode_echoes_message(client, offline_settings):
    resp = client.post("/api/v1/health-chat", json={"message": "Turmeric milk cures cold"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "TRUE"
    assert body["reply"].startswith("Status: TRUE")
    assert '"Turmeric milk cures cold"' in body["english"]
    assert "नकली प्रतिक्रिया" in body["hindi"]
    assert "emergency" not in body


def test_blank_message_rejected(client, offline_settings):
    resp = client.post("/api/v1/health-chat", json={"message": "   "})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Message is required", "reply": ERROR_REPLY}


def test_overlong_message_rejected(client, offline_settings):
    resp = client.post("/api/v1/health-chat", json={"message": "x" * 2001})

    assert resp.status_code == 422
    assert resp.json()["reply"] == ERROR_REPLY
    assert resp.json()["error"]


def test_malformed_body_still_gets_a_reply(client, offline_settings):
    not_json = client.post(
        "/api/v1/health-chat",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    missing = client.post("/api/v1/health-chat", json={"text": "wrong field"})

    for resp in (not_json, missing):
        assert resp.status_code == 422
        assert resp.json()["reply"] == ERROR_REPLY


def test_other_routes_keep_default_validation_errors(client):
    resp = client.post("/api/v1/text-to-speech", json={})
    assert resp.status_code == 422
    assert "detail" in resp.json()


def test_gateway_reply_is_normalized(client, gateway):
    llm = gateway(
        FakeLLM(
            content="  Status: false\nEnglish: Eating eggs does not cause fever.\nHindi: अंडे खाने से बुखार नहीं होता।  "
        )
    )

    resp = client.post("/api/v1/health-chat", json={"message": "Eggs cause fever"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "FALSE"
    assert body["english"] == "Eating eggs does not cause fever."
    assert body["hindi"] == "अंडे खाने से बुखार नहीं होता।"
    assert body["reply"].startswith("Status: false")

    system, human = llm.calls[0]
    assert system.content == MYTH_CHECKER_SYSTEM_PROMPT
    assert human.content == "Eggs cause fever"


def test_gateway_reply_as_content_parts(client, gateway):
    gateway(
        FakeLLM(
            content=[
                {"type": "text", "text": "Status: TRUE\n"},
                {"type": "text", "text": "English: Washing hands prevents diarrhoea."},
            ]
        )
    )

    resp = client.post("/api/v1/health-chat", json={"message": "Handwashing helps"})

    body = resp.json()
    assert body["status"] == "TRUE"
    assert body["english"] == "Washing hands prevents diarrhoea."
    assert body["hindi"] is None
    assert "emergency" not in body


def test_unparseable_reply_keeps_null_fields(client, gateway):
    gateway(FakeLLM(content="I am not sure about that."))

    resp = client.post("/api/v1/health-chat", json={"message": "Cold water causes cold"})

    assert resp.status_code == 200
    assert resp.json() == {
        "reply": "I am not sure about that.",
        "status": None,
        "english": None,
        "hindi": None,
    }


def test_gateway_failure_returns_error_envelope(client, gateway):
    gateway(FakeLLM(error=RuntimeError("gateway down")))

    resp = client.post("/api/v1/health-chat", json={"message": "Garlic cures TB"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "gateway down", "reply": ERROR_REPLY}


def test_empty_gateway_reply_is_an_error(client, gateway):
    gateway(FakeLLM(content="   "))

    resp = client.post("/api/v1/health-chat", json={"message": "Neem cures diabetes"})

    assert resp.status_code == 500
    assert resp.json()["reply"] == ERROR_REPLY


def test_emergency_message_carries_ambulance_hint(client, offline_settings):
    resp = client.post(
        "/api/v1/health-chat",
        json={"message": "My father has chest pain, should I give him ghee?"},
    )

    body = resp.json()
    assert body["emergency"]["ambulance"] == "108"
    assert "cardiac" in body["emergency"]["categories"]


def test_parse_reply_without_status_line():
    result = parse_myth_reply("I am not sure about that.")
    assert result.status is None
    assert result.english is None
    assert result.reply == "I am not sure about that."

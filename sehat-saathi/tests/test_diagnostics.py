from app.config.settings import settings


def test_health(client, offline_settings):
    body = client.get("/health").json()

    assert body["status"] == "ok"
    assert body["dependencies"]["mongodb"] == "connected"
    assert body["dependencies"]["ai_gateway"] == "not configured"
    assert body["dependencies"]["hospital_search"] == "not configured"


def test_health_reports_database_error(client, fake_db):
    async def broken(name):
        raise RuntimeError("connection refused")

    fake_db.command = broken

    body = client.get("/health").json()
    assert body["dependencies"]["mongodb"] == "error: connection refused"


def test_diagnostics_counts_each_collection(client, fake_db, monkeypatch):
    monkeypatch.setattr(settings, "ai_gateway_api_key", "secret-key")
    fake_db[settings.mongodb_collection_doctor_questions].docs.append({"id": "q1"})

    async def broken(query):
        raise RuntimeError("not authorized on health_forum")

    fake_db[settings.mongodb_collection_health_forum].count_documents = broken

    body = client.get("/health/diagnostics").json()
    results = {r["name"]: r for r in body["results"]}

    assert results["doctor_questions"]["count"] == 1
    assert results["doctor_questions"]["success"] is True
    assert results["health_forum"]["success"] is False
    assert "not authorized" in results["health_forum"]["message"]
    assert results["users"]["success"] is True
    assert body["all_ok"] is False
    assert body["environment"]["ai_gateway_key"] == "present"
    assert "secret-key" not in str(body)

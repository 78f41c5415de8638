from datetime import datetime, timedelta

from app.config.settings import settings
from tests.helpers import signup_and_login

QUESTION = {
    "name": "Sunita",
    "category": "nutrition",
    "question": "Can I give my baby honey?",
}


def _ask(client, **overrides):
    resp = client.post("/api/v1/doctor-questions", json={**QUESTION, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()["question"]


def test_submit_question(client, fake_db):
    resp = client.post("/api/v1/doctor-questions", json=QUESTION)

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "A doctor will reply soon."
    assert body["question"]["question"] == "Can I give my baby honey?"
    assert body["question"]["response"] is None

    stored = fake_db[settings.mongodb_collection_doctor_questions].docs
    assert len(stored) == 1
    assert stored[0]["location"] is None


def test_location_is_appended_to_question(client, fake_db):
    question = _ask(client, location={"lat": 25.3176, "lng": 82.9739})

    assert question["question"] == "Can I give my baby honey? [Location: 25.3176,82.9739]"
    stored = fake_db[settings.mongodb_collection_doctor_questions].docs[0]
    assert stored["location"] == "25.3176,82.9739"


def test_missing_fields_rejected(client):
    assert client.post(
        "/api/v1/doctor-questions", json={**QUESTION, "name": "  "}
    ).status_code == 400
    assert client.post(
        "/api/v1/doctor-questions", json={**QUESTION, "question": ""}
    ).status_code == 400
    assert client.post(
        "/api/v1/doctor-questions", json={"name": "A", "question": "B"}
    ).status_code == 422


def test_unknown_category_rejected(client):
    resp = client.post("/api/v1/doctor-questions", json={**QUESTION, "category": "astrology"})
    assert resp.status_code == 422


def test_doctor_answers_question(client, fake_db):
    question = _ask(client)
    doctor = signup_and_login(client, fake_db, "dr_mehta", role="DOCTOR")

    resp = client.post(
        f"/api/v1/doctor-questions/{question['id']}/response",
        json={"response": "No honey before one year of age."},
        headers=doctor,
    )

    assert resp.status_code == 200
    assert resp.json()["response"] == "No honey before one year of age."
    assert resp.json()["responded_at"] is not None

    # Asker polls the question
    polled = client.get(f"/api/v1/doctor-questions/{question['id']}").json()
    assert polled["response"] == "No honey before one year of age."


def test_question_answered_only_once(client, fake_db):
    question = _ask(client)
    doctor = signup_and_login(client, fake_db, "dr_rao", role="DOCTOR")
    url = f"/api/v1/doctor-questions/{question['id']}/response"

    assert client.post(url, json={"response": "First"}, headers=doctor).status_code == 200
    resp = client.post(url, json={"response": "Second"}, headers=doctor)

    assert resp.status_code == 409
    assert client.get(f"/api/v1/doctor-questions/{question['id']}").json()["response"] == "First"


def test_answer_unknown_question(client, fake_db):
    doctor = signup_and_login(client, fake_db, "dr_khan", role="DOCTOR")
    resp = client.post(
        "/api/v1/doctor-questions/nope/response", json={"response": "x"}, headers=doctor
    )
    assert resp.status_code == 404


def test_patients_cannot_answer(client, fake_db):
    question = _ask(client)
    patient = signup_and_login(client, fake_db, "ramesh")

    resp = client.post(
        f"/api/v1/doctor-questions/{question['id']}/response",
        json={"response": "Sure"},
        headers=patient,
    )
    assert resp.status_code == 403

    anonymous = client.post(
        f"/api/v1/doctor-questions/{question['id']}/response", json={"response": "Sure"}
    )
    assert anonymous.status_code == 401


def test_community_feed_only_answered_newest_first(client, fake_db):
    collection = fake_db[settings.mongodb_collection_doctor_questions]
    now = datetime.utcnow()
    collection.docs.extend(
        [
            {
                "id": "old",
                "name": "A",
                "category": "general",
                "question": "Old?",
                "created_at": now - timedelta(days=3),
                "response": "Old answer",
                "responded_at": now - timedelta(days=2),
            },
            {
                "id": "pending",
                "name": "B",
                "category": "fitness",
                "question": "Pending?",
                "created_at": now - timedelta(days=1),
                "response": None,
                "responded_at": None,
            },
            {
                "id": "new",
                "name": "C",
                "category": "mental",
                "question": "New?",
                "created_at": now - timedelta(days=2),
                "response": "New answer",
                "responded_at": now - timedelta(hours=1),
            },
        ]
    )

    body = client.get("/api/v1/doctor-questions/community").json()

    assert [q["id"] for q in body["questions"]] == ["new", "old"]
    assert body["total"] == 2

    limited = client.get("/api/v1/doctor-questions/community", params={"limit": 1}).json()
    assert [q["id"] for q in limited["questions"]] == ["new"]


def test_pending_queue_for_doctors(client, fake_db):
    first = _ask(client, question="First question")
    _ask(client, question="Second question")
    doctor = signup_and_login(client, fake_db, "dr_iyer", role="DOCTOR")

    client.post(
        f"/api/v1/doctor-questions/{first['id']}/response",
        json={"response": "Answered"},
        headers=doctor,
    )
    body = client.get("/api/v1/doctor-questions/pending", headers=doctor).json()

    assert body["total"] == 1
    assert body["questions"][0]["question"] == "Second question"


def test_unknown_question_404(client):
    assert client.get("/api/v1/doctor-questions/missing").status_code == 404

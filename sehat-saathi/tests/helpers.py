"""Test helpers shared across API tests."""

from app.config.settings import settings


def signup_and_login(client, fake_db, username, role="PATIENT", password="secret123"):
    """Create an account with the given role and return Bearer headers for it."""
    resp = client.post(
        "/api/v1/auth/signup",
        json={"full_name": username.title(), "username": username, "password": password},
    )
    assert resp.status_code == 201, resp.text

    if role != "PATIENT":
        for doc in fake_db[settings.mongodb_collection_users].docs:
            if doc["username"] == username:
                doc["role"] = role

    resp = client.post(
        "/api/v1/auth/login", json={"username": username, "password": password}
    )
    assert resp.status_code == 200, resp.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}

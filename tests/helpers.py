# tests/helpers.py

from __future__ import annotations

from datetime import datetime

from fastapi.testclient import TestClient

PASSWORD = "s3cret-pw"


def register(client: TestClient, username: str, password: str = PASSWORD):
    return client.post("/api/auth/register", json={"username": username, "password": password})


def login(client: TestClient, username: str, password: str = PASSWORD):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def create_task(client: TestClient, **payload):
    payload.setdefault("title", "Buy milk")
    response = client.post("/api/tasks", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def parse_instant(value: str) -> datetime:
    # fromisoformat only learned the "Z" suffix in 3.11
    return datetime.fromisoformat(value.replace("Z", "+00:00"))

"""Integration tests for the analytics endpoints."""

from backend.src.models.agent import AgentDocument


def test_summary_on_empty_database(client):
    response = client.get("/api/analytics/summary")

    assert response.status_code == 200
    assert response.json() == {
        "agents": 0,
        "verified_agents": 0,
        "users": 0,
        "tasks": 0,
        "tasks_by_status": {},
    }


def test_summary_counts(client, repos):
    repos.agents.agents.extend([
        AgentDocument(id="a1", name="Ama", phone="1", verified=True),
        AgentDocument(id="a2", name="Kojo", phone="2", verified=False),
    ])
    client.post("/api/users", json={"name": "Kofi", "email": "kofi@example.com", "password": "SecurePassword123!"})
    client.post("/api/tasks", json={"email": "a@b.com", "title": "one"})
    client.post("/api/tasks", json={"email": "a@b.com", "title": "two", "status": "completed"})

    body = client.get("/api/analytics/summary").json()

    assert body["agents"] == 2
    assert body["verified_agents"] == 1
    assert body["users"] == 1
    assert body["tasks"] == 2
    assert body["tasks_by_status"] == {"completed": 1, "pending": 1}


def test_task_status_counts(client):
    for status in ["pending", "pending", "cancelled"]:
        client.post("/api/tasks", json={"email": "a@b.com", "title": "t", "status": status})

    response = client.get("/api/analytics/tasks")

    assert response.status_code == 200
    assert response.json() == [
        {"status": "cancelled", "count": 1},
        {"status": "pending", "count": 2},
    ]

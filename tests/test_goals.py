"""
Tests for goal endpoints (owner-scoped CRUD).
"""

import uuid


class TestGoals:

    async def test_create_goal(self, authenticated_client):
        me = (await authenticated_client.get("/api/users/me")).json()
        response = await authenticated_client.post(
            "/api/goals",
            json={"title": "Ship v2", "description": "Before the summer"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Ship v2"
        assert data["description"] == "Before the summer"
        assert data["user"] == me["id"]

    async def test_description_optional(self, authenticated_client):
        response = await authenticated_client.post("/api/goals", json={"title": "Read more"})
        assert response.status_code == 201
        assert response.json()["description"] == ""

    async def test_title_required(self, authenticated_client):
        response = await authenticated_client.post("/api/goals", json={"description": "No title"})
        assert response.status_code == 400
        assert response.json()["message"] == "Please add a title field"

    async def test_list_newest_first(self, authenticated_client, second_authenticated_client):
        await authenticated_client.post("/api/goals", json={"title": "First"})
        await authenticated_client.post("/api/goals", json={"title": "Second"})
        await second_authenticated_client.post("/api/goals", json={"title": "Not mine"})

        response = await authenticated_client.get("/api/goals")
        assert response.status_code == 200
        assert [g["title"] for g in response.json()] == ["Second", "First"]

    async def test_update_goal(self, authenticated_client):
        goal = (await authenticated_client.post("/api/goals", json={"title": "Draft"})).json()

        response = await authenticated_client.put(
            f"/api/goals/{goal['_id']}",
            json={"description": "Now with details"},
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Draft"
        assert response.json()["description"] == "Now with details"

    async def test_update_cannot_clear_title(self, authenticated_client):
        goal = (await authenticated_client.post("/api/goals", json={"title": "Keep"})).json()
        response = await authenticated_client.put(f"/api/goals/{goal['_id']}", json={"title": ""})
        assert response.status_code == 400

    async def test_delete_goal(self, authenticated_client):
        goal = (await authenticated_client.post("/api/goals", json={"title": "Done"})).json()

        response = await authenticated_client.delete(f"/api/goals/{goal['_id']}")
        assert response.status_code == 200
        assert response.json() == {"id": goal["_id"]}
        assert (await authenticated_client.get("/api/goals")).json() == []

    async def test_goal_not_found(self, authenticated_client):
        response = await authenticated_client.delete(f"/api/goals/{uuid.uuid4()}")
        assert response.status_code == 400
        assert response.json()["message"] == "Goal not found"

    async def test_goals_require_token(self, client):
        assert (await client.get("/api/goals")).status_code == 401
        assert (await client.post("/api/goals", json={"title": "x"})).status_code == 401

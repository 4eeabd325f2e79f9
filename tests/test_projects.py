"""
Tests for project endpoints: CRUD, the owner's filtered list, and the public
featured list.

These tests verify:
  - Creation applies defaults and requires title, description and start date
  - Month-only dates ("2024-01") are accepted
  - The owner's list supports search, status, technologies, a start-year
    range and sorting, and only ever contains the owner's projects
  - Updates apply only the fields sent
  - Unknown ids answer 400 "Project not found"
  - The featured list is public and never includes the owner
"""

import uuid


def project_payload(**overrides) -> dict:
    data = {
        "title": "Portfolio API",
        "description": "REST API for the portfolio site",
        "startDate": "2024-01-15",
    }
    data.update(overrides)
    return data


async def create(client, **overrides) -> dict:
    response = await client.post("/api/projects", json=project_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


async def titles(client, **params) -> list[str]:
    response = await client.get("/api/projects", params=params)
    assert response.status_code == 200, response.text
    return [p["title"] for p in response.json()]


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

class TestCreateProject:
    """Tests for POST /api/projects."""

    async def test_create_with_defaults(self, authenticated_client):
        me = (await authenticated_client.get("/api/users/me")).json()
        response = await authenticated_client.post("/api/projects", json=project_payload())
        assert response.status_code == 201
        data = response.json()
        assert data["_id"]
        assert data["user"] == me["id"]
        assert data["title"] == "Portfolio API"
        assert data["status"] == "Planning"
        assert data["featured"] is False
        assert data["technologies"] == []
        assert data["images"] == []
        assert data["tags"] == []
        assert data["githubUrl"] == ""
        assert data["demoUrl"] == ""
        assert data["body1"] == ""
        assert data["teamSize"] == 1
        assert data["startDate"] == "2024-01-15"
        assert data["endDate"] is None
        assert data["createdAt"]
        assert data["updatedAt"]

    async def test_create_all_fields(self, authenticated_client):
        data = await create(
            authenticated_client,
            technologies=["Python", "FastAPI"],
            githubUrl="https://github.com/example/api",
            demoUrl="https://api.example.com",
            status="In Progress",
            featured=True,
            endDate="2024-06-30",
            images=["cover.png"],
            body1="Intro",
            body2="Details",
            body3="Wrap-up",
            tags=["backend"],
            teamSize=3,
        )
        assert data["technologies"] == ["Python", "FastAPI"]
        assert data["status"] == "In Progress"
        assert data["featured"] is True
        assert data["endDate"] == "2024-06-30"
        assert data["teamSize"] == 3
        assert data["body3"] == "Wrap-up"

    async def test_create_month_dates(self, authenticated_client):
        """Month-picker values are stored as the first of the month."""
        data = await create(authenticated_client, startDate="2024-01", endDate="2024-03")
        assert data["startDate"] == "2024-01-01"
        assert data["endDate"] == "2024-03-01"

    async def test_create_missing_required(self, authenticated_client):
        response = await authenticated_client.post(
            "/api/projects",
            json={"title": "No description", "startDate": "2024-01"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Please add title, description, and start date fields"

    async def test_create_invalid_status(self, authenticated_client):
        response = await authenticated_client.post(
            "/api/projects",
            json=project_payload(status="Abandoned"),
        )
        assert response.status_code == 400

    async def test_create_invalid_team_size(self, authenticated_client):
        response = await authenticated_client.post(
            "/api/projects",
            json=project_payload(teamSize=0),
        )
        assert response.status_code == 400

    async def test_create_requires_token(self, client):
        response = await client.post("/api/projects", json=project_payload())
        assert response.status_code == 401


# ---------------------------------------------------------------------------
# List, filter, sort
# ---------------------------------------------------------------------------

class TestListProjects:
    """Tests for GET /api/projects."""

    async def _seed(self, client):
        await create(
            client,
            title="Alpha",
            description="Realtime chat",
            technologies=["React", "Node"],
            status="Completed",
            startDate="2022-03",
        )
        await create(
            client,
            title="Bravo",
            description="Data pipeline",
            technologies=["Python", "Airflow"],
            status="In Progress",
            startDate="2023-07",
        )
        await create(
            client,
            title="Charlie",
            description="Mobile app for hiking",
            technologies=["React Native"],
            status="Planning",
            startDate="2024-02",
        )

    async def test_default_sort_start_date_desc(self, authenticated_client):
        await self._seed(authenticated_client)
        assert await titles(authenticated_client) == ["Charlie", "Bravo", "Alpha"]

    async def test_sort_by_title_asc(self, authenticated_client):
        await self._seed(authenticated_client)
        result = await titles(authenticated_client, sortBy="title", sortOrder="asc")
        assert result == ["Alpha", "Bravo", "Charlie"]

    async def test_sort_by_start_date_asc(self, authenticated_client):
        await self._seed(authenticated_client)
        result = await titles(authenticated_client, sortBy="startDate", sortOrder="asc")
        assert result == ["Alpha", "Bravo", "Charlie"]

    async def test_unknown_sort_field_falls_back(self, authenticated_client):
        await self._seed(authenticated_client)
        result = await titles(authenticated_client, sortBy="popularity", sortOrder="asc")
        assert result == ["Charlie", "Bravo", "Alpha"]

    async def test_filter_by_status(self, authenticated_client):
        await self._seed(authenticated_client)
        assert await titles(authenticated_client, status="In Progress") == ["Bravo"]

    async def test_filter_by_unknown_status(self, authenticated_client):
        response = await authenticated_client.get("/api/projects", params={"status": "Abandoned"})
        assert response.status_code == 400

    async def test_search_is_case_insensitive(self, authenticated_client):
        await self._seed(authenticated_client)
        assert await titles(authenticated_client, search="PIPELINE") == ["Bravo"]

    async def test_search_matches_technologies(self, authenticated_client):
        await self._seed(authenticated_client)
        assert await titles(authenticated_client, search="react") == ["Charlie", "Alpha"]

    async def test_filter_technologies_any_match(self, authenticated_client):
        await self._seed(authenticated_client)
        result = await titles(authenticated_client, technologies="python, node")
        assert result == ["Bravo", "Alpha"]

    async def test_filter_technologies_exact_name(self, authenticated_client):
        """The technology filter matches whole names, unlike search."""
        await self._seed(authenticated_client)
        assert await titles(authenticated_client, technologies="React") == ["Alpha"]

    async def test_filter_year_range(self, authenticated_client):
        await self._seed(authenticated_client)
        assert await titles(authenticated_client, startDate=2023) == ["Charlie", "Bravo"]
        assert await titles(authenticated_client, endDate=2023) == ["Bravo", "Alpha"]
        assert await titles(authenticated_client, startDate=2023, endDate=2023) == ["Bravo"]

    async def test_filter_year_not_a_number(self, authenticated_client):
        response = await authenticated_client.get("/api/projects", params={"startDate": "soon"})
        assert response.status_code == 400

    async def test_filters_combine(self, authenticated_client):
        await self._seed(authenticated_client)
        result = await titles(authenticated_client, search="react", status="Completed")
        assert result == ["Alpha"]

    async def test_blank_search_ignored(self, authenticated_client):
        await self._seed(authenticated_client)
        assert len(await titles(authenticated_client, search="   ")) == 3

    async def test_only_own_projects(self, authenticated_client, second_authenticated_client):
        await create(authenticated_client, title="Mine")
        await create(second_authenticated_client, title="Theirs")

        assert await titles(authenticated_client) == ["Mine"]
        assert await titles(second_authenticated_client) == ["Theirs"]


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

class TestUpdateProject:
    """Tests for PUT /api/projects/{id}."""

    async def test_partial_update(self, authenticated_client):
        project = await create(authenticated_client, technologies=["Python"])

        response = await authenticated_client.put(
            f"/api/projects/{project['_id']}",
            json={"status": "Completed", "featured": True},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Completed"
        assert data["featured"] is True
        assert data["title"] == project["title"]
        assert data["technologies"] == ["Python"]
        assert data["startDate"] == project["startDate"]

    async def test_update_replaces_lists(self, authenticated_client):
        project = await create(authenticated_client, technologies=["Python"])
        response = await authenticated_client.put(
            f"/api/projects/{project['_id']}",
            json={"technologies": ["Go", "Rust"]},
        )
        assert response.json()["technologies"] == ["Go", "Rust"]

    async def test_update_cannot_clear_title(self, authenticated_client):
        project = await create(authenticated_client)
        response = await authenticated_client.put(
            f"/api/projects/{project['_id']}",
            json={"title": ""},
        )
        assert response.status_code == 400

        listing = await authenticated_client.get("/api/projects")
        assert listing.json()[0]["title"] == "Portfolio API"

    async def test_update_null_resets_optional_field(self, authenticated_client):
        project = await create(authenticated_client, githubUrl="https://github.com/x/y")
        response = await authenticated_client.put(
            f"/api/projects/{project['_id']}",
            json={"githubUrl": None},
        )
        assert response.json()["githubUrl"] == ""

    async def test_update_cannot_change_owner(self, authenticated_client):
        project = await create(authenticated_client)
        response = await authenticated_client.put(
            f"/api/projects/{project['_id']}",
            json={"user": str(uuid.uuid4())},
        )
        assert response.status_code == 200
        assert response.json()["user"] == project["user"]

    async def test_update_not_found(self, authenticated_client):
        response = await authenticated_client.put(
            f"/api/projects/{uuid.uuid4()}",
            json={"title": "Nope"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Project not found"

    async def test_update_malformed_id(self, authenticated_client):
        response = await authenticated_client.put("/api/projects/not-an-id", json={"title": "x"})
        assert response.status_code == 400


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

class TestDeleteProject:
    """Tests for DELETE /api/projects/{id}."""

    async def test_delete_returns_id(self, authenticated_client):
        project = await create(authenticated_client)

        response = await authenticated_client.delete(f"/api/projects/{project['_id']}")
        assert response.status_code == 200
        assert response.json() == {"id": project["_id"]}

        assert await titles(authenticated_client) == []

    async def test_delete_twice(self, authenticated_client):
        project = await create(authenticated_client)
        await authenticated_client.delete(f"/api/projects/{project['_id']}")

        response = await authenticated_client.delete(f"/api/projects/{project['_id']}")
        assert response.status_code == 400
        assert response.json()["message"] == "Project not found"


# ---------------------------------------------------------------------------
# Featured
# ---------------------------------------------------------------------------

class TestFeaturedProjects:
    """Tests for GET /api/projects/featured."""

    async def test_featured_is_public_and_ownerless(
        self, authenticated_client, second_authenticated_client, client
    ):
        await create(authenticated_client, title="Old", featured=True, startDate="2021-05")
        await create(authenticated_client, title="Hidden", featured=False)
        await create(second_authenticated_client, title="New", featured=True, startDate="2024-08")

        response = await client.get("/api/projects/featured")
        assert response.status_code == 200
        data = response.json()
        assert [p["title"] for p in data] == ["New", "Old"]
        for project in data:
            assert "user" not in project
            assert "userId" not in project

    async def test_featured_empty(self, client):
        response = await client.get("/api/projects/featured")
        assert response.json() == []

    async def test_unfeaturing_removes_from_list(self, authenticated_client, client):
        project = await create(authenticated_client, featured=True)
        await authenticated_client.put(f"/api/projects/{project['_id']}", json={"featured": False})

        response = await client.get("/api/projects/featured")
        assert response.json() == []

"""Tests for the project endpoints."""

VALID = {
    "title": "Portfolio",
    "description": "My personal site",
    "image": "https://example.com/cover.png",
    "technologies": ["python", "fastapi"],
    "featured": True,
    "stats": {"stars": 12},
    "slug": "portfolio",
}


def _create(client, **overrides):
    resp = client.post("/api/projects", json={**VALID, **overrides})
    assert resp.status_code == 201, resp.json()
    return resp.json()["data"]


class TestCreateProject:

    def test_create(self, client):
        data = _create(client)
        assert data["id"] == 1
        for key, value in VALID.items():
            assert data[key] == value
        assert data["created_at"]

    def test_optional_fields_are_coerced(self, client):
        resp = client.post(
            "/api/projects",
            json={
                "title": "  Padded  ",
                "description": "d",
                "slug": "my-slug-1",
                "technologies": "python",
                "featured": "yes",
                "stats": [1, 2],
                "image": "",
            },
        )
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["title"] == "Padded"
        assert data["technologies"] is None
        assert data["featured"] is False
        assert data["stats"] is None
        assert data["image"] is None

    def test_bad_slug_rejected(self, client, project_repo):
        resp = client.post("/api/projects", json={**VALID, "slug": "My Slug!"})
        assert resp.status_code == 400
        assert resp.json()["errors"] == [
            "Slug may only contain lowercase letters, digits and hyphens"
        ]
        assert project_repo.rows == {}

    def test_body_must_be_object(self, client):
        resp = client.post("/api/projects", json=["not", "an", "object"])
        assert resp.status_code == 400
        assert resp.json()["message"] == "Request body must be a JSON object"

    def test_duplicate_slug_conflicts(self, client, project_repo):
        first = _create(client)
        resp = client.post("/api/projects", json={**VALID, "title": "Another"})
        assert resp.status_code == 409
        assert resp.json() == {"success": False, "message": "A project with this slug already exists"}
        assert list(project_repo.rows) == [first["id"]]
        assert project_repo.rows[first["id"]]["title"] == VALID["title"]


class TestReadProjects:

    def test_list_newest_first(self, client):
        _create(client, slug="first")
        _create(client, slug="second")
        body = client.get("/api/projects").json()
        assert body["success"] is True
        assert [p["slug"] for p in body["data"]] == ["second", "first"]

    def test_get(self, client):
        created = _create(client)
        assert client.get(f"/api/projects/{created['id']}").json()["data"] == created

    def test_non_numeric_id_is_400(self, client):
        resp = client.get("/api/projects/abc")
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_non_ascii_digit_id_is_400(self, client):
        resp = client.get("/api/projects/%C2%B2")
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_id_beyond_int4_is_400(self, client):
        resp = client.get("/api/projects/99999999999")
        assert resp.status_code == 400
        assert resp.json()["message"] == "ID is out of range"

    def test_unknown_id_is_404(self, client):
        resp = client.get("/api/projects/999999")
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Project not found"}


class TestUpdateProject:

    def test_partial_update_keeps_other_fields(self, client):
        created = _create(client)
        resp = client.put(f"/api/projects/{created['id']}", json={"title": "New"})
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["title"] == "New"
        for key in ("description", "image", "technologies", "featured", "stats", "slug"):
            assert data[key] == created[key]
        assert data["updated_at"] > created["updated_at"]

    def test_wrong_typed_fields_keep_stored_values(self, client):
        created = _create(client)
        resp = client.put(
            f"/api/projects/{created['id']}", json={"technologies": "React", "stats": "x"}
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["technologies"] == created["technologies"]
        assert data["stats"] == created["stats"]

    def test_explicit_null_clears_nullable_field(self, client):
        created = _create(client)
        data = client.put(f"/api/projects/{created['id']}", json={"image": None}).json()["data"]
        assert data["image"] is None
        assert data["technologies"] == created["technologies"]

    def test_featured_toggle(self, client):
        created = _create(client)
        data = client.put(f"/api/projects/{created['id']}", json={"featured": False}).json()["data"]
        assert data["featured"] is False

    def test_validates_present_fields(self, client):
        created = _create(client)
        resp = client.put(f"/api/projects/{created['id']}", json={"slug": "Bad Slug"})
        assert resp.status_code == 400

    def test_missing_project(self, client):
        assert client.put("/api/projects/77", json={"title": "x"}).status_code == 404

    def test_non_numeric_id(self, client):
        assert client.put("/api/projects/abc", json={"title": "x"}).status_code == 400

    def test_slug_conflict(self, client):
        _create(client, slug="taken")
        other = _create(client, slug="free")
        resp = client.put(f"/api/projects/{other['id']}", json={"slug": "taken"})
        assert resp.status_code == 409

    def test_keeping_own_slug_is_not_a_conflict(self, client):
        created = _create(client)
        resp = client.put(f"/api/projects/{created['id']}", json={"slug": created["slug"]})
        assert resp.status_code == 200


class TestDeleteProject:

    def test_delete(self, client, project_repo):
        created = _create(client)
        resp = client.delete(f"/api/projects/{created['id']}")
        assert resp.status_code == 200
        assert resp.json()["deletedId"] == created["id"]
        assert project_repo.rows == {}

    def test_delete_missing(self, client):
        assert client.delete("/api/projects/5").status_code == 404

    def test_delete_non_numeric(self, client):
        assert client.delete("/api/projects/five").status_code == 400

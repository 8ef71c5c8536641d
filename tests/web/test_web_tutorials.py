"""Tests for tutorial endpoints."""

from bson import ObjectId

from tutorials.core.tutorial import TITLE_REQUIRED_MESSAGE


class TestCreateTutorial:
    """Tests for POST /tutorials."""

    def test_create_minimal(self, client):
        response = client.post("/tutorials", json={"title": "T1"})
        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["msg"] == "New tutorial created."
        assert data["URL"].startswith("/tutorials/")

    def test_create_then_get(self, client):
        """The returned location resolves to the stored tutorial."""
        response = client.post(
            "/tutorials",
            json={"title": "T1", "description": "First", "published": True},
        )
        location = response.json()["URL"]

        get_resp = client.get(location)
        assert get_resp.status_code == 200
        tutorial = get_resp.json()["tutorial"]
        assert tutorial["id"] == location.rsplit("/", 1)[-1]
        assert tutorial["title"] == "T1"
        assert tutorial["description"] == "First"
        assert tutorial["published"] is True

    def test_create_defaults_unpublished(self, client, create_tutorial):
        tutorial_id = create_tutorial("T1")
        tutorial = client.get(f"/tutorials/{tutorial_id}").json()["tutorial"]
        assert tutorial["published"] is False
        assert tutorial["description"] is None

    def test_create_empty_title(self, client):
        response = client.post("/tutorials", json={"title": ""})
        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["msgs"] == [TITLE_REQUIRED_MESSAGE]

    def test_create_missing_title(self, client):
        response = client.post("/tutorials", json={"description": "no title"})
        assert response.status_code == 400
        assert TITLE_REQUIRED_MESSAGE in response.json()["msgs"]

    def test_create_without_body(self, client):
        response = client.post("/tutorials")
        assert response.status_code == 400
        assert response.json()["msgs"] == [TITLE_REQUIRED_MESSAGE]

    def test_create_invalid_published(self, client):
        response = client.post(
            "/tutorials", json={"title": "T1", "published": "not-a-flag"}
        )
        assert response.status_code == 400
        assert response.json()["msgs"][0].startswith("published")

    def test_create_numeric_title(self, client):
        response = client.post("/tutorials", json={"title": 123, "published": None})
        assert response.status_code == 201

        tutorial = client.get(response.json()["URL"]).json()["tutorial"]
        assert tutorial["title"] == "123"
        assert tutorial["published"] is False

    def test_create_malformed_json(self, client):
        response = client.post(
            "/tutorials",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_create_does_not_persist_invalid(self, client):
        client.post("/tutorials", json={"title": ""})
        assert client.get("/tutorials").json()["tutorials"] == []


class TestListTutorials:
    """Tests for GET /tutorials."""

    def test_list_empty(self, client):
        response = client.get("/tutorials")
        assert response.status_code == 200
        assert response.json() == {"success": True, "tutorials": []}

    def test_list_returns_public_fields(self, client, create_tutorial):
        create_tutorial("T1", description="d")
        tutorial = client.get("/tutorials").json()["tutorials"][0]
        assert set(tutorial) == {"id", "title", "description", "published"}

    def test_filter_case_insensitive(self, client, create_tutorial):
        create_tutorial("T1")
        create_tutorial("Other")

        response = client.get("/tutorials", params={"title": "t1"})
        assert response.status_code == 200
        tutorials = response.json()["tutorials"]
        assert [t["title"] for t in tutorials] == ["T1"]

    def test_filter_matches_substring(self, client, create_tutorial):
        create_tutorial("Tutorial 1")
        create_tutorial("My Tutorial")
        create_tutorial("Cooking")

        tutorials = client.get("/tutorials?title=tut").json()["tutorials"]
        assert sorted(t["title"] for t in tutorials) == ["My Tutorial", "Tutorial 1"]

    def test_filter_no_match_is_empty_not_404(self, client, create_tutorial):
        create_tutorial("T1")
        response = client.get("/tutorials", params={"title": "nothing"})
        assert response.status_code == 200
        assert response.json()["tutorials"] == []

    def test_filter_special_characters(self, client, create_tutorial):
        create_tutorial("C++ basics")
        create_tutorial("C basics")
        tutorials = client.get("/tutorials", params={"title": "c++"}).json()["tutorials"]
        assert [t["title"] for t in tutorials] == ["C++ basics"]


class TestListPublished:
    """Tests for GET /tutorials/published."""

    def test_only_published(self, client, create_tutorial):
        create_tutorial("Draft")
        create_tutorial("Live", published=True)

        response = client.get("/tutorials/published")
        assert response.status_code == 200
        tutorials = response.json()["tutorials"]
        assert [t["title"] for t in tutorials] == ["Live"]

    def test_routes_to_list_not_get_by_id(self, client):
        """'published' is never read as an id: the response is a list."""
        response = client.get("/tutorials/published")
        assert response.status_code == 200
        data = response.json()
        assert isinstance(data["tutorials"], list)
        assert "tutorial" not in data


class TestGetTutorial:
    """Tests for GET /tutorials/{id}."""

    def test_get_not_found(self, client):
        missing = str(ObjectId())
        response = client.get(f"/tutorials/{missing}")
        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert missing in data["msg"]

    def test_get_malformed_id(self, client):
        response = client.get("/tutorials/not-an-id")
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "msg": "Error retrieving tutorial with ID not-an-id.",
        }


class TestUpdateTutorial:
    """Tests for PUT /tutorials/{id}."""

    def test_update_existing(self, client, create_tutorial):
        tutorial_id = create_tutorial("T1", description="keep")

        response = client.put(f"/tutorials/{tutorial_id}", json={"title": "T2"})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "msg": f"Tutorial with ID {tutorial_id} was updated successfully.",
        }

        tutorial = client.get(f"/tutorials/{tutorial_id}").json()["tutorial"]
        assert tutorial["title"] == "T2"
        assert tutorial["description"] == "keep"

    def test_update_publishes(self, client, create_tutorial):
        tutorial_id = create_tutorial("T1")
        client.put(f"/tutorials/{tutorial_id}", json={"title": "T1", "published": True})
        titles = [t["title"] for t in client.get("/tutorials/published").json()["tutorials"]]
        assert titles == ["T1"]

    def test_update_not_found(self, client):
        missing = str(ObjectId())
        response = client.put(f"/tutorials/{missing}", json={"title": "T2"})
        assert response.status_code == 404
        assert "Maybe Tutorial was not found!" in response.json()["msg"]

    def test_update_empty_body(self, client, create_tutorial):
        tutorial_id = create_tutorial("T1")
        response = client.put(f"/tutorials/{tutorial_id}", json={})
        assert response.status_code == 400
        assert response.json()["msg"] == "Request body can not be empty!"

    def test_update_without_title(self, client, create_tutorial):
        tutorial_id = create_tutorial("T1")
        response = client.put(f"/tutorials/{tutorial_id}", json={"published": True})
        assert response.status_code == 400

        tutorial = client.get(f"/tutorials/{tutorial_id}").json()["tutorial"]
        assert tutorial["published"] is False

    def test_update_invalid_field(self, client, create_tutorial):
        tutorial_id = create_tutorial("T1")
        response = client.put(
            f"/tutorials/{tutorial_id}",
            json={"title": "T2", "published": "not-a-flag"},
        )
        assert response.status_code == 400
        assert response.json()["msgs"][0].startswith("published")

    def test_update_malformed_id(self, client):
        response = client.put("/tutorials/bad-id", json={"title": "T2"})
        assert response.status_code == 500
        assert response.json()["msg"] == "Error updating tutorial with ID bad-id."


class TestDeleteTutorial:
    """Tests for DELETE /tutorials/{id}."""

    def test_delete_twice(self, client, create_tutorial):
        tutorial_id = create_tutorial("T1")

        first = client.delete(f"/tutorials/{tutorial_id}")
        assert first.status_code == 200
        assert first.json()["msg"] == f"Tutorial with ID {tutorial_id} was deleted successfully."

        second = client.delete(f"/tutorials/{tutorial_id}")
        assert second.status_code == 404

        assert client.get(f"/tutorials/{tutorial_id}").status_code == 404

    def test_delete_malformed_id(self, client):
        response = client.delete("/tutorials/bad-id")
        assert response.status_code == 500
        assert response.json()["msg"] == "Error deleting tutorial with ID bad-id."

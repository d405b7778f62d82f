"""Profile API integration tests

TestClient + tmp-directory stores (see conftest.py).
"""

from fastapi.testclient import TestClient

from item_factory.core.profile.defaults import DEFAULT_ITEM_TYPES

NEW_PROFILE = {
    "displayName": "Wasteland Food",
    "description": "Irradiated snacks",
    "itemTypeName": "Food",
    "customContext": "Fallout shelter economy.",
    "fields": [
        {
            "name": "radiation",
            "type": "integer",
            "displayOrder": 5,
            "validation": {"isRequired": True, "maxValue": 50},
        }
    ],
}


class TestListProfiles:
    def test_list_all(self, client: TestClient) -> None:
        response = client.get("/profiles")
        assert response.status_code == 200
        ids = [p["id"] for p in response.json()]
        assert len(ids) == len(DEFAULT_ITEM_TYPES)
        assert ids == sorted(ids)

    def test_filter_by_type(self, client: TestClient) -> None:
        data = client.get("/profiles", params={"item_type": "Weapon"}).json()
        assert [p["id"] for p in data] == ["default_weapon"]
        assert data[0]["is_default"] is True


class TestGetProfile:
    def test_found(self, client: TestClient) -> None:
        response = client.get("/profiles/default_food")
        assert response.status_code == 200
        body = response.json()
        assert body["itemTypeName"] == "Food"
        assert [f["name"] for f in body["fields"]][:2] == ["id", "displayName"]

    def test_not_found(self, client: TestClient) -> None:
        assert client.get("/profiles/missing").status_code == 404


class TestPutProfile:
    def test_create_normalizes(self, client: TestClient) -> None:
        response = client.put("/profiles/wasteland_food", json=NEW_PROFILE)
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "wasteland_food"
        assert [f["name"] for f in body["fields"]] == ["id", "displayName", "radiation"]

        listed = client.get("/profiles", params={"item_type": "Food"}).json()
        assert "wasteland_food" in [p["id"] for p in listed]

    def test_id_mismatch(self, client: TestClient) -> None:
        response = client.put("/profiles/a", json={**NEW_PROFILE, "id": "b"})
        assert response.status_code == 422

    def test_invalid_profile(self, client: TestClient) -> None:
        bad = {**NEW_PROFILE, "itemTypeName": "", "fields": [{"name": "x"}, {"name": "x"}]}
        response = client.put("/profiles/bad", json=bad)
        assert response.status_code == 422
        errors = response.json()["detail"]
        assert "Item type name cannot be empty" in errors
        assert "Duplicate field name: x" in errors

    def test_malformed_document(self, client: TestClient) -> None:
        response = client.put("/profiles/bad", json={"fields": "nope"})
        assert response.status_code == 422


class TestDeleteProfile:
    def test_delete(self, client: TestClient) -> None:
        client.put("/profiles/wasteland_food", json=NEW_PROFILE)
        assert client.delete("/profiles/wasteland_food").status_code == 204
        assert client.get("/profiles/wasteland_food").status_code == 404

    def test_delete_missing(self, client: TestClient) -> None:
        assert client.delete("/profiles/missing").status_code == 404


def test_validate_endpoint(client: TestClient) -> None:
    response = client.post("/profiles/validate", json={"id": "x", "fields": []})
    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is False
    assert "Profile must have at least one field" in body["errors"]


class TestPlayerProfiles:
    def test_list(self, client: TestClient) -> None:
        data = client.get("/player-profiles").json()
        assert data == [
            {
                "id": "default_player",
                "display_name": "Default Player",
                "is_default": True,
                "section_count": 2,
            }
        ]

    def test_get(self, client: TestClient) -> None:
        body = client.get("/player-profiles/default_player").json()
        assert body["playerSettings"]["maxWeight"] == 50000

    def test_get_missing(self, client: TestClient) -> None:
        assert client.get("/player-profiles/nobody").status_code == 404

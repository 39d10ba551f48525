"""Tests for the API example — file routes, JSON bodies, path params."""

from bext.testing import TestClient


class TestRoot:
    async def test_welcome(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.text == "Welcome to Bext"

    async def test_hello(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/hello")
            assert response.text == "Hello, World!"


class TestUsers:
    async def test_list(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/users")
            assert response.status == 200
            data = response.json_body()
            assert data["success"] is True
            assert data["meta"]["count"] == len(data["data"]) >= 2

    async def test_get_by_id(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/users/2")
            assert response.json_body()["data"]["name"] == "Jane Smith"

    async def test_unknown_id(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/users/999")
            assert response.status == 404
            assert response.json_body()["error"] == "User not found"

    async def test_create(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/users", json={"name": "Ada", "email": "ada@example.com"})
            assert response.status == 201
            assert response.json_body()["data"]["name"] == "Ada"

    async def test_create_requires_fields(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/users", json={"name": "Ada"})
            assert response.status == 400

    async def test_create_invalid_json(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post(
                "/users", body=b"{not json", headers={"content-type": "application/json"}
            )
            assert response.status == 400
            assert response.json_body()["error"] == "Invalid JSON body"

    async def test_create_rejects_non_object_body(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/users", json=["Ada", "ada@example.com"])
            assert response.status == 400
            assert response.json_body()["error"] == "JSON body must be an object"


class TestTags:
    async def test_create_and_list(self, example_app) -> None:
        async with TestClient(example_app) as client:
            created = await client.post("/tags", json={"name": "python"})
            assert created.status == 201
            listing = await client.get("/tags")
            names = [tag["name"] for tag in listing.json_body()["data"]]
            assert "python" in names

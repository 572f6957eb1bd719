import os

os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import copy
import itertools
from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.core.config import DevelopmentSettings
from app.main import create_app
from app.store.client import StoreNotFoundError

TEST_SECRET = "test-secret-key-with-at-least-32-characters"
TEST_PASSWORD = "Sup3rSecret"


class FakeStore:
    """Almacén en memoria con la misma interfaz que StoreClient."""

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def _matches(self, obj: dict[str, Any], type: str, filters: dict[str, Any]) -> bool:
        if obj["type"] != type:
            return False
        for key, expected in filters.items():
            value: Any = obj
            for part in key.split("."):
                value = value.get(part) if isinstance(value, dict) else None
            if isinstance(value, dict):
                value = value.get("id")
            if value != expected:
                return False
        return True

    def _resolve(self, obj: dict[str, Any], depth: int | None) -> dict[str, Any]:
        result = copy.deepcopy(obj)
        if depth:
            for key, value in result["metadata"].items():
                if key != "user" and isinstance(value, str) and value in self.objects:
                    result["metadata"][key] = copy.deepcopy(self.objects[value])
        return result

    def find(self, type, filters=None, props=None, depth=None, limit=None):
        found = [
            self._resolve(obj, depth)
            for obj in self.objects.values()
            if self._matches(obj, type, filters or {})
        ]
        return found[:limit] if limit is not None else found

    def find_one(self, type, filters, props=None, depth=None):
        found = self.find(type, filters, props=props, depth=depth, limit=1)
        return found[0] if found else None

    def get_one(self, object_id, props=None, depth=None):
        obj = self.objects.get(object_id)
        return self._resolve(obj, depth) if obj else None

    def insert_one(self, type, title, slug, metadata):
        object_id = f"obj-{next(self._ids)}"
        self.objects[object_id] = {
            "id": object_id,
            "type": type,
            "title": title,
            "slug": slug,
            "metadata": copy.deepcopy(metadata),
        }
        return copy.deepcopy(self.objects[object_id])

    def update_one(self, object_id, data):
        if object_id not in self.objects:
            raise StoreNotFoundError(object_id)
        obj = self.objects[object_id]
        if "title" in data:
            obj["title"] = data["title"]
        obj["metadata"].update(data.get("metadata") or {})
        return copy.deepcopy(obj)

    def delete_one(self, object_id):
        if object_id not in self.objects:
            raise StoreNotFoundError(object_id)
        del self.objects[object_id]


@pytest.fixture
def settings() -> DevelopmentSettings:
    return DevelopmentSettings(jwt_secret=TEST_SECRET, bcrypt_rounds=4)


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def client(settings: DevelopmentSettings, fake_store: FakeStore) -> Generator[TestClient, None, None]:
    app = create_app(settings=settings, store=fake_store)
    with TestClient(app) as test_client:
        yield test_client


def register_user(client: TestClient, email: str = "ana@example.com", full_name: str = "Ana Pérez") -> dict:
    response = client.post(
        "/api/auth/register",
        json={
            "full_name": full_name,
            "email": email,
            "password": TEST_PASSWORD,
            "confirmPassword": TEST_PASSWORD,
        },
    )
    assert response.status_code == 200, response.text
    # Los tests autentican por cabecera, no por la cookie
    client.cookies.clear()
    return response.json()


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    token = register_user(client)["token"]
    return {"Authorization": f"Bearer {token}"}

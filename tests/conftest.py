import pytest
from fastapi.testclient import TestClient

from fileflow.config import settings
from fileflow.main import create_app
from fileflow.storage.memory import MemoryStorage
from fileflow.utils.security import create_access_token, hash_password

PASSWORD = "secret123"

SALES_CSV = (
    "region,revenue,units\n"
    "North,1200,10\n"
    "South,950,7\n"
    "West,1430,12\n"
).encode()


@pytest.fixture(scope="session")
def password_hash():
    return hash_password(PASSWORD)


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    target = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(target))
    return target


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def client(storage):
    return TestClient(create_app(storage=storage))


@pytest.fixture
def make_user(storage, password_hash):
    """Create a user straight in storage and return (record, auth headers)."""
    counter = {"n": 0}

    def _make(role="user", email=None, name=None):
        counter["n"] += 1
        user = storage.create_user(
            email=email or f"{role}{counter['n']}@example.com",
            password_hash=password_hash,
            name=name or f"{role.title()} {counter['n']}",
            role=role,
        )
        return user, {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _make


@pytest.fixture
def upload(client):
    def _upload(headers, name="sales.csv", content=SALES_CSV, content_type="text/csv"):
        return client.post("/api/files/upload", files={"file": (name, content, content_type)}, headers=headers)
    return _upload


@pytest.fixture
def approved_file(make_user, upload, client):
    """A sales.csv owned by a fresh user and approved by an admin."""
    owner, owner_headers = make_user("user")
    _, admin_headers = make_user("admin")
    file_id = upload(owner_headers).json()["id"]
    assert client.patch(f"/api/files/{file_id}/approve", headers=admin_headers).status_code == 200
    return {"id": file_id, "owner": owner, "headers": owner_headers, "admin_headers": admin_headers}

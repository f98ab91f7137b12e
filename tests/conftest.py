"""Shared fixtures: a repository in a temp dir, the service, and an API client."""
import pytest
from fastapi.testclient import TestClient

from music_commerce.access.query import ListScopePolicy
from music_commerce.access.schemas import Actor, Role
from music_commerce.settings import Settings
from music_commerce.tokens import create_access_token
from api.repositories.local import LocalFileRepository
from api.services.resource_service import ResourceService

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture
def repository(tmp_path):
    return LocalFileRepository(data_dir=tmp_path / "collections")


@pytest.fixture
def service(repository):
    return ResourceService(repository, scope_policy=ListScopePolicy.REJECT)


@pytest.fixture
def alice(repository):
    return repository.create("users", {"name": "Alice", "email": "alice@example.com", "role": "user"})


@pytest.fixture
def bob(repository):
    return repository.create("users", {"name": "Bob", "email": "bob@example.com", "role": "user"})


@pytest.fixture
def admin(repository):
    return repository.create("users", {"name": "Root", "email": "root@example.com", "role": "admin"})


@pytest.fixture
def alice_actor(alice):
    return Actor(id=alice["id"], role=Role.USER)


@pytest.fixture
def bob_actor(bob):
    return Actor(id=bob["id"], role=Role.USER)


@pytest.fixture
def admin_actor(admin):
    return Actor(id=admin["id"], role=Role.ADMIN)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_root=tmp_path,
        jwt_secret=TEST_SECRET,
        list_scope_policy=ListScopePolicy.REJECT,
    )


@pytest.fixture
def app_state(settings, repository):
    from api.dependencies import AppState

    state = AppState(settings)
    state.initialize(repository)
    return state


@pytest.fixture
def client(app_state):
    from api.dependencies import get_app_state
    from api.main import app

    app.dependency_overrides[get_app_state] = lambda: app_state
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header(settings):
    def make(user):
        return {"Authorization": f"Bearer {create_access_token(user['id'], settings)}"}
    return make

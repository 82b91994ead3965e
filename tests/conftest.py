"""
Pytest configuration and fixtures for strapi-seed tests.

Unit tests talk to FakeStrapi, an in-memory stand-in for the Strapi REST API
plugged into the client through httpx.MockTransport.
"""
import json
import re
from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote

import httpx
import pytest

from strapi_seed.api import StrapiClient
from strapi_seed.config import Settings
from strapi_seed.utils import SetupStore

BASE_URL = "http://strapi.test"
API_TOKEN = "test-token"

PUBLIC_ROLE = {"id": 2, "name": "Public", "description": "Default role given to unauthenticated user.", "type": "public"}
AUTHENTICATED_ROLE = {"id": 1, "name": "Authenticated", "description": "Default role given to authenticated user.", "type": "authenticated"}

MEDIA_FILES = [
    "ada.png",
    "hello-world.jpg",
    "second-post.jpg",
    "banner.jpg",
    "slide-1.jpg",
    "slide-2.jpg",
    "favicon.png",
    "default-image.png",
]

SINGLE_TYPES = {"global", "about"}


class FakeStrapi:
    """Minimal Strapi v4 REST API keeping everything in memory"""

    def __init__(self, public_role_after: int = 0, first_id: int = 1):
        self.public_role_after = public_role_after
        self.role_lookups = 0
        self.role_permissions = {
            "api::article": {
                "controllers": {
                    "article": {
                        "find": {"enabled": False, "policy": ""},
                        "create": {"enabled": False, "policy": ""},
                    }
                }
            }
        }
        self.role_updates: List[Dict] = []
        self.files: List[Dict] = []
        self.uploads: List[Tuple[str, Dict]] = []
        self.entries: Dict[str, List[Dict]] = {}
        self.singles: Dict[str, Dict] = {}
        self.calls: List[Tuple[str, str]] = []
        self.failures: Dict[Tuple[str, str], Tuple[int, str]] = {}
        self._next_id = first_id

    def fail(self, method: str, path: str, status: int = 400, message: str = "Invalid data"):
        self.failures[(method, path)] = (status, message)

    def add_file(self, name: str) -> Dict:
        record = {"id": self._take_id(), "name": name, "url": f"/uploads/{name}", "mime": "image/png"}
        self.files.append(record)
        return record

    def creates(self, plural: Optional[str] = None) -> List[Tuple[str, str]]:
        """Create calls in order, optionally for one content type"""
        writes = [
            call for call in self.calls
            if (call[0] == "POST" and call[1].startswith("/api/") and call[1] != "/api/upload")
            or (call[0] == "PUT" and call[1][len("/api/"):] in SINGLE_TYPES)
        ]
        if plural:
            writes = [call for call in writes if call[1] == f"/api/{plural}"]
        return writes

    def _take_id(self) -> int:
        self._next_id += 1
        return self._next_id - 1

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        method, path = request.method, request.url.path
        self.calls.append((method, path))

        assert request.headers["Authorization"] == f"Bearer {API_TOKEN}"

        if (method, path) in self.failures:
            status, message = self.failures[(method, path)]
            return httpx.Response(status, json={"data": None, "error": {"status": status, "name": "ValidationError", "message": message}})

        if path == "/api/users-permissions/roles" and method == "GET":
            self.role_lookups += 1
            roles = [AUTHENTICATED_ROLE]
            if self.role_lookups > self.public_role_after:
                roles.append(PUBLIC_ROLE)
            return httpx.Response(200, json={"roles": roles})

        if path == f"/api/users-permissions/roles/{PUBLIC_ROLE['id']}":
            if method == "GET":
                return httpx.Response(200, json={"role": {**PUBLIC_ROLE, "permissions": self.role_permissions}})
            body = json.loads(request.content)
            self.role_updates.append(body)
            self.role_permissions = body["permissions"]
            return httpx.Response(200, json={"ok": True})

        if path == "/api/upload/files" and method == "GET":
            name = request.url.params.get("filters[name][$eq]")
            return httpx.Response(200, json=[f for f in self.files if f["name"] == name])

        if path == "/api/upload" and method == "POST":
            body = request.content
            file_info = json.loads(re.search(rb'name="fileInfo"\r\n\r\n(.*?)\r\n--', body, re.DOTALL).group(1))
            filename = unquote(re.search(rb'filename="([^"]+)"', body).group(1).decode())
            record = {
                "id": self._take_id(),
                "name": file_info["name"],
                "url": f"/uploads/{filename}",
                "mime": "image/jpeg",
                "size": 1.2,
            }
            self.files.append(record)
            self.uploads.append((filename, file_info))
            return httpx.Response(200, json=[record])

        content_type = path[len("/api/"):]
        if method == "PUT" and content_type in SINGLE_TYPES:
            data = json.loads(request.content)["data"]
            self.singles[content_type] = data
            return httpx.Response(200, json={"data": {"id": 1, "attributes": data}, "meta": {}})

        if method == "POST":
            data = json.loads(request.content)["data"]
            record = {"id": self._take_id(), "attributes": data}
            self.entries.setdefault(content_type, []).append(record)
            return httpx.Response(200, json={"data": record, "meta": {}})

        return httpx.Response(404, json={"data": None, "error": {"status": 404, "name": "NotFoundError", "message": "Not Found"}})


def pytest_addoption(parser):
    """Add custom pytest command-line options for the admin panel tests."""
    parser.addoption(
        '--run-e2e',
        action='store_true',
        default=False,
        help='Run browser tests against a running Strapi admin panel'
    )
    parser.addoption(
        '--strapi-url',
        action='store',
        default='http://localhost:1337',
        help='Strapi base URL for browser tests'
    )
    parser.addoption(
        '--admin-email',
        action='store',
        default='admin@satc.edu.br',
        help='Admin panel login email'
    )
    parser.addoption(
        '--admin-password',
        action='store',
        default='welcomeToStrapi123',
        help='Admin panel login password'
    )
    parser.addoption(
        '--headed',
        action='store_true',
        default=False,
        help='Show the browser window during browser tests'
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption('--run-e2e'):
        return
    skip_e2e = pytest.mark.skip(reason='needs --run-e2e and a running Strapi')
    for item in items:
        if 'e2e' in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture
def fake_strapi():
    return FakeStrapi()


@pytest.fixture
def client(fake_strapi):
    with StrapiClient(
        base_url=BASE_URL,
        api_token=API_TOKEN,
        transport=httpx.MockTransport(fake_strapi.handler),
    ) as strapi_client:
        yield strapi_client


@pytest.fixture
def uploads_dir(tmp_path):
    directory = tmp_path / "uploads"
    directory.mkdir()
    for name in MEDIA_FILES:
        (directory / name).write_bytes(b"\x89PNG fake image " + name.encode())
    return directory


@pytest.fixture
def settings(tmp_path, uploads_dir):
    return Settings(
        strapi_url=BASE_URL,
        strapi_api_token=API_TOKEN,
        uploads_dir=str(uploads_dir),
        data_file=str(tmp_path / "data.json"),
        state_file=str(tmp_path / "state.json"),
        role_retry_delay=0,
    )


@pytest.fixture
def store(settings):
    return SetupStore(settings.state_file, settings.strapi_url, settings.environment)


@pytest.fixture
def write_fixture(settings):
    """Write a data.json for the run and return its path"""
    def _write(data: Dict) -> str:
        with open(settings.data_file, "w", encoding="utf-8") as f:
            json.dump(data, f)
        return settings.data_file
    return _write

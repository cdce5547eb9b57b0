import json
import os

# Keep test runs on console-only logging
os.environ.setdefault("ENVIRONMENT", "testing")

import httpx
import pytest

from screener.models.rubric import UploadedResume
from screener.services.match_client import MatchRequestClient
from screener.services.role_catalog import RoleCatalogClient
from screener.services.workflow import WorkflowController
from screener.utils.config import Settings

BASE_URL = "http://scoring.test"


class FakeScoringService:
    """In-memory stand-in for the remote /api/roles and /api/upload endpoints"""

    def __init__(self, roles=None):
        self.roles = list(roles or ["Data Scientist", "Backend Engineer"])
        self.created = []
        self.requests = []
        self.upload_status = 200
        self.upload_body = {"score_without_chatgpt": 72, "score_with_chatgpt": 85, "summary": "Good fit"}
        self.roles_status = 200
        self.create_status = 201
        # paths whose successful responses claim gzip but carry plain bytes
        self.corrupt_paths = set()

    def count(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if (request.method, path) in self.corrupt_paths:
            return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")

        if path == "/api/roles" and request.method == "GET":
            if self.roles_status != 200:
                return httpx.Response(self.roles_status, text="catalog unavailable")
            return httpx.Response(200, json=self.roles)

        if path == "/api/roles" and request.method == "POST":
            rubric = json.loads(request.content)
            if self.create_status >= 400:
                return httpx.Response(self.create_status, text="role rejected")
            if rubric["role"] in self.roles:
                return httpx.Response(409, text=f"Role {rubric['role']} already exists")
            self.created.append(rubric)
            self.roles.append(rubric["role"])
            return httpx.Response(self.create_status, json={"message": "Role created"})

        if path == "/api/upload" and request.method == "POST":
            if isinstance(self.upload_body, (dict, list)):
                return httpx.Response(self.upload_status, json=self.upload_body)
            return httpx.Response(self.upload_status, text=self.upload_body)

        return httpx.Response(404, text="not found")


@pytest.fixture
def service():
    return FakeScoringService()


@pytest.fixture
def settings():
    return Settings(api_base_url=BASE_URL)


@pytest.fixture
def http_client(service):
    return httpx.AsyncClient(transport=httpx.MockTransport(service.handler))


@pytest.fixture
def catalog_client(settings, http_client):
    return RoleCatalogClient(settings, http_client)


@pytest.fixture
def match_client(settings, http_client):
    return MatchRequestClient(settings, http_client)


@pytest.fixture
def controller(catalog_client, match_client):
    return WorkflowController(catalog_client, match_client, session_id="test-session")


@pytest.fixture
def resume():
    return UploadedResume.create("jane_doe.pdf", b"%PDF-1.4 resume")

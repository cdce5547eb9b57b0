import httpx
import pytest

from screener.models.rubric import RoleRubric, SkillEntry
from screener.services.role_catalog import RoleCatalogClient
from screener.utils.config import Settings
from screener.utils.exceptions import NetworkError, ServerError, DecodeError, ValidationError


def make_rubric(role="ML Engineer"):
    return RoleRubric(
        role=role,
        skills=[SkillEntry(name="PyTorch", synonyms=["torch ", " pytorch"])],
        experience_keywords=["model serving"],
        education="MSc",
    )


def client_for(handler):
    settings = Settings(api_base_url="http://scoring.test")
    return RoleCatalogClient(settings, httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestListRoles:
    """Test cases for fetching the role catalog"""

    @pytest.mark.asyncio
    async def test_returns_catalog_in_order(self, catalog_client, service):
        roles = await catalog_client.list_roles()

        assert roles == ["Data Scientist", "Backend Engineer"]
        assert str(service.requests[0].url) == "http://scoring.test/api/roles"

    @pytest.mark.asyncio
    async def test_server_failure(self):
        client = client_for(lambda request: httpx.Response(503, text="maintenance"))

        with pytest.raises(ServerError) as exc_info:
            await client.list_roles()

        assert exc_info.value.status_code == 503
        assert exc_info.value.body == "maintenance"

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = client_for(handler)

        with pytest.raises(NetworkError):
            await client.list_roles()

    @pytest.mark.asyncio
    async def test_timeout_is_a_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(NetworkError):
            await client_for(handler).list_roles()

    @pytest.mark.asyncio
    async def test_corrupt_content_encoding_is_a_decode_error(self, catalog_client, service):
        service.corrupt_paths.add(("GET", "/api/roles"))

        with pytest.raises(DecodeError):
            await catalog_client.list_roles()

    @pytest.mark.asyncio
    async def test_other_request_errors_are_network_errors(self):
        def handler(request):
            raise httpx.TooManyRedirects("redirect loop", request=request)

        with pytest.raises(NetworkError):
            await client_for(handler).list_roles()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"roles": ["a"]}),
        httpx.Response(200, json=["a", 3]),
    ])
    async def test_undecodable_body(self, response):
        client = client_for(lambda request: response)

        with pytest.raises(DecodeError):
            await client.list_roles()


class TestCreateRole:
    """Test cases for adding a role to the catalog"""

    @pytest.mark.asyncio
    async def test_created_role_appears_once_in_catalog(self, catalog_client, service):
        await catalog_client.create_role(make_rubric())
        roles = await catalog_client.list_roles()

        assert roles.count("ML Engineer") == 1

    @pytest.mark.asyncio
    async def test_sends_trimmed_rubric_as_json(self, catalog_client, service):
        await catalog_client.create_role(make_rubric())

        sent = service.created[0]
        assert sent["skills"] == [{"name": "PyTorch", "synonyms": ["torch", "pytorch"]}]
        assert sent["weights"] == {"skills": 0.4, "experience": 0.4, "education": 0.2}
        assert service.requests[0].headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_create_returns_nothing(self, catalog_client):
        assert await catalog_client.create_role(make_rubric()) is None

    @pytest.mark.asyncio
    async def test_invalid_rubric_is_rejected_locally(self, catalog_client, service):
        with pytest.raises(ValidationError):
            await catalog_client.create_role(RoleRubric(role="", skills=[]))

        assert service.requests == []

    @pytest.mark.asyncio
    async def test_server_rejection_keeps_body(self, catalog_client, service):
        service.roles.append("ML Engineer")

        with pytest.raises(ServerError) as exc_info:
            await catalog_client.create_role(make_rubric())

        assert exc_info.value.status_code == 409
        assert "already exists" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_corrupt_content_encoding_is_a_decode_error(self, catalog_client, service):
        service.corrupt_paths.add(("POST", "/api/roles"))

        with pytest.raises(DecodeError):
            await catalog_client.create_role(make_rubric())

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(NetworkError):
            await client_for(handler).create_role(make_rubric())

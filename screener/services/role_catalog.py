"""
Client for the remote role catalog (/api/roles)
"""
from typing import List

import httpx

from screener.models.rubric import RoleRubric
from screener.utils.config import Settings
from screener.utils.exceptions import DecodeError
from screener.utils.logging_config import get_logger
from screener.utils.utils import send_request, raise_for_failure, decode_json

logger = get_logger(__name__)

ROLES_PATH = "/api/roles"


class RoleCatalogClient:
    """Lists and creates roles on the scoring service"""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    @property
    def url(self) -> str:
        return self.settings.endpoint(ROLES_PATH)

    async def list_roles(self) -> List[str]:
        """Return the full catalog of role names, in server order."""
        logger.info(f"Fetching role catalog from {self.url}")
        response = await send_request(self.client, "GET", self.url)
        raise_for_failure(response, "Failed to fetch roles")

        data = decode_json(response)
        if not isinstance(data, list) or not all(isinstance(role, str) for role in data):
            raise DecodeError(f"Expected a list of role names from {self.url}", url=self.url)

        logger.info(f"Fetched {len(data)} roles")
        return data

    async def create_role(self, rubric: RoleRubric) -> None:
        """Submit a new role. The catalog is not returned; call list_roles() to see it."""
        rubric.check_submittable()

        logger.info(f"Creating role '{rubric.role}' with {len(rubric.skills)} skills")
        response = await send_request(self.client, "POST", self.url, json=rubric.to_payload())
        raise_for_failure(response, "Failed to create role")
        logger.info(f"Role '{rubric.role}' created ({response.status_code})")

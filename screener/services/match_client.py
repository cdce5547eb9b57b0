"""
Client for resume scoring (/api/upload)
"""
import httpx
from pydantic import ValidationError as PydanticValidationError

from screener.models.rubric import MatchResult, UploadedResume
from screener.utils.config import Settings
from screener.utils.exceptions import InputError, DecodeError
from screener.utils.logging_config import get_logger, PerformanceMonitor
from screener.utils.utils import send_request, raise_for_failure, decode_json

logger = get_logger(__name__)

UPLOAD_PATH = "/api/upload"

# Parsing and LLM scoring routinely take several seconds
SLOW_UPLOAD_THRESHOLD_MS = 10000


class MatchRequestClient:
    """Uploads a resume together with a role name and returns the scored match"""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    @property
    def url(self) -> str:
        return self.settings.endpoint(UPLOAD_PATH)

    async def submit(self, resume: UploadedResume, role_name: str) -> MatchResult:
        if resume is None or not role_name or not role_name.strip():
            raise InputError(
                "Please select a file and job role",
                field="file" if resume is None else "job_role"
            )

        logger.info(f"Submitting {resume.filename} ({len(resume.content)} bytes) for role '{role_name}'")

        with PerformanceMonitor(f"score {resume.filename}", logger, threshold_ms=SLOW_UPLOAD_THRESHOLD_MS):
            response = await send_request(
                self.client,
                "POST",
                self.url,
                files={"file": (resume.filename, resume.content, resume.content_type)},
                data={"job_role": role_name},
            )
        raise_for_failure(response, "Server error")

        data = decode_json(response)
        try:
            result = MatchResult.model_validate(data)
        except PydanticValidationError as e:
            raise DecodeError(f"Unexpected match result from {self.url}: {e}", url=self.url, cause=e) from e

        logger.info(
            f"Scored {resume.filename}: {result.score_without_llm} without LLM, {result.score_with_llm} with LLM"
        )
        return result

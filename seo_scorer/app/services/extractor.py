"""Client for the Twinword topic tagging API."""

import logging
from functools import lru_cache

import httpx
from fastapi import status
from pydantic import ValidationError

from seo_scorer.app.config import settings
from seo_scorer.app.models import ExtractionResult

logger = logging.getLogger(__name__)

SUCCESS_RESULT_CODE = "200"


class ExtractionError(Exception):
    """Base class for failures of the keyword extraction call.

    Attributes:
        message: User-readable description of the failure.
        status_code: HTTP status the request handler should answer with.
        reason: Short label used for metrics.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    reason = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingCredentialsError(ExtractionError):
    reason = "missing_credentials"


class TopicNotFoundError(ExtractionError):
    reason = "topic_not_found"


class ExtractionServiceError(ExtractionError):
    status_code = status.HTTP_502_BAD_GATEWAY
    reason = "upstream"


class TopicExtractor:
    """Extracts weighted keywords and topics from text via Twinword.

    A fresh ``httpx.AsyncClient`` is opened per call so the extractor holds no
    connection state between requests.
    """

    def __init__(
        self,
        api_key: str | None,
        api_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    async def extract(self, text: str) -> ExtractionResult:
        """Send text to the extraction API.

        Args:
            text: Trimmed text to analyse.

        Returns:
            ExtractionResult with keyword and topic weight maps.

        Raises:
            MissingCredentialsError: If no API key is configured.
            ExtractionServiceError: If the API is unreachable or answers with
                something other than a JSON object.
            TopicNotFoundError: If the API reports a non-success result code.
        """
        if not self.api_key:
            raise MissingCredentialsError("Missing Twinword API key.")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.api_url,
                    data={"text": text},
                    headers={"X-Twaip-Key": self.api_key},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Extraction API returned HTTP %d", e.response.status_code
            )
            raise ExtractionServiceError(
                "Keyword extraction service returned an error."
            ) from e
        except httpx.HTTPError as e:
            logger.error("Extraction API request failed: %s", str(e))
            raise ExtractionServiceError(
                "Keyword extraction service is unreachable."
            ) from e
        except ValueError as e:
            logger.error("Extraction API returned invalid JSON: %s", str(e))
            raise ExtractionServiceError(
                "Keyword extraction service returned an invalid response."
            ) from e

        logger.debug("Extraction API response: %s", data)

        if not isinstance(data, dict):
            raise ExtractionServiceError(
                "Keyword extraction service returned an invalid response."
            )

        if str(data.get("result_code")) != SUCCESS_RESULT_CODE:
            logger.warning(
                "Extraction API result %s: %s",
                data.get("result_code"),
                data.get("result_msg"),
            )
            raise TopicNotFoundError("Topic not found or irrelevant.")

        try:
            return ExtractionResult(
                keywords=data.get("keyword") or {},
                topics=data.get("topic") or {},
            )
        except ValidationError as e:
            logger.error("Unexpected extraction payload: %s", str(e))
            raise ExtractionServiceError(
                "Keyword extraction service returned an invalid response."
            ) from e


@lru_cache()
def get_extractor() -> TopicExtractor:
    """Creates and caches the topic extractor from application settings.

    Returns:
        TopicExtractor: Extractor configured with the Twinword credentials.
    """
    if not settings.TWINWORD_API_KEY:
        logger.warning("TWINWORD_API_KEY is not set; analysis requests will fail")

    return TopicExtractor(
        api_key=settings.TWINWORD_API_KEY,
        api_url=settings.TWINWORD_API_URL,
        timeout=settings.EXTRACTION_TIMEOUT,
    )

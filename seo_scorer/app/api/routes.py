"""Routes module for the SEO scorer API."""

import logging
from typing import Dict, Union

from fastapi import APIRouter, HTTPException, Request, status

from seo_scorer.app.models import (
    AnalyzeRequest,
    AnalyzeResponse,
    InsertKeywordResponse,
)
from seo_scorer.app.services.analyzer import analyze_with_metrics
from seo_scorer.app.services.extractor import ExtractionError, TopicExtractor
from seo_scorer.app.services.keyword_inserter import insert_keyword
from seo_scorer.app.telemetry import trace_method

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/",
    summary="Root endpoint",
    response_description="API status",
    status_code=status.HTTP_200_OK,
    tags=["Monitoring"],
)
@trace_method("root")
async def root() -> Dict[str, str]:
    """Root API endpoint.

    Returns:
        A simple status message confirming the API is running.
    """
    return {"status": "ok"}


@router.post(
    "/analyze",
    response_model=Union[AnalyzeResponse, InsertKeywordResponse],
    response_model_exclude_none=True,
    summary="Score text for SEO quality or insert a keyword into it",
    response_description="SEO score and keywords, or the edited text",
    status_code=status.HTTP_200_OK,
    tags=["Analyzer"],
)
@trace_method("analyze_text")
async def analyze_text(
    request: AnalyzeRequest, req: Request
) -> Union[AnalyzeResponse, InsertKeywordResponse]:
    """Scores text for SEO quality, or splices a keyword into it.

    When ``insertKeyword`` is given the keyword is inserted into the trimmed
    text and no analysis is run. Otherwise the text is sent to the keyword
    extraction service and scored.

    Args:
        request: The request body.
            It includes the following fields:
            - text (str): The input text.
            - insertKeyword (str, optional): Keyword to insert.
        req: FastAPI request object to access application state,
            specifically the topic extractor instance.

    Returns:
        InsertKeywordResponse with ``updatedText`` when inserting, otherwise
        an AnalyzeResponse with the ranked keywords, primary topic, score
        and score category.

    Raises:
        HTTPException:
            - 500 (Internal Server Error): Missing API key, topic not found,
              or unexpected errors.
            - 502 (Bad Gateway): The extraction service failed.
            - 503 (Service Unavailable): The extractor is not available.
    """
    text = request.text.strip()

    if request.insert_keyword:
        logger.info("Inserting keyword into text of %d characters", len(text))
        return InsertKeywordResponse(
            updated_text=insert_keyword(text, request.insert_keyword)
        )

    extractor = _get_extractor_from_request(req)
    try:
        return await analyze_with_metrics(extractor, text)
    except ExtractionError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.exception("Unexpected error during analysis")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error occurred",
        ) from e


def _get_extractor_from_request(req: Request) -> TopicExtractor:
    extractor = getattr(req.app.state, "extractor", None)
    if not extractor:
        logger.error("Extraction service not available")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Extraction service not available",
        )
    return extractor


@router.get(
    "/health",
    summary="Health check endpoint",
    response_description="Service health status",
    status_code=status.HTTP_200_OK,
    tags=["Monitoring"],
)
@trace_method("health_check")
async def health_check() -> Dict[str, str]:
    """Health check endpoint.

    Returns:
        A simple status message confirming the service is healthy.
    """
    return {"status": "healthy"}

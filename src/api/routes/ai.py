"""Natural-language smart-add endpoint."""

import asyncio
from datetime import date

from fastapi import APIRouter, status

from api.dependencies import api_error
from api.models.requests import ParseRequest
from api.models.responses import ErrorCodes, ParsedEventResponse
from services.extraction import ExtractionUnavailableError, parse_natural_language_event

router = APIRouter(prefix="/api/ai")


def parse_reference_date(value: str | None) -> date:
    """Parse YYYY-MM-DD or an ISO timestamp; only the date part is used."""
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            "Invalid referenceDate format",
            ErrorCodes.INVALID_REQUEST,
            ["Expected format: YYYY-MM-DD or ISO 8601 timestamp"],
        )


@router.post("/parse", response_model=ParsedEventResponse)
async def parse_event(body: ParseRequest):
    """
    Extract event fields from free text.

    Returns 503 when the extraction service is unavailable or returns
    unusable output; the client keeps its form unchanged in that case.
    """
    if not body.prompt.strip():
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            "Empty prompt",
            ErrorCodes.INVALID_REQUEST,
        )

    reference_date = parse_reference_date(body.referenceDate)

    try:
        parsed = await asyncio.to_thread(
            parse_natural_language_event, body.prompt, reference_date
        )
    except ExtractionUnavailableError as e:
        raise api_error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Smart add is unavailable",
            ErrorCodes.AI_UNAVAILABLE,
            [str(e)],
        )

    return ParsedEventResponse(**parsed)

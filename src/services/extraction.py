"""
Natural-language event extraction via Gemini.

Turns free text such as "lunch with Sam tomorrow at 1pm" into structured
event fields. The call is best-effort: every failure is reported as
ExtractionUnavailableError so callers can fall back to manual entry.
"""

import json
import logging
from datetime import date

from google.genai import types

from core.config import DEFAULT_EVENT_TIME, GEMINI_API_KEY, GEMINI_MODEL
from core.genai_client import get_genai_client
from core.validation import is_valid_date, is_valid_time
from models.events import ParsedEvent

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "date", "time")

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "title": types.Schema(type=types.Type.STRING, description="Short event title"),
        "date": types.Schema(type=types.Type.STRING, description="Event date, YYYY-MM-DD"),
        "time": types.Schema(type=types.Type.STRING, description="Start time, 24h HH:mm"),
        "description": types.Schema(
            type=types.Type.STRING, description="Any remaining details"
        ),
    },
    required=list(REQUIRED_FIELDS),
)


class ExtractionUnavailableError(Exception):
    """Raised when event fields could not be extracted from text."""


def build_prompt(text: str, reference_date: date) -> str:
    """Build the extraction prompt for a free-text request."""
    reference = reference_date.isoformat()
    return f"""Extract a calendar event from the text below.

TEXT:
{text}

TODAY: {reference} ({reference_date.strftime("%A")})

RULES:
1. title: a short name for the event
2. date: YYYY-MM-DD. Resolve relative dates ("tomorrow", "next friday") from TODAY.
   If no year is given, use {reference_date.year}. If no date is given, use {reference}.
3. time: 24-hour HH:mm. If no time is given, use {DEFAULT_EVENT_TIME}.
4. description: any other details from the text, or omit it.
"""


def parse_model_response(raw: str | None) -> ParsedEvent:
    """
    Validate the model's JSON output against the event schema.

    Raises:
        ExtractionUnavailableError: on malformed JSON or missing/invalid fields
    """
    if not raw:
        raise ExtractionUnavailableError("Empty response from model")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ExtractionUnavailableError(f"Model returned malformed JSON: {e}") from e

    if not isinstance(data, dict):
        raise ExtractionUnavailableError("Model returned a non-object JSON value")

    missing = [name for name in REQUIRED_FIELDS if not str(data.get(name) or "").strip()]
    if missing:
        raise ExtractionUnavailableError(f"Model response missing: {', '.join(missing)}")

    event_date = str(data["date"]).strip()
    event_time = str(data["time"]).strip()
    if not is_valid_date(event_date):
        raise ExtractionUnavailableError(f"Model returned invalid date '{event_date}'")
    if not is_valid_time(event_time):
        raise ExtractionUnavailableError(f"Model returned invalid time '{event_time}'")

    return {
        "title": str(data["title"]).strip(),
        "date": event_date,
        "time": event_time,
        "description": str(data.get("description") or ""),
    }


def parse_natural_language_event(text: str, reference_date: date) -> ParsedEvent:
    """
    Extract event fields from free text.

    Blocking call; run it in a worker thread from async code.

    Raises:
        ExtractionUnavailableError: missing credential, transport failure
            or unusable model output
    """
    if not GEMINI_API_KEY:
        raise ExtractionUnavailableError("GEMINI_API_KEY is not configured")

    config = types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=RESPONSE_SCHEMA,
        temperature=0.0,
    )

    try:
        response = get_genai_client().models.generate_content(
            model=GEMINI_MODEL,
            contents=build_prompt(text, reference_date),
            config=config,
        )
    except Exception as e:
        logger.warning("Gemini request failed: %s", e)
        raise ExtractionUnavailableError(f"Gemini request failed: {e}") from e

    try:
        parsed = parse_model_response(response.text)
    except ExtractionUnavailableError as e:
        logger.warning("Unusable Gemini response: %s", e)
        raise

    logger.info("Extracted event '%s' on %s %s", parsed["title"], parsed["date"], parsed["time"])
    return parsed

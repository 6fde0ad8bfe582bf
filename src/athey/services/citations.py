"""Tolerant parser for the trailing sources block of a generated answer."""

import json

from pydantic import ValidationError

from athey.observability import get_logger
from athey.observability.constants import LogEvents
from athey.schemas.responses import SourceCitation
from athey.services.prompt_builder import SOURCES_END, SOURCES_START

logger = get_logger(__name__)

MAX_CITATIONS = 4


def extract_citations(text: str) -> list[SourceCitation]:
    """Locate the last sources block by its literal markers and parse it.

    The block is written by the engine, so it is treated as untrusted:
    a missing or malformed block yields an empty list, and entries that do
    not have exactly the four string fields are dropped.
    """
    start = text.rfind(SOURCES_START)
    if start == -1:
        logger.info(LogEvents.CITATIONS_MISSING)
        return []

    end = text.find(SOURCES_END, start)
    if end == -1:
        logger.warning(LogEvents.CITATIONS_MALFORMED, reason="unterminated block")
        return []

    payload = text[start + len(SOURCES_START) : end].strip()
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.warning(LogEvents.CITATIONS_MALFORMED, reason=f"invalid JSON: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(LogEvents.CITATIONS_MALFORMED, reason="not a JSON array")
        return []

    citations: list[SourceCitation] = []
    for item in data:
        try:
            citations.append(SourceCitation.model_validate(item, strict=True))
        except ValidationError:
            logger.warning(LogEvents.CITATIONS_MALFORMED, reason="invalid entry dropped")

    return citations[:MAX_CITATIONS]

"""Tests for the sources block parser."""

import json

from structlog.testing import capture_logs

from athey.observability.constants import LogEvents
from athey.services.citations import MAX_CITATIONS, extract_citations
from athey.services.prompt_builder import SOURCES_END, SOURCES_START

NASA = {
    "domain": "nasa.gov",
    "title": "ISS Tracker",
    "url": "https://spotthestation.nasa.gov",
    "description": "Where the station is now",
}
ESA = {
    "domain": "esa.int",
    "title": "Spacecraft Navigation",
    "url": "https://www.esa.int/navigation",
    "description": "Deep space navigation",
}


def answer(payload: str) -> str:
    return f"The ISS is over London.\n\n{SOURCES_START}\n{payload}\n{SOURCES_END}"


def test_well_formed_block() -> None:
    """Test a well-formed block yields every citation."""
    citations = extract_citations(answer(json.dumps([NASA, ESA])))

    assert [c.domain for c in citations] == ["nasa.gov", "esa.int"]
    assert citations[0].url == "https://spotthestation.nasa.gov"


def test_no_block() -> None:
    """Test an answer without a sources block yields no citations."""
    with capture_logs() as logs:
        assert extract_citations("Just an answer.") == []

    assert logs[0]["event"] == LogEvents.CITATIONS_MISSING


def test_invalid_json_is_tolerated() -> None:
    """Test invalid JSON inside the block yields no citations."""
    with capture_logs() as logs:
        assert extract_citations(answer('[{"domain": "nasa.gov",')) == []

    assert logs[0]["event"] == LogEvents.CITATIONS_MALFORMED


def test_unterminated_block() -> None:
    """Test a block without a closing marker is ignored."""
    assert extract_citations(f"Answer\n{SOURCES_START}\n{json.dumps([NASA])}") == []


def test_non_array_payload() -> None:
    """Test a JSON object instead of an array is ignored."""
    assert extract_citations(answer(json.dumps(NASA))) == []


def test_entries_with_wrong_fields_are_dropped() -> None:
    """Test entries without exactly the four string fields are dropped."""
    extra = {**ESA, "rank": 1}
    missing = {"domain": "x.org", "title": "t", "url": "https://x.org"}
    not_string = {**ESA, "title": 42}

    citations = extract_citations(answer(json.dumps([extra, NASA, missing, not_string])))

    assert [c.domain for c in citations] == ["nasa.gov"]


def test_capped_at_four() -> None:
    """Test at most four citations are returned."""
    entries = [{**NASA, "title": f"Source {i}"} for i in range(6)]

    citations = extract_citations(answer(json.dumps(entries)))

    assert len(citations) == MAX_CITATIONS == 4


def test_last_block_wins() -> None:
    """Test the last marker pair in the answer is the one parsed."""
    # The policy's own example may be echoed earlier in the answer
    text = answer(json.dumps([ESA])) + "\n\nCorrection:\n" + answer(json.dumps([NASA]))

    assert [c.domain for c in extract_citations(text)] == ["nasa.gov"]

"""Tolerant extraction of JSON team lists from free-form model output."""

import json
import logging
import re
import time
from typing import Any, List, Optional

from pydantic import ValidationError

from neurahub.modules.map.schemas import MapTeam

logger = logging.getLogger(__name__)

_LEADING_JSON_FENCE = re.compile(r"^```json\s*", re.IGNORECASE)
_LEADING_FENCE = re.compile(r"^```\s*")
_TRAILING_FENCE = re.compile(r"```$")
_NUMERIC_CITATION = re.compile(r"\[\d+\]")
_BRACKET_CITATION = re.compile(r"【.*?】")
_OBJECT_ARRAY = re.compile(r"\[\s*\{[\s\S]*\}\s*\]")


def clean_model_text(text: str) -> str:
    """Strip code fences and search citations the model adds around JSON."""
    cleaned = text.strip()
    cleaned = _LEADING_JSON_FENCE.sub("", cleaned)
    cleaned = _LEADING_FENCE.sub("", cleaned)
    cleaned = _TRAILING_FENCE.sub("", cleaned).strip()
    cleaned = _NUMERIC_CITATION.sub("", cleaned)
    return _BRACKET_CITATION.sub("", cleaned)


def _load_array(candidate: str) -> Optional[List[Any]]:
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError):
        return None
    return data if isinstance(data, list) else None


def extract_json_array(text: Optional[str]) -> Optional[List[Any]]:
    """
    Find a JSON array in model output.

    Tries, in order: the cleaned text as-is, the widest ``[ { ... } ]`` match,
    and the span from the first ``[`` to the last ``]``. Returns None when
    none of them decodes to a list.
    """
    if not text:
        return None
    cleaned = clean_model_text(text)

    data = _load_array(cleaned)
    if data is not None:
        return data

    match = _OBJECT_ARRAY.search(cleaned)
    if match:
        data = _load_array(match.group(0))
        if data is not None:
            return data
        logger.warning("Object-array match in model output is not valid JSON")

    first_open = cleaned.find("[")
    last_close = cleaned.rfind("]")
    if first_open != -1 and last_close > first_open:
        data = _load_array(cleaned[first_open:last_close + 1])
        if data is not None:
            return data

    logger.warning("No JSON array found in model output")
    return None


def parse_team_array(text: Optional[str], timestamp_ms: Optional[int] = None) -> List[MapTeam]:
    """Parse model output into map teams with generated ids; any failure gives []."""
    items = extract_json_array(text)
    if not items:
        return []

    stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    teams = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            continue
        try:
            teams.append(MapTeam(**{**item, "id": f"gen-{stamp}-{index}"}))
        except ValidationError as e:
            logger.warning(f"Skipping malformed team at index {index}: {e}")
    return teams

# core/normalization.py
"""Tolerant parsing of the model's JSON answers.

The breakdown answer is asked to look like ``{"subtasks": [{"title", "estimatedMinutes"}]}``
but models drift: other wrapper keys, a bare array, snake_case fields. The rules
below are applied in a fixed order and the first one that finds records wins.
The icon answer is decoded strictly.
"""
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.errors import InvalidFormat
from models import DEFAULT_ESTIMATED_MINUTES, IconSuggestion, SubtaskSuggestion

logger = logging.getLogger(__name__)

ARRAY_KEYS = ("subtasks", "tasks", "items")
TITLE_KEYS = ("title", "name", "task", "description")
MINUTES_KEYS = ("estimatedMinutes", "estimated_minutes", "duration", "time")

# Records located in the reply, before coercion to SubtaskSuggestion.
NormalizedReply = List[Dict[str, Any]]


# ----------------------------- typed accessors ----------------------------- #

def as_title(value: Any) -> Optional[str]:
    """Non-blank string, stripped; otherwise None."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def as_minutes(value: Any) -> Optional[int]:
    """Positive whole number of minutes; otherwise None."""
    # bool is an int subclass; JSON true/false is not a duration.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        minutes = value
    elif isinstance(value, float) and value.is_integer():
        minutes = int(value)
    else:
        return None
    return minutes if minutes > 0 else None


def is_record_array(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, dict) for item in value)


def first_present(record: Dict[str, Any], keys: Tuple[str, ...],
                  accessor: Callable[[Any], Any]) -> Any:
    for key in keys:
        if key in record:
            resolved = accessor(record[key])
            if resolved is not None:
                return resolved
    return None


# ----------------------------- locating rules ----------------------------- #

def _by_known_key(obj: Dict[str, Any]) -> Optional[NormalizedReply]:
    for key in ARRAY_KEYS:
        if is_record_array(obj.get(key)):
            logger.debug("subtasks found under %r", key)
            return obj[key]
    return None


def _by_first_record_array(obj: Dict[str, Any]) -> Optional[NormalizedReply]:
    for key, value in obj.items():
        if is_record_array(value):
            logger.debug("subtasks found under unexpected key %r", key)
            return value
    return None


LOCATORS: Tuple[Callable[[Dict[str, Any]], Optional[NormalizedReply]], ...] = (
    _by_known_key,
    _by_first_record_array,
)


def locate_records(obj: Dict[str, Any]) -> Optional[NormalizedReply]:
    """Apply LOCATORS in order and return the first array of records found."""
    for rule in LOCATORS:
        records = rule(obj)
        if records is not None:
            return records
    return None


# ----------------------------- coercion ----------------------------- #

def coerce_records(records: NormalizedReply) -> List[SubtaskSuggestion]:
    """Resolve title and minutes per record, dropping records without a title."""
    suggestions = []
    for record in records:
        title = first_present(record, TITLE_KEYS, as_title)
        if title is None:
            logger.warning("dropping subtask record without a usable title: %s", record)
            continue
        minutes = first_present(record, MINUTES_KEYS, as_minutes)
        suggestions.append(SubtaskSuggestion(
            title=title,
            estimated_minutes=minutes if minutes is not None else DEFAULT_ESTIMATED_MINUTES,
        ))
    return suggestions


def _decode_bare_array(items: list, content: str) -> List[SubtaskSuggestion]:
    """A bare array must already match the requested record shape exactly."""
    suggestions = []
    for item in items:
        if not isinstance(item, dict):
            raise InvalidFormat(content, "Array entries must be objects.")
        title = item.get("title")
        # No defaulting here: a whole positive number of minutes is required.
        minutes = as_minutes(item.get("estimatedMinutes"))
        if as_title(title) is None or minutes is None:
            raise InvalidFormat(content, "Array entries need 'title' and a positive integer 'estimatedMinutes'.")
        suggestions.append(SubtaskSuggestion(title=title, estimated_minutes=minutes))
    return suggestions


def _load(content: str) -> Any:
    try:
        return json.loads(content)
    except (json.JSONDecodeError, TypeError):
        raise InvalidFormat(content, "Reply is not valid JSON.") from None


def normalize_breakdown(content: str) -> List[SubtaskSuggestion]:
    """Turn the breakdown answer into an ordered, non-empty list of suggestions."""
    data = _load(content)

    if isinstance(data, list):
        suggestions = _decode_bare_array(data, content)
    elif isinstance(data, dict):
        records = locate_records(data)
        if records is None:
            raise InvalidFormat(content, "Could not find subtasks array in JSON.")
        suggestions = coerce_records(records)
    else:
        raise InvalidFormat(content, "Reply is neither a JSON object nor an array.")

    if not suggestions:
        raise InvalidFormat(content, "No valid subtasks found in JSON.")
    return suggestions


def decode_icon(content: str) -> IconSuggestion:
    data = _load(content)
    if not isinstance(data, dict):
        raise InvalidFormat(content, "Icon reply must be a JSON object.")
    symbol = data.get("symbol")
    color = data.get("color")
    if not isinstance(symbol, str) or not isinstance(color, str):
        raise InvalidFormat(content, "Icon reply needs string 'symbol' and 'color'.")
    return IconSuggestion(symbol=symbol, color=color)

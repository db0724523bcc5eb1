"""
Conversions between wire values and stored column values.
"""
import json
import logging
import re
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def encode_tags(tags: Optional[List[str]]) -> str:
    """Serialize a tag list to the JSON text stored in photos.tags."""
    return json.dumps(list(tags or []))


def decode_tags(raw: Any) -> List[str]:
    """
    Parse the stored tags column back into a list.

    Rows written by the bulk import script hold comma separated text instead
    of JSON, so anything that is not a JSON list is split on commas.

    Args:
        raw: Column value (JSON text, legacy comma separated text, list or None)

    Returns:
        List[str]: Tags in stored order
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return [str(tag) for tag in raw]

    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.debug(f"Tags column is not JSON, splitting as text: {raw!r}")
        return [tag.strip() for tag in str(raw).split(",") if tag.strip()]

    if isinstance(value, list):
        return [str(tag) for tag in value]
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return []


def parse_limit(raw: Optional[str], default: int = 100) -> int:
    """
    Parse the limit query parameter like JavaScript parseInt.

    The leading integer prefix is used ("25abc" -> 25). Missing, non-numeric,
    zero or negative values fall back to the default.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if value > 0 else default


def decode_content(raw: Optional[str]) -> Any:
    """Parse a stored site_content blob; empty columns read as an empty object."""
    return json.loads(raw or "{}")


def encode_content(content: Any) -> str:
    return json.dumps(content)

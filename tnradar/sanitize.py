# ABOUTME: Validation and cleanup of free-text location queries.
# ABOUTME: The only gate between user input and the geocoding provider.

import re
from typing import NamedTuple

MIN_QUERY_LENGTH = 2
MAX_QUERY_LENGTH = 100

# ASCII letters, digits, underscore, any Unicode whitespace, comma, hyphen, apostrophe, period, and accented Latin
# (Latin-1 Supplement letters through Latin Extended-B, plus Latin Extended Additional).
_DISALLOWED = re.compile(r"[^A-Za-z0-9_\s,\-'.\u00C0-\u024F\u1E00-\u1EFF]")


class QueryCheck(NamedTuple):
    valid: bool
    sanitized: str


def validate_search_query(raw: str) -> QueryCheck:
    """Trim, length-check, and strip disallowed characters from a search query."""
    trimmed = raw.strip()
    if len(trimmed) < MIN_QUERY_LENGTH or len(trimmed) > MAX_QUERY_LENGTH:
        return QueryCheck(False, "")

    sanitized = _DISALLOWED.sub("", trimmed)
    if len(sanitized) < MIN_QUERY_LENGTH:
        return QueryCheck(False, "")
    return QueryCheck(True, sanitized)

"""Percent-encoding and HTTP-date helpers.

Cookie values travel URL-encoded with the ``encodeURIComponent`` character
set, and decoding is strict: a malformed escape or an invalid UTF-8
sequence is an error the caller decides how to handle.

Dates use stdlib ``email.utils``, which already understands the RFC 1123,
RFC 850 and asctime forms browsers send in ``Expires``.
"""

import re
from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime
from urllib.parse import quote, unquote

# Unreserved in encodeURIComponent besides alphanumerics and "-_.~"
_SAFE = "!*'()"

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Last millisecond datetime can represent (9999-12-31T23:59:59.999Z)
MAX_EXPIRES = 253_402_300_799_999


def encode_component(value: str) -> str:
    """Percent-encode *value* the way ``encodeURIComponent`` does."""
    return quote(value, safe=_SAFE)


def decode_component(value: str) -> str:
    """Strictly percent-decode *value*.

    Raises:
        ValueError: On a ``%`` not followed by two hex digits, or when the
            decoded bytes are not valid UTF-8.
    """
    if _MALFORMED_ESCAPE.search(value):
        msg = f"Malformed percent-escape in {value!r}"
        raise ValueError(msg)
    return unquote(value, encoding="utf-8", errors="strict")


def parse_http_date(value: str) -> int | None:
    """Parse an HTTP date into epoch milliseconds, or ``None`` if unparsable.

    Dates without a zone are taken as UTC. ISO 8601 is accepted as a
    fallback for non-browser producers.
    """
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    try:
        millis = int(parsed.timestamp() * 1000)
    except (OverflowError, ValueError):
        return None
    return millis if millis <= MAX_EXPIRES else None


def to_datetime(millis: int) -> datetime:
    """Epoch milliseconds as an aware UTC datetime."""
    return datetime.fromtimestamp(millis / 1000, tz=UTC)


def format_http_date(millis: int) -> str:
    """Format epoch milliseconds as an IMF-fixdate (``Wed, 09 Jun 2021 10:18:14 GMT``)."""
    return format_datetime(to_datetime(millis), usegmt=True)

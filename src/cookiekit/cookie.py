"""Single-cookie model: ``Set-Cookie`` parsing, serialization, validation.

``Cookie`` is the immutable record both sides share. ``Cookie.parse``
reads one ``Set-Cookie`` value, ``to_header_value`` writes one back, and
``Cookie.serialize`` writes the ``Cookie`` request-header form (pairs only).
"""

from __future__ import annotations

import re
import time
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from cookiekit._internal.encoding import (
    MAX_EXPIRES,
    encode_component,
    format_http_date,
    parse_http_date,
    to_datetime,
)
from cookiekit.errors import CookieParseError, InvalidCookieError

# Unset sentinel for ``expires``; ``1`` marks a deletion
EMPTY_EXPIRES = -1
DELETE_EXPIRES = 1

# parseInt-style: optional sign, digits, trailing junk ignored
_LEADING_INT = re.compile(r"[+-]?\d+")


def _parse_max_age(value: str) -> int | None:
    digits = _LEADING_INT.match(value)
    if digits is None:
        return None
    try:
        return int(digits.group())
    except ValueError:
        # past the interpreter's int-string digit limit
        return None


class SameSite(Enum):
    """``SameSite`` attribute values, spelled as they are serialized."""

    STRICT = "Strict"
    LAX = "Lax"
    NONE = "None"

    @classmethod
    def from_attribute(cls, value: str) -> SameSite | None:
        """Map an attribute value case-insensitively, ``None`` if unrecognized."""
        return _SAME_SITE_BY_LOWER.get(value.lower())


_SAME_SITE_BY_LOWER = {member.value.lower(): member for member in SameSite}


# -- Validation --


def _is_name_char(code: int) -> bool:
    return 0x21 <= code <= 0x3A or code == 0x3C or 0x3E <= code <= 0x7E


def _is_path_char(code: int) -> bool:
    return 0x20 <= code <= 0x3A or 0x3D <= code <= 0x7E


def _is_domain_char(char: str) -> bool:
    return "a" <= char <= "z" or "0" <= char <= "9" or char in ".-"


def is_valid_cookie_name(name: str) -> bool:
    """True if *name* is non-empty and every character is a cookie-name character.

    Excludes controls, space, ``=`` and DEL.
    """
    if not name:
        return False
    return all(_is_name_char(ord(c)) for c in name)


def is_valid_cookie_path(path: str) -> bool:
    """True if every character of *path* is allowed. Empty is valid."""
    return all(_is_path_char(ord(c)) for c in path)


def is_valid_cookie_domain(domain: str) -> bool:
    """True if *domain* is only ``a-z``, ``0-9``, ``.`` and ``-``. Empty is valid.

    Uppercase is rejected; ``Cookie.parse`` lower-cases before this runs,
    programmatic construction does not.
    """
    return all(_is_domain_char(c) for c in domain)


# -- Cookie --


@dataclass(frozen=True, slots=True)
class Cookie:
    """One cookie and its attributes.

    Construction validates: an invalid name, or a non-empty path or domain
    with characters outside its class, raises ``InvalidCookieError``, as does
    an ``expires`` past the end of year 9999.

    ``expires`` is epoch milliseconds; ``-1`` means unset and values below
    ``1`` are never shown as an expiry. ``max_age`` is ``None`` when unset.
    """

    name: str
    value: str
    domain: str = ""
    path: str = "/"
    expires: int = EMPTY_EXPIRES
    secure: bool = False
    same_site: SameSite = SameSite.LAX
    http_only: bool = False
    max_age: int | None = None
    partitioned: bool = False

    def __post_init__(self) -> None:
        if not is_valid_cookie_name(self.name):
            msg = f"Invalid cookie name {self.name!r}: contains invalid characters"
            raise InvalidCookieError(msg)
        if self.path and not is_valid_cookie_path(self.path):
            msg = f"Invalid cookie path {self.path!r}: contains invalid characters"
            raise InvalidCookieError(msg)
        if self.domain and not is_valid_cookie_domain(self.domain):
            msg = f"Invalid cookie domain {self.domain!r}: contains invalid characters"
            raise InvalidCookieError(msg)
        if self.expires > MAX_EXPIRES:
            msg = f"Invalid cookie expires {self.expires!r}: past year 9999"
            raise InvalidCookieError(msg)
        if not self.path:
            object.__setattr__(self, "path", "/")

    # -- Parsing --

    @classmethod
    def parse(cls, text: str) -> Cookie:
        """Parse one ``Set-Cookie`` header value.

        Attribute names match case-insensitively and unknown ones are
        ignored. ``Max-Age`` wins over ``Expires`` whichever comes first.

        Raises:
            CookieParseError: If *text* is shorter than two characters, has
                no ``=`` before the first ``;``, or has an empty name.
            InvalidCookieError: If the parsed name, path, or domain fails
                validation.
        """
        if len(text) < 2:
            msg = "Invalid cookie string: empty"
            raise CookieParseError(msg)

        pair, sep, attributes = text.partition(";")
        if "=" not in pair:
            msg = "Invalid cookie string: no '=' found"
            raise CookieParseError(msg)

        name, _, value = pair.partition("=")
        name = name.strip()
        if not name:
            msg = "Invalid cookie string: name cannot be empty"
            raise CookieParseError(msg)

        attrs: dict[str, Any] = {}
        has_max_age = False

        for token in attributes.split(";") if sep else ():
            attr_name, _, attr_value = token.strip().partition("=")
            attr_name = attr_name.strip().lower()
            attr_value = attr_value.strip()

            match attr_name:
                case "domain":
                    if attr_value:
                        attrs["domain"] = attr_value.lower()
                case "path":
                    if attr_value.startswith("/"):
                        attrs["path"] = attr_value
                case "expires":
                    if not has_max_age and attr_value:
                        expires = parse_http_date(attr_value)
                        if expires is not None:
                            attrs["expires"] = expires
                case "max-age":
                    max_age = _parse_max_age(attr_value)
                    if max_age is not None:
                        attrs["max_age"] = max_age
                        attrs.pop("expires", None)
                        has_max_age = True
                case "secure":
                    attrs["secure"] = True
                case "httponly":
                    attrs["http_only"] = True
                case "partitioned":
                    attrs["partitioned"] = True
                case "samesite":
                    same_site = SameSite.from_attribute(attr_value)
                    if same_site is not None:
                        attrs["same_site"] = same_site

        return cls(name=name, value=value.strip(), **attrs)

    # -- Serialization --

    @staticmethod
    def serialize(cookies: Iterable[Cookie]) -> str:
        """Join ``name=value`` pairs for a ``Cookie`` request header.

        Values are URL-encoded; attributes are not emitted.
        """
        return "; ".join(f"{c.name}={encode_component(c.value)}" for c in cookies)

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={encode_component(self.value)}"]
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.has_expiry():
            parts.append(f"Expires={format_http_date(self.expires)}")
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.secure:
            parts.append("Secure")
        if self.http_only:
            parts.append("HttpOnly")
        if self.partitioned:
            parts.append("Partitioned")
        parts.append(f"SameSite={self.same_site.value}")
        return "; ".join(parts)

    def __str__(self) -> str:
        return self.to_header_value()

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view; optional attributes appear only when set."""
        result: dict[str, Any] = {
            "name": self.name,
            "value": self.value,
            "path": self.path,
            "secure": self.secure,
            "same_site": self.same_site.value,
            "http_only": self.http_only,
            "partitioned": self.partitioned,
        }
        if self.domain:
            result["domain"] = self.domain
        if self.has_expiry():
            result["expires"] = to_datetime(self.expires)
        if self.max_age is not None:
            result["max_age"] = self.max_age
        return result

    # -- Expiry --

    def has_expiry(self) -> bool:
        """True if ``expires`` holds a real timestamp (the delete marker counts)."""
        return self.expires != EMPTY_EXPIRES and self.expires >= 1

    @property
    def expires_at(self) -> datetime | None:
        """``expires`` as an aware UTC datetime, or ``None`` when unset."""
        if not self.has_expiry():
            return None
        return to_datetime(self.expires)

    def is_expired(self) -> bool:
        """True if the cookie has an expiry and it is in the past.

        Session cookies (no expiry) never expire.
        """
        if self.expires == EMPTY_EXPIRES or self.expires < 1:
            return False
        return time.time() * 1000 > self.expires

    @property
    def is_delete_marker(self) -> bool:
        """True for the empty-valued ``expires == 1`` record a deletion leaves."""
        return not self.value and self.expires == DELETE_EXPIRES

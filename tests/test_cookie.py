"""Tests for cookiekit.cookie — Cookie parsing, serialization, validation."""

import time
from datetime import UTC, datetime

import pytest

from cookiekit._internal.encoding import MAX_EXPIRES
from cookiekit.cookie import (
    Cookie,
    SameSite,
    is_valid_cookie_domain,
    is_valid_cookie_name,
    is_valid_cookie_path,
)
from cookiekit.errors import CookieParseError, InvalidCookieError

JUNE_9_2021 = datetime(2021, 6, 9, 10, 18, 14, tzinfo=UTC)
JUNE_9_2021_MS = int(JUNE_9_2021.timestamp() * 1000)


class TestParse:
    def test_simple(self) -> None:
        cookie = Cookie.parse("name=value")

        assert cookie.name == "name"
        assert cookie.value == "value"
        assert cookie.domain == ""
        assert cookie.path == "/"
        assert cookie.expires == -1
        assert cookie.max_age is None
        assert cookie.secure is False
        assert cookie.http_only is False
        assert cookie.partitioned is False
        assert cookie.same_site is SameSite.LAX

    def test_all_attributes(self) -> None:
        cookie = Cookie.parse(
            "name=value; Domain=example.com; Path=/path; "
            "Expires=Wed, 09 Jun 2021 10:18:14 GMT; Max-Age=3600; "
            "Secure; HttpOnly; SameSite=Strict; Partitioned"
        )

        assert cookie.name == "name"
        assert cookie.value == "value"
        assert cookie.domain == "example.com"
        assert cookie.path == "/path"
        assert cookie.max_age == 3600
        assert cookie.secure is True
        assert cookie.http_only is True
        assert cookie.partitioned is True
        assert cookie.same_site is SameSite.STRICT

    def test_session_cookie_scenario(self) -> None:
        cookie = Cookie.parse("sessionId=abc123; Domain=example.com; Secure; HttpOnly")

        assert cookie.name == "sessionId"
        assert cookie.value == "abc123"
        assert cookie.domain == "example.com"
        assert cookie.secure is True
        assert cookie.http_only is True
        assert cookie.path == "/"
        assert cookie.same_site is SameSite.LAX

    def test_case_insensitive_attributes(self) -> None:
        cookie = Cookie.parse("name=value; SECURE; HTTPONLY; SAMESITE=none")

        assert cookie.secure is True
        assert cookie.http_only is True
        assert cookie.same_site is SameSite.NONE

    def test_whitespace_trimmed(self) -> None:
        cookie = Cookie.parse("  name = value ;  Path = /app  ")
        assert cookie.name == "name"
        assert cookie.value == "value"
        assert cookie.path == "/app"

    def test_value_with_equals(self) -> None:
        """Only the first '=' splits name from value (e.g. base64)."""
        cookie = Cookie.parse("token=abc=def=; Path=/")
        assert cookie.value == "abc=def="

    def test_empty_value(self) -> None:
        cookie = Cookie.parse("flag=")
        assert cookie.value == ""

    def test_value_not_decoded(self) -> None:
        cookie = Cookie.parse("greeting=hello%20world")
        assert cookie.value == "hello%20world"

    def test_domain_lowercased(self) -> None:
        cookie = Cookie.parse("a=b; Domain=EXAMPLE.Com")
        assert cookie.domain == "example.com"

    def test_empty_domain_ignored(self) -> None:
        cookie = Cookie.parse("a=b; Domain=")
        assert cookie.domain == ""

    def test_relative_path_ignored(self) -> None:
        cookie = Cookie.parse("a=b; Path=relative")
        assert cookie.path == "/"

    def test_unknown_same_site_keeps_lax(self) -> None:
        cookie = Cookie.parse("a=b; SameSite=sideways")
        assert cookie.same_site is SameSite.LAX

    def test_unknown_attributes_ignored(self) -> None:
        cookie = Cookie.parse("a=b; Priority=High; Foo; ; Secure")
        assert cookie.secure is True
        assert cookie.name == "a"

    def test_partitioned_flag(self) -> None:
        assert Cookie.parse("a=b; Partitioned").partitioned is True


class TestParseExpiry:
    def test_expires_rfc1123(self) -> None:
        cookie = Cookie.parse("a=b; Expires=Wed, 09 Jun 2021 10:18:14 GMT")

        assert cookie.expires == JUNE_9_2021_MS
        assert cookie.expires_at == JUNE_9_2021

    def test_expires_rfc850(self) -> None:
        cookie = Cookie.parse("a=b; Expires=Wednesday, 09-Jun-21 10:18:14 GMT")
        assert cookie.expires == JUNE_9_2021_MS

    def test_expires_iso8601_fallback(self) -> None:
        cookie = Cookie.parse("a=b; Expires=2021-06-09T10:18:14+00:00")
        assert cookie.expires == JUNE_9_2021_MS

    def test_unparsable_expires_ignored(self) -> None:
        cookie = Cookie.parse("a=b; Expires=not a date")
        assert cookie.expires == -1

    def test_max_age(self) -> None:
        assert Cookie.parse("a=b; Max-Age=60").max_age == 60

    def test_max_age_zero(self) -> None:
        assert Cookie.parse("a=b; Max-Age=0").max_age == 0

    def test_max_age_negative(self) -> None:
        assert Cookie.parse("a=b; Max-Age=-1").max_age == -1

    def test_max_age_leading_integer(self) -> None:
        assert Cookie.parse("a=b; Max-Age=60s").max_age == 60

    def test_unparsable_max_age_ignored(self) -> None:
        cookie = Cookie.parse("a=b; Max-Age=soon; Expires=Wed, 09 Jun 2021 10:18:14 GMT")

        assert cookie.max_age is None
        assert cookie.expires == JUNE_9_2021_MS

    def test_oversized_max_age_ignored(self) -> None:
        huge = "9" * 5000
        cookie = Cookie.parse(f"a=b; Max-Age={huge}; Expires=Wed, 09 Jun 2021 10:18:14 GMT")

        assert cookie.max_age is None
        assert cookie.expires == JUNE_9_2021_MS

    @pytest.mark.parametrize(
        "expires",
        [
            "Wed, 09 Jun 2021 10:18:14 +99999999999999999999",
            "Fri, 31 Dec 9999 23:59:59 -0500",
        ],
    )
    def test_out_of_range_expires_ignored(self, expires: str) -> None:
        cookie = Cookie.parse(f"a=b; Expires={expires}")

        assert cookie.expires == -1
        assert cookie.to_header_value() == "a=b; Path=/; SameSite=Lax"

    @pytest.mark.parametrize(
        "header",
        [
            "a=b; Max-Age=60; Expires=Wed, 09 Jun 2021 10:18:14 GMT",
            "a=b; Expires=Wed, 09 Jun 2021 10:18:14 GMT; Max-Age=60",
        ],
    )
    def test_max_age_wins_over_expires_in_any_order(self, header: str) -> None:
        cookie = Cookie.parse(header)

        assert cookie.max_age == 60
        assert cookie.expires == -1


class TestParseErrors:
    @pytest.mark.parametrize("header", ["", "a", "invalid", "=value", "  =value; Path=/"])
    def test_malformed(self, header: str) -> None:
        with pytest.raises(CookieParseError):
            Cookie.parse(header)

    def test_equals_only_in_attributes(self) -> None:
        """The '=' must be in the cookie-pair, not just in an attribute."""
        with pytest.raises(CookieParseError, match="no '='"):
            Cookie.parse("name; Path=/")

    def test_invalid_name_fails_validation(self) -> None:
        with pytest.raises(InvalidCookieError):
            Cookie.parse("bad name=value")

    def test_invalid_domain_fails_validation(self) -> None:
        with pytest.raises(InvalidCookieError):
            Cookie.parse("a=b; Domain=exa_mple.com")

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Cookie.parse("x")


class TestSerialize:
    def test_minimal(self) -> None:
        cookie = Cookie(name="test", value="value")
        assert cookie.to_header_value() == "test=value; Path=/; SameSite=Lax"

    def test_all_attributes_in_order(self) -> None:
        cookie = Cookie(
            name="test",
            value="value",
            domain="example.com",
            path="/test",
            expires=JUNE_9_2021_MS,
            secure=True,
            http_only=True,
            same_site=SameSite.STRICT,
            partitioned=True,
            max_age=3600,
        )

        assert cookie.to_header_value() == (
            "test=value; Domain=example.com; Path=/test; "
            "Expires=Wed, 09 Jun 2021 10:18:14 GMT; Max-Age=3600; "
            "Secure; HttpOnly; Partitioned; SameSite=Strict"
        )

    def test_str_is_header_value(self) -> None:
        cookie = Cookie(name="a", value="b", secure=True)
        assert str(cookie) == cookie.to_header_value()

    def test_url_encodes_value(self) -> None:
        cookie = Cookie(name="test", value="hello world")
        assert cookie.to_header_value().startswith("test=hello%20world;")

    def test_encodes_separators(self) -> None:
        cookie = Cookie(name="test", value="a;b,c")
        assert cookie.to_header_value().startswith("test=a%3Bb%2Cc;")

    def test_unreserved_marks_kept(self) -> None:
        cookie = Cookie(name="test", value="a-b_c.d!e~f*g'h(i)")
        assert cookie.to_header_value().startswith("test=a-b_c.d!e~f*g'h(i);")

    def test_delete_marker(self) -> None:
        cookie = Cookie(name="a", value="", expires=1)
        assert cookie.to_header_value() == (
            "a=; Path=/; Expires=Thu, 01 Jan 1970 00:00:00 GMT; SameSite=Lax"
        )

    def test_max_age_zero_emitted(self) -> None:
        assert "Max-Age=0" in Cookie(name="a", value="b", max_age=0).to_header_value()

    def test_non_positive_expires_omitted(self) -> None:
        assert "Expires" not in Cookie(name="a", value="b", expires=0).to_header_value()

    def test_serialize_pairs(self) -> None:
        cookies = [Cookie(name="a", value="1"), Cookie(name="b", value="x y", secure=True)]
        assert Cookie.serialize(cookies) == "a=1; b=x%20y"

    def test_serialize_empty(self) -> None:
        assert Cookie.serialize([]) == ""

    def test_to_dict_minimal(self) -> None:
        assert Cookie(name="a", value="b").to_dict() == {
            "name": "a",
            "value": "b",
            "path": "/",
            "secure": False,
            "same_site": "Lax",
            "http_only": False,
            "partitioned": False,
        }

    def test_to_dict_optional_fields(self) -> None:
        data = Cookie(
            name="a", value="b", domain="example.com", expires=JUNE_9_2021_MS, max_age=10
        ).to_dict()

        assert data["domain"] == "example.com"
        assert data["expires"] == JUNE_9_2021
        assert data["max_age"] == 10


class TestExpiry:
    def test_session_cookie_never_expires(self) -> None:
        cookie = Cookie(name="a", value="b")

        assert cookie.has_expiry() is False
        assert cookie.is_expired() is False
        assert cookie.expires_at is None

    def test_zero_expires_is_no_expiry(self) -> None:
        cookie = Cookie(name="a", value="b", expires=0)

        assert cookie.has_expiry() is False
        assert cookie.is_expired() is False

    def test_past(self) -> None:
        cookie = Cookie(name="a", value="b", expires=JUNE_9_2021_MS)

        assert cookie.has_expiry() is True
        assert cookie.is_expired() is True

    def test_future(self) -> None:
        future = int((time.time() + 3600) * 1000)
        assert Cookie(name="a", value="b", expires=future).is_expired() is False

    def test_delete_marker(self) -> None:
        assert Cookie(name="a", value="", expires=1).is_delete_marker is True
        assert Cookie(name="a", value="x", expires=1).is_delete_marker is False
        assert Cookie(name="a", value="").is_delete_marker is False


class TestConstruction:
    def test_frozen(self) -> None:
        cookie = Cookie(name="a", value="b")

        with pytest.raises(AttributeError):
            cookie.name = "c"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert Cookie(name="a", value="b") == Cookie(name="a", value="b")
        assert Cookie(name="a", value="b") != Cookie(name="a", value="b", secure=True)

    def test_empty_path_defaults_to_root(self) -> None:
        assert Cookie(name="a", value="b", path="").path == "/"

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(InvalidCookieError, match="name"):
            Cookie(name="", value="b")

    def test_invalid_path_rejected(self) -> None:
        with pytest.raises(InvalidCookieError, match="path"):
            Cookie(name="a", value="b", path="/a;b")

    def test_uppercase_domain_rejected(self) -> None:
        with pytest.raises(InvalidCookieError, match="domain"):
            Cookie(name="a", value="b", domain="EXAMPLE.com")

    def test_expires_past_year_9999_rejected(self) -> None:
        with pytest.raises(InvalidCookieError, match="expires"):
            Cookie(name="a", value="b", expires=MAX_EXPIRES + 1)

    def test_latest_expires_serializes(self) -> None:
        cookie = Cookie(name="a", value="b", expires=MAX_EXPIRES)

        assert "Expires=Fri, 31 Dec 9999 23:59:59 GMT" in cookie.to_header_value()


class TestValidation:
    @pytest.mark.parametrize("name", ["valid_name", "valid-name", "a:b", "a<b", "A1~"])
    def test_valid_names(self, name: str) -> None:
        assert is_valid_cookie_name(name) is True

    @pytest.mark.parametrize("name", ["", "a b", "a=b", "a;b", "a\tb", "a\x7fb", "café"])
    def test_invalid_names(self, name: str) -> None:
        assert is_valid_cookie_name(name) is False

    @pytest.mark.parametrize("path", ["/valid/path", "/path-with-dashes", "/with space", ""])
    def test_valid_paths(self, path: str) -> None:
        assert is_valid_cookie_path(path) is True

    @pytest.mark.parametrize("path", ["/a;b", "/a\nb", "/\x7f"])
    def test_invalid_paths(self, path: str) -> None:
        assert is_valid_cookie_path(path) is False

    @pytest.mark.parametrize("domain", ["example.com", "sub.example.com", "localhost", "a-1.io", ""])
    def test_valid_domains(self, domain: str) -> None:
        assert is_valid_cookie_domain(domain) is True

    @pytest.mark.parametrize("domain", ["EXAMPLE.com", "exa_mple.com", "ex ample.com", "bücher.de"])
    def test_invalid_domains(self, domain: str) -> None:
        assert is_valid_cookie_domain(domain) is False


class TestSameSite:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("strict", SameSite.STRICT), ("LAX", SameSite.LAX), ("None", SameSite.NONE)],
    )
    def test_from_attribute(self, raw: str, expected: SameSite) -> None:
        assert SameSite.from_attribute(raw) is expected

    def test_unknown(self) -> None:
        assert SameSite.from_attribute("") is None
        assert SameSite.from_attribute("maybe") is None

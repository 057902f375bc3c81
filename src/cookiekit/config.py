"""Header-adapter configuration.

Header names and bulk-parse strictness live in one frozen dataclass
that the parser functions take as a keyword argument.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CookieConfig:
    """Configuration for the header-level parsers. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = CookieConfig(strict=True)
    """

    # Header names (looked up case-insensitively by Headers)
    cookie_header: str = "cookie"
    set_cookie_header: str = "set-cookie"

    # Bulk Set-Cookie parsing: raise on the first bad header instead of
    # logging a warning and skipping it
    strict: bool = False


DEFAULT_CONFIG = CookieConfig()

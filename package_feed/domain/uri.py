"""Absolute URIs for package metadata links (icon, license, project, abuse report)."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit

from pydantic_core import core_schema


_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

# RFC 8089 (Appendix E.3.2) spelling of a UNC path as a file URI.
UNC_FILE_PREFIX = "file:////"
_FILE_AUTHORITY = "file://"


def is_unc(value: str) -> bool:
    """True for the scheme-less network share form ``//host/path``."""
    return value.startswith("//") and len(value) > 2 and value[2] != "/"


def escape_unc(value: str) -> str:
    """
    Spell a UNC URI so it reads as absolute without knowing the UNC rule.

    ``//host/share`` becomes ``file:////host/share``. Anything else is
    returned unchanged.
    """
    if is_unc(value):
        return _FILE_AUTHORITY + value
    return value


def unescape_unc(value: str) -> str:
    """Inverse of :func:`escape_unc`."""
    if value[: len(UNC_FILE_PREFIX)].lower() == UNC_FILE_PREFIX and is_unc(value[len(_FILE_AUTHORITY):]):
        return value[len(_FILE_AUTHORITY):]
    return value


class AbsoluteUri(str):
    """
    An absolute URI, kept as the exact string it was written as.

    Either carries a scheme (``https://...``, ``urn:icon``) or is a UNC
    network path (``//server/share/file``), which counts as an absolute
    ``file`` URI. Relative references are rejected.
    """

    def __new__(cls, value: str) -> "AbsoluteUri":
        """Make a new URI."""
        value = unescape_unc(value)
        if not (is_unc(value) or _SCHEME_RE.match(value)):
            raise ValueError(f"Not an absolute URI: {value!r}")
        uri: AbsoluteUri = super(AbsoluteUri, cls).__new__(cls, value)  # type: ignore
        return uri

    def __init__(self, value: str) -> None:
        """Split the URI into its components."""
        text = str(self)
        if is_unc(text):
            o = urlsplit("file:" + text)
        else:
            o = urlsplit(text)
        self.scheme = o.scheme.lower()
        self.host = o.netloc
        self.path = o.path
        self.query = o.query
        self.fragment = o.fragment

    @property
    def is_absolute(self) -> bool:
        return True

    @property
    def is_unc(self) -> bool:
        return is_unc(self)

    @property
    def is_file(self) -> bool:
        return self.scheme == "file"

    def __repr__(self) -> str:
        return f"AbsoluteUri({str(self)!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.to_string_ser_schema(when_used="json"),
        )

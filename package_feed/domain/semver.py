"""
Semantic versions for package metadata.

Accepts the legacy four-part form (``1.0.3.0``) as well as SemVer 2.0.0
strings (``2.0.0-beta.1+build.5``). The text a version was parsed from is
kept, so a version written to disk reads back with the same spelling.
"""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Any, Optional, Tuple

from pydantic_core import core_schema


_VERSION_RE = re.compile(
    r"^(?P<numbers>\d+(?:\.\d+){0,3})"
    r"(?:-(?P<release>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<metadata>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)
_LABELS_RE = re.compile(r"^[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*$")


def _release_key(release: str) -> tuple:
    # A stable release sorts after every prerelease of the same numbers.
    if not release:
        return (1,)
    labels = []
    for label in release.split("."):
        if label.isdigit():
            labels.append((0, int(label), ""))
        else:
            labels.append((1, 0, label.lower()))
    return (0, tuple(labels))


@total_ordering
class SemanticVersion:
    """
    An ordered, comparable package version.

    Ordering follows the numeric parts (missing parts count as zero), then
    the release label. Build metadata never takes part in comparisons.
    """

    __slots__ = ("major", "minor", "patch", "revision", "release", "metadata", "_original")

    def __init__(
        self,
        major: int,
        minor: int = 0,
        patch: int = 0,
        revision: int = 0,
        release: str = "",
        metadata: str = "",
        original: Optional[str] = None,
    ) -> None:
        for part in (major, minor, patch, revision):
            if part < 0:
                raise ValueError("Version numbers must be non-negative")
        for name, label in (("release", release), ("metadata", metadata)):
            if label and not _LABELS_RE.fullmatch(label):
                raise ValueError(f"'{label}' is not a valid {name} label")
        if original is not None and not _VERSION_RE.fullmatch(original):
            raise ValueError(f"'{original}' is not a valid version string")
        self.major = major
        self.minor = minor
        self.patch = patch
        self.revision = revision
        self.release = release or ""
        self.metadata = metadata or ""
        self._original = original if original is not None else self.normalized

    @classmethod
    def parse(cls, value: str) -> "SemanticVersion":
        """Parse a version string, raising ``ValueError`` when it is not one."""
        text = value.strip()
        match = _VERSION_RE.match(text)
        if match is None:
            raise ValueError(f"'{value}' is not a valid version string")

        numbers = [int(part) for part in match.group("numbers").split(".")]
        numbers += [0] * (4 - len(numbers))
        return cls(
            *numbers,
            release=match.group("release") or "",
            metadata=match.group("metadata") or "",
            original=text,
        )

    @property
    def normalized(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision:
            text += f".{self.revision}"
        if self.release:
            text += f"-{self.release}"
        if self.metadata:
            text += f"+{self.metadata}"
        return text

    @property
    def is_prerelease(self) -> bool:
        return bool(self.release)

    @property
    def is_semver2(self) -> bool:
        """True when the version needs SemVer 2.0.0 to be expressed."""
        return "." in self.release or bool(self.metadata)

    def _key(self) -> Tuple[int, int, int, int, tuple]:
        return (self.major, self.minor, self.patch, self.revision, _release_key(self.release))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self._original

    def __repr__(self) -> str:
        return f"SemanticVersion('{self._original}')"

    @classmethod
    def _validate(cls, value: Any) -> "SemanticVersion":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"Expected a version string, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                _version_to_str, when_used="json"
            ),
        )


def _version_to_str(version: SemanticVersion) -> str:
    return str(version)

"""
Derived collections computed from the raw ``Dependencies`` and
``SupportedFrameworks`` strings of a package.

The raw strings are what gets stored; everything here is recomputed from
them on demand and never written back.

Dependencies format::

    <id>:<version range>:<target framework>|<id>:<version range>:<target framework>|...

An entry with an empty id (``::net40``) declares a framework group that has
no dependencies. A blank target framework means "any framework".
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from package_feed.domain.semver import SemanticVersion


DEPENDENCY_SEPARATOR = "|"
FRAMEWORK_SEPARATOR = "|"


class VersionRange(BaseModel):
    """
    A range of acceptable dependency versions in interval notation.

    ``1.0`` means ``>= 1.0``; ``[1.0,2.0)`` means ``>= 1.0 and < 2.0``;
    ``[1.0]`` is exactly 1.0.
    """

    min_version: Optional[SemanticVersion] = Field(
        default=None,
        description="Lower bound, or None when unbounded.",
    )
    is_min_inclusive: bool = Field(
        default=False,
        description="True if min_version itself satisfies the range.",
    )
    max_version: Optional[SemanticVersion] = Field(
        default=None,
        description="Upper bound, or None when unbounded.",
    )
    is_max_inclusive: bool = Field(
        default=False,
        description="True if max_version itself satisfies the range.",
    )

    def satisfies(self, version: SemanticVersion) -> bool:
        if self.min_version is not None:
            if self.is_min_inclusive:
                if version < self.min_version:
                    return False
            elif version <= self.min_version:
                return False
        if self.max_version is not None:
            if self.is_max_inclusive:
                if version > self.max_version:
                    return False
            elif version >= self.max_version:
                return False
        return True

    @property
    def is_semver2(self) -> bool:
        return any(v is not None and v.is_semver2 for v in (self.min_version, self.max_version))

    def __str__(self) -> str:
        if self.min_version is not None and self.is_min_inclusive and self.max_version is None:
            return str(self.min_version)
        if (
            self.min_version is not None
            and self.min_version == self.max_version
            and self.is_min_inclusive
            and self.is_max_inclusive
        ):
            return f"[{self.min_version}]"
        lower = "[" if self.is_min_inclusive else "("
        upper = "]" if self.is_max_inclusive else ")"
        min_text = str(self.min_version) if self.min_version is not None else ""
        max_text = str(self.max_version) if self.max_version is not None else ""
        return f"{lower}{min_text}, {max_text}{upper}"


class PackageDependency(BaseModel):
    id: str
    version_range: Optional[VersionRange] = None


class DependencySet(BaseModel):
    """Dependencies that apply to one target framework (None = any framework)."""

    target_framework: Optional[str] = None
    dependencies: List[PackageDependency] = Field(default_factory=list)


def parse_version_range(text: str) -> VersionRange:
    """
    Parse a version range in interval notation.

    Raises ``ValueError`` for anything that is not a valid range.
    """
    value = text.strip()
    if not value:
        raise ValueError("Version range is empty")

    if value[0] not in "[(":
        return VersionRange(min_version=SemanticVersion.parse(value), is_min_inclusive=True)

    if len(value) < 3 or value[-1] not in "])":
        raise ValueError(f"'{text}' is not a valid version range")

    is_min_inclusive = value[0] == "["
    is_max_inclusive = value[-1] == "]"
    parts = value[1:-1].split(",")

    if len(parts) == 1:
        # Exact match: only [x] is meaningful.
        if not (is_min_inclusive and is_max_inclusive):
            raise ValueError(f"'{text}' is not a valid version range")
        version = SemanticVersion.parse(parts[0])
        return VersionRange(
            min_version=version,
            is_min_inclusive=True,
            max_version=version,
            is_max_inclusive=True,
        )

    if len(parts) != 2:
        raise ValueError(f"'{text}' is not a valid version range")

    min_text, max_text = parts[0].strip(), parts[1].strip()
    min_version = SemanticVersion.parse(min_text) if min_text else None
    max_version = SemanticVersion.parse(max_text) if max_text else None

    if min_version is not None and max_version is not None:
        if min_version > max_version:
            raise ValueError(f"'{text}' has a lower bound above its upper bound")
        if min_version == max_version and not (is_min_inclusive and is_max_inclusive):
            raise ValueError(f"'{text}' is an empty version range")

    return VersionRange(
        min_version=min_version,
        is_min_inclusive=is_min_inclusive and min_version is not None,
        max_version=max_version,
        is_max_inclusive=is_max_inclusive and max_version is not None,
    )


def parse_dependencies(raw: Optional[str]) -> List[DependencySet]:
    """
    Group the entries of a raw dependencies string by target framework.

    Groups keep the order in which their framework first appears.
    """
    if not raw or not raw.strip():
        return []

    groups: Dict[Optional[str], DependencySet] = {}
    for entry in raw.split(DEPENDENCY_SEPARATOR):
        entry = entry.strip()
        if not entry:
            continue

        parts = entry.split(":")
        if len(parts) > 3:
            raise ValueError(f"Malformed dependency entry: '{entry}'")

        dependency_id = parts[0].strip()
        range_text = parts[1].strip() if len(parts) > 1 else ""
        framework = parts[2].strip() if len(parts) > 2 else ""
        target_framework = framework or None

        if target_framework not in groups:
            groups[target_framework] = DependencySet(target_framework=target_framework)
        group = groups[target_framework]
        if not dependency_id:
            if range_text:
                raise ValueError(f"Dependency entry has a version range but no id: '{entry}'")
            continue

        version_range = parse_version_range(range_text) if range_text else None
        group.dependencies.append(PackageDependency(id=dependency_id, version_range=version_range))

    return list(groups.values())


def format_dependencies(dependency_sets: Iterable[DependencySet]) -> str:
    """Build the raw dependencies string for a list of dependency sets."""
    entries: List[str] = []
    for dependency_set in dependency_sets:
        framework = dependency_set.target_framework or ""
        if not dependency_set.dependencies:
            entries.append(f"::{framework}")
            continue
        for dependency in dependency_set.dependencies:
            version_range = str(dependency.version_range) if dependency.version_range else ""
            entries.append(f"{dependency.id}:{version_range}:{framework}")
    return DEPENDENCY_SEPARATOR.join(entries)


def parse_supported_frameworks(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [name.strip() for name in raw.split(FRAMEWORK_SEPARATOR) if name.strip()]


def format_supported_frameworks(frameworks: Iterable[str]) -> str:
    return FRAMEWORK_SEPARATOR.join(name.strip() for name in frameworks if name.strip())

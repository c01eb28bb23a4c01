"""
Pydantic models for package metadata.

:class:`ServerPackage` is the metadata snapshot of one package as held by the
package store and written to the package cache file. Python attributes use
snake_case; the persisted keys are the PascalCase aliases declared on each
field, and those keys are a stable, case-sensitive contract.

Collections derived from the raw ``Dependencies`` and ``SupportedFrameworks``
strings are exposed as read-only properties. They are recomputed on every
access and are never part of the persisted form.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Annotated, List, Optional

from pydantic import (
    AfterValidator,
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
)

from package_feed.domain.dependencies import (
    DependencySet,
    parse_dependencies,
    parse_supported_frameworks,
)
from package_feed.domain.semver import SemanticVersion
from package_feed.domain.uri import AbsoluteUri


# Persisted keys of the URI-valued fields.
URI_FIELDS = ("IconUrl", "LicenseUrl", "ProjectUrl", "ReportAbuseUrl")


def has_whole_minute_offset(value: datetime) -> bool:
    offset = value.utcoffset()
    return offset is None or offset % timedelta(minutes=1) == timedelta(0)


def _check_offset(value: datetime) -> datetime:
    # ISO 8601 offsets stop at minutes; anything finer would not read back.
    if not has_whole_minute_offset(value):
        raise ValueError(f"UTC offset {value.utcoffset()} is not a whole number of minutes")
    return value


TimestampWithOffset = Annotated[AwareDatetime, AfterValidator(_check_offset)]


class ServerPackage(BaseModel):
    """
    Metadata snapshot of a single package version.

    Persisted in: <DATA_DIR>/packages.json (one object per package)
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    # Identity
    id: StrictStr = Field(
        alias="Id",
        description="Package identifier.",
    )
    version: SemanticVersion = Field(
        alias="Version",
        description="Package version, kept in the spelling it was published with.",
    )

    # Descriptive text
    title: StrictStr = Field(default="", alias="Title", description="Human-friendly title.")
    authors: List[StrictStr] = Field(
        default_factory=list,
        alias="Authors",
        description="Package authors, in the order the package lists them.",
    )
    owners: List[StrictStr] = Field(
        default_factory=list,
        alias="Owners",
        description="Package owners, in the order the package lists them.",
    )

    # Links
    icon_url: Optional[AbsoluteUri] = Field(default=None, alias="IconUrl")
    license_url: Optional[AbsoluteUri] = Field(default=None, alias="LicenseUrl")
    project_url: Optional[AbsoluteUri] = Field(default=None, alias="ProjectUrl")

    require_license_acceptance: StrictBool = Field(
        default=False,
        alias="RequireLicenseAcceptance",
        description="If True, the license must be accepted before installing.",
    )
    development_dependency: StrictBool = Field(
        default=False,
        alias="DevelopmentDependency",
        description="If True, the package is only needed at development time.",
    )
    description: StrictStr = Field(default="", alias="Description")
    summary: StrictStr = Field(default="", alias="Summary")
    release_notes: StrictStr = Field(default="", alias="ReleaseNotes")
    language: StrictStr = Field(default="", alias="Language")
    tags: StrictStr = Field(
        default="",
        alias="Tags",
        description="Space-delimited tags, stored as published.",
    )
    copyright: StrictStr = Field(default="", alias="Copyright")
    min_client_version: Optional[SemanticVersion] = Field(
        default=None,
        alias="MinClientVersion",
        description="Oldest client able to consume the package. None when unrestricted.",
    )
    report_abuse_url: Optional[AbsoluteUri] = Field(default=None, alias="ReportAbuseUrl")

    # Feed statistics and listing state
    download_count: StrictInt = Field(default=0, alias="DownloadCount")
    semver1_is_absolute_latest: StrictBool = Field(
        default=False,
        alias="SemVer1IsAbsoluteLatest",
        description="Latest version, prereleases included, for SemVer 1.0.0 clients.",
    )
    semver1_is_latest: StrictBool = Field(
        default=False,
        alias="SemVer1IsLatest",
        description="Latest stable version for SemVer 1.0.0 clients.",
    )
    semver2_is_absolute_latest: StrictBool = Field(
        default=False,
        alias="SemVer2IsAbsoluteLatest",
        description="Latest version, prereleases included, for SemVer 2.0.0 clients.",
    )
    semver2_is_latest: StrictBool = Field(
        default=False,
        alias="SemVer2IsLatest",
        description="Latest stable version for SemVer 2.0.0 clients.",
    )
    listed: StrictBool = Field(
        default=False,
        alias="Listed",
        description="If False, the package is hidden from search but still installable.",
    )

    # Raw derived-collection sources
    dependencies: StrictStr = Field(
        default="",
        alias="Dependencies",
        description="Raw dependencies string ('id:range:framework|...').",
    )
    supported_frameworks: StrictStr = Field(
        default="",
        alias="SupportedFrameworks",
        description="Raw '|'-separated list of supported target frameworks.",
    )

    # Package file
    package_size: StrictInt = Field(default=0, alias="PackageSize")
    package_hash: StrictStr = Field(default="", alias="PackageHash")
    package_hash_algorithm: StrictStr = Field(default="", alias="PackageHashAlgorithm")
    last_updated: TimestampWithOffset = Field(
        alias="LastUpdated",
        description="When the package metadata last changed, with its UTC offset.",
    )
    created: TimestampWithOffset = Field(
        alias="Created",
        description="When the package was added to the store, with its UTC offset.",
    )
    full_path: StrictStr = Field(
        default="",
        alias="FullPath",
        description="Location of the package file on disk.",
    )

    @property
    def dependency_sets(self) -> List[DependencySet]:
        return parse_dependencies(self.dependencies)

    @property
    def supported_framework_list(self) -> List[str]:
        return parse_supported_frameworks(self.supported_frameworks)

    @property
    def is_semver2(self) -> bool:
        """True when the version or any dependency range needs SemVer 2.0.0."""
        if self.version.is_semver2:
            return True
        for dependency_set in self.dependency_sets:
            for dependency in dependency_set.dependencies:
                if dependency.version_range is not None and dependency.version_range.is_semver2:
                    return True
        return False

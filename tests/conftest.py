from datetime import datetime, timezone
from typing import List

import pytest

from package_feed.domain.models import ServerPackage
from package_feed.domain.semver import SemanticVersion
from package_feed.domain.uri import AbsoluteUri
from package_feed.storage.json_serializer import JsonPackagesSerializer


def generate_server_packages(count: int) -> List[ServerPackage]:
    now = datetime.now(timezone.utc)
    packages = []
    for i in range(count):
        package = ServerPackage(
            id=f"Package{i}",
            version=SemanticVersion(1, 0, i, 0),
            title=f"Title{i}",
            authors=[f"Author{i}"],
            owners=[f"Owner{i}"],
            icon_url=AbsoluteUri("urn:icon"),
            license_url=AbsoluteUri("urn:license"),
            project_url=AbsoluteUri("urn:project"),
            require_license_acceptance=True,
            development_dependency=True,
            description=f"Description{i}",
            summary=f"Summary{i}",
            release_notes=f"ReleaseNotes{i}",
            language=f"Language{i}",
            tags=f"Tags{i}",
            copyright=f"Copyright{i}",
            min_client_version=None,
            report_abuse_url=AbsoluteUri("urn:abuse"),
            download_count=0,
            semver1_is_absolute_latest=True,
            semver1_is_latest=True,
            semver2_is_absolute_latest=True,
            semver2_is_latest=True,
            listed=True,
            dependencies="",
            supported_frameworks="",
            package_size=1234,
            package_hash=f"Hash{i}",
            package_hash_algorithm=f"HashAlgorithm{i}",
            last_updated=now,
            created=now,
            full_path=f"FullPath{i}",
        )
        # Touch the derived collections the way a store would before saving.
        package.dependency_sets
        package.supported_framework_list
        packages.append(package)
    return packages


@pytest.fixture
def make_packages():
    return generate_server_packages


@pytest.fixture
def serializer() -> JsonPackagesSerializer:
    return JsonPackagesSerializer()

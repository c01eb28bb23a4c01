from datetime import datetime
from typing import Any, List, Tuple

from package_feed.domain.models import ServerPackage
from package_feed.domain.semver import SemanticVersion
from package_feed.domain.uri import AbsoluteUri

# Every persisted attribute of ServerPackage, in persisted order. Derived
# properties are not model fields, so they never show up here.
SERIALIZED_FIELDS: Tuple[str, ...] = tuple(ServerPackage.model_fields)


def same_value(left: Any, right: Any) -> bool:
    """
    Compare two field values the way a round trip must preserve them.

    Versions and URIs must also keep their exact spelling; timestamps must
    keep their UTC offset, not only the instant.
    """
    if isinstance(left, datetime) and isinstance(right, datetime):
        return left == right and left.utcoffset() == right.utcoffset()
    if isinstance(left, (SemanticVersion, AbsoluteUri)) or isinstance(right, (SemanticVersion, AbsoluteUri)):
        return type(left) is type(right) and left == right and str(left) == str(right)
    return left == right


def differing_fields(left: ServerPackage, right: ServerPackage) -> List[str]:
    """Return the names of persisted fields whose values differ."""
    return [
        name
        for name in SERIALIZED_FIELDS
        if not same_value(getattr(left, name), getattr(right, name))
    ]


def packages_equal(left: ServerPackage, right: ServerPackage) -> bool:
    return not differing_fields(left, right)

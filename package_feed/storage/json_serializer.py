"""
JSON package list serializer.

Wire format: a UTF-8 JSON array with one object per package, keyed by the
PascalCase field names of :class:`ServerPackage`. URI fields are strings; a
UNC URI (``//host/share``) is written as ``file:////host/share`` so a reader
that does not know the UNC rule still sees an absolute URI, and is turned
back into ``//host/share`` on the way in.
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from package_feed.domain.models import URI_FIELDS, ServerPackage, has_whole_minute_offset
from package_feed.domain.uri import escape_unc, unescape_unc
from package_feed.storage.errors import EncodingError, ParseError
from package_feed.storage.serializer import PackagesSerializer

logger = logging.getLogger(__name__)


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "<record>"
        problems.append(f"{location}: {item.get('msg')}")
    return "; ".join(problems)


class JsonPackagesSerializer(PackagesSerializer):
    def __init__(self, indent: Optional[int] = None):
        self._indent = indent

    @property
    def indent(self) -> Optional[int]:
        return self._indent

    def encode(self, packages: Iterable[ServerPackage]) -> bytes:
        records = [self._to_record(package) for package in packages]
        try:
            text = json.dumps(records, indent=self._indent, ensure_ascii=False)
            data = text.encode("utf-8")
        except (TypeError, ValueError, UnicodeEncodeError) as exc:
            raise EncodingError(f"Failed to encode package list: {exc}") from exc

        logger.debug("Encoded %d packages (%d bytes)", len(records), len(data))
        return data

    def decode(self, data: Union[bytes, str]) -> List[ServerPackage]:
        if isinstance(data, (bytes, bytearray)):
            try:
                text = bytes(data).decode("utf-8-sig")
            except UnicodeDecodeError as exc:
                raise ParseError(f"Package list is not valid UTF-8: {exc}") from exc
        else:
            text = data

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Package list is not valid JSON: {exc}") from exc

        if not isinstance(raw, list):
            raise ParseError(f"Expected a JSON array of packages, got {type(raw).__name__}")

        packages = [self._from_record(record, index) for index, record in enumerate(raw)]
        logger.debug("Decoded %d packages", len(packages))
        return packages

    def _to_record(self, package: ServerPackage) -> Dict[str, Any]:
        for name in ("last_updated", "created"):
            if not has_whole_minute_offset(getattr(package, name)):
                raise EncodingError(
                    f"Failed to encode package {package.id!r}: {name} has a UTC offset "
                    f"with seconds, which ISO 8601 cannot express"
                )

        try:
            record = package.model_dump(mode="json", by_alias=True)
        except ValueError as exc:
            raise EncodingError(f"Failed to encode package {package.id!r}: {exc}") from exc

        for key in URI_FIELDS:
            if record.get(key) is not None:
                record[key] = escape_unc(record[key])
        return record

    def _from_record(self, record: Any, index: int) -> ServerPackage:
        if not isinstance(record, dict):
            raise ParseError(
                f"Package {index} is a {type(record).__name__}, expected an object",
                record_index=index,
            )

        record = dict(record)
        for key in URI_FIELDS:
            if isinstance(record.get(key), str):
                record[key] = unescape_unc(record[key])

        try:
            return ServerPackage.model_validate(record)
        except ValidationError as exc:
            raise ParseError(
                f"Package {index} is invalid: {_describe_validation_error(exc)}",
                record_index=index,
            ) from exc

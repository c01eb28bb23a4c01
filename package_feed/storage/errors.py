from typing import Optional


class PackageSerializationError(ValueError):
    """Base class for package (de)serialization failures."""


class ParseError(PackageSerializationError):
    """
    The input is not a well-formed package list.

    Raised for malformed JSON, a wrong top-level shape, or a record with a
    missing or mistyped field. ``record_index`` points at the offending
    record when the failure is inside one.
    """

    def __init__(self, message: str, record_index: Optional[int] = None):
        super().__init__(message)
        self.record_index = record_index


class EncodingError(PackageSerializationError):
    """A field value cannot be represented in the persisted form."""

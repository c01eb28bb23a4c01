"""
Package metadata records and their persisted JSON form.

This package is responsible for:
* The ServerPackage record and its typed fields (versions, URIs, timestamps).
* Encoding record lists to JSON bytes and decoding them back unchanged.
* Keeping a record list in a cache file inside the data directory.
"""

__version__ = "0.1.0"

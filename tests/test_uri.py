import copy

import pytest

from package_feed.domain.uri import AbsoluteUri, escape_unc, unescape_unc


def test_unc_uri_is_absolute():
    uri = AbsoluteUri("//testunc/test/a")
    assert uri == "//testunc/test/a"
    assert uri.is_absolute
    assert uri.is_unc
    assert uri.is_file
    assert uri.host == "testunc"
    assert uri.path == "/test/a"


def test_scheme_uris():
    uri = AbsoluteUri("https://example.org/icon.png?size=64")
    assert not uri.is_unc
    assert uri.scheme == "https"
    assert uri.host == "example.org"
    assert uri.query == "size=64"

    assert AbsoluteUri("urn:icon").scheme == "urn"


def test_four_slash_file_uri_is_read_as_unc():
    assert AbsoluteUri("file:////server/share/file.txt") == "//server/share/file.txt"


@pytest.mark.parametrize("text", ["", "images/icon.png", "/absolute/path", "///x", "//", "?query"])
def test_relative_references_are_rejected(text):
    with pytest.raises(ValueError):
        AbsoluteUri(text)


@pytest.mark.parametrize(
    "text",
    ["//host/share", "//host", "https://example.org/a", "file:///C:/packages/a.nupkg", "urn:icon"],
)
def test_escape_unc_round_trip(text):
    assert unescape_unc(escape_unc(text)) == text


def test_escape_unc_only_touches_unc():
    assert escape_unc("//host/share") == "file:////host/share"
    assert escape_unc("https://example.org") == "https://example.org"
    assert unescape_unc("file:///local/path") == "file:///local/path"


def test_copy_keeps_type():
    uri = AbsoluteUri("//testunc/test/a")
    copied = copy.deepcopy(uri)
    assert isinstance(copied, AbsoluteUri)
    assert copied.is_unc


def test_unescape_unc_reads_four_slash_spelling():
    assert unescape_unc("file:////host/share") == "//host/share"
    assert unescape_unc("FILE:////host/share") == "//host/share"
    assert unescape_unc("file://host/share") == "file://host/share"
    assert unescape_unc("file://///host/share") == "file://///host/share"

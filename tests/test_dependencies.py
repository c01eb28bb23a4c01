import pytest

from package_feed.domain.dependencies import (
    DependencySet,
    PackageDependency,
    format_dependencies,
    format_supported_frameworks,
    parse_dependencies,
    parse_supported_frameworks,
    parse_version_range,
)
from package_feed.domain.semver import SemanticVersion


def v(text):
    return SemanticVersion.parse(text)


def test_empty_dependencies():
    assert parse_dependencies("") == []
    assert parse_dependencies(None) == []
    assert parse_dependencies("   ") == []


def test_dependencies_are_grouped_by_framework():
    sets = parse_dependencies("A:1.0:net45|B:[2.0, 3.0):net45|C::|::net40")

    assert [s.target_framework for s in sets] == ["net45", None, "net40"]
    assert [d.id for d in sets[0].dependencies] == ["A", "B"]
    assert sets[1].dependencies[0].id == "C"
    assert sets[1].dependencies[0].version_range is None
    assert sets[2].dependencies == []


def test_entry_without_framework_part():
    sets = parse_dependencies("A:1.0")
    assert sets[0].target_framework is None
    assert sets[0].dependencies[0].version_range.min_version == v("1.0")


@pytest.mark.parametrize("raw", ["A:1.0:net45:extra", ":1.0:net45", "A:not-a-range:net45"])
def test_malformed_dependencies(raw):
    with pytest.raises(ValueError):
        parse_dependencies(raw)


def test_format_dependencies_round_trip():
    sets = [
        DependencySet(
            target_framework="net45",
            dependencies=[PackageDependency(id="A", version_range=parse_version_range("[1.0, 2.0)"))],
        ),
        DependencySet(target_framework="net40"),
        DependencySet(dependencies=[PackageDependency(id="B")]),
    ]

    raw = format_dependencies(sets)

    assert raw == "A:[1.0, 2.0):net45|::net40|B::"
    parsed = parse_dependencies(raw)
    assert [s.target_framework for s in parsed] == ["net45", "net40", None]
    assert [[d.id for d in s.dependencies] for s in parsed] == [["A"], [], ["B"]]
    assert format_dependencies(parsed) == raw


def test_bare_version_is_a_minimum():
    version_range = parse_version_range("1.0")
    assert version_range.is_min_inclusive
    assert version_range.max_version is None
    assert version_range.satisfies(v("1.0"))
    assert version_range.satisfies(v("5.0"))
    assert not version_range.satisfies(v("0.9"))
    assert str(version_range) == "1.0"


def test_interval_ranges():
    version_range = parse_version_range("(1.0,2.0]")
    assert not version_range.satisfies(v("1.0"))
    assert version_range.satisfies(v("1.5"))
    assert version_range.satisfies(v("2.0"))
    assert not version_range.satisfies(v("2.0.1"))
    assert str(version_range) == "(1.0, 2.0]"


def test_exact_range():
    version_range = parse_version_range("[1.2.3]")
    assert version_range.satisfies(v("1.2.3"))
    assert not version_range.satisfies(v("1.2.4"))
    assert str(version_range) == "[1.2.3]"


def test_open_lower_bound():
    version_range = parse_version_range("(,1.0)")
    assert version_range.min_version is None
    assert version_range.satisfies(v("0.1"))
    assert not version_range.satisfies(v("1.0"))


@pytest.mark.parametrize("text", ["", "[", "[1.0", "(1.0)", "[2.0,1.0]", "(1.0,1.0)", "[1.0,2.0,3.0]", "[abc,]"])
def test_invalid_ranges(text):
    with pytest.raises(ValueError):
        parse_version_range(text)


def test_semver2_ranges():
    assert parse_version_range("[1.0.0-beta.1, )").is_semver2
    assert not parse_version_range("[1.0.0-beta, )").is_semver2


def test_supported_frameworks():
    assert parse_supported_frameworks("net40| net45 ||portable-net45+win8") == ["net40", "net45", "portable-net45+win8"]
    assert parse_supported_frameworks("") == []
    assert format_supported_frameworks(["net40", " net45 ", ""]) == "net40|net45"

import pytest

from sharerepair.versioning import compare_versions, parse_version, version_compare


def test_parse_version_splits_numeric_segments() -> None:
    assert parse_version("16.0.0.9") == (16, 0, 0, 9)
    assert parse_version(" 14.0.11 ") == (14, 0, 11)


def test_shorter_versions_are_padded_with_zero() -> None:
    assert compare_versions("16", "16.0.0") == 0
    assert compare_versions("16.0.0.1", "16.0.0") == 1
    assert compare_versions("15.9", "16.0.0") == -1


def test_segments_compare_numerically_not_lexically() -> None:
    assert compare_versions("14.0.11", "14.0.9") == 1
    assert version_compare("9.0.0", "10.0.0", "<")


@pytest.mark.parametrize(
    "left, right, op, expected",
    [
        ("16.0.0", "16.0.0", "<=", True),
        ("16.0.0", "16.0.0", "<", False),
        ("16.0.1", "16.0.0", ">", True),
        ("16.0.1", "16.0.0", ">=", True),
        ("15.0.8", "15.0.8", "==", True),
        ("15.0.8", "15.0.7", "!=", True),
    ],
)
def test_version_compare_operators(left, right, op, expected) -> None:
    assert version_compare(left, right, op) is expected


def test_invalid_version_raises() -> None:
    with pytest.raises(ValueError, match="Invalid version string"):
        parse_version("16.0.beta")


def test_unknown_operator_raises() -> None:
    with pytest.raises(ValueError, match="Unsupported comparison operator"):
        version_compare("1.0", "2.0", "~=")

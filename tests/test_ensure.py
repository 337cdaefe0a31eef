import pytest

from gh_statuses.lib.ensure import InvalidArgument, argument_not_null, argument_not_null_or_empty_string


def test_not_null_accepts_falsy_values():
    argument_not_null(0, "count")
    argument_not_null("", "label")
    argument_not_null([], "items")


def test_not_null_rejects_none():
    with pytest.raises(InvalidArgument) as exc_info:
        argument_not_null(None, "options")
    assert exc_info.value.name == "options"
    assert isinstance(exc_info.value, ValueError)


@pytest.mark.parametrize("value", [None, "", " ", "\t\n"])
def test_not_null_or_empty_string_rejects_blank_values(value):
    with pytest.raises(InvalidArgument, match="reference"):
        argument_not_null_or_empty_string(value, "reference")


def test_not_null_or_empty_string_rejects_non_strings():
    with pytest.raises(InvalidArgument, match="int"):
        argument_not_null_or_empty_string(123, "owner")


def test_not_null_or_empty_string_accepts_text():
    argument_not_null_or_empty_string("octokit.net", "name")
    argument_not_null_or_empty_string("feature/with-slash", "reference")

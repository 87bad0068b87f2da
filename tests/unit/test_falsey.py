import pytest

from layouts import DEFAULT_FALSEY_KEYWORDS, assert_layout, is_falsey


class TestIsFalsey:
    @pytest.mark.parametrize(
        "value",
        [None, False, "", "   ", 0, 0.0, [], {}, ()],
    )
    def test_empty_and_false_values_are_falsey(self, value: object) -> None:
        assert is_falsey(value)

    @pytest.mark.parametrize("keyword", DEFAULT_FALSEY_KEYWORDS)
    def test_default_keywords_are_falsey(self, keyword: str) -> None:
        assert is_falsey(keyword)

    def test_keywords_ignore_case_and_whitespace(self) -> None:
        assert is_falsey("  NoNe ")
        assert is_falsey("FALSE")

    @pytest.mark.parametrize("value", ["base", "yes", 1, -1, 2.5, True, ["a"]])
    def test_other_values_are_truthy(self, value: object) -> None:
        assert not is_falsey(value)

    def test_custom_keywords_replace_defaults(self) -> None:
        assert is_falsey("skip", keywords=("skip",))
        assert not is_falsey("nil", keywords=("skip",))


class TestAssertLayout:
    def test_none_selects_default_layout(self) -> None:
        assert assert_layout(None, "default") == "default"

    def test_true_selects_default_layout(self) -> None:
        assert assert_layout(True, "default") == "default"

    def test_none_without_default_is_none(self) -> None:
        assert assert_layout(None) is None
        assert assert_layout(True) is None

    def test_empty_default_is_treated_as_missing(self) -> None:
        assert assert_layout(None, "") is None

    @pytest.mark.parametrize("value", [False, "", 0, "no", "nil", "null", "none"])
    def test_falsey_values_disable_layout(self, value: object) -> None:
        assert assert_layout(value, "default") is None

    def test_names_are_returned_as_strings(self) -> None:
        assert assert_layout("post", "default") == "post"

    def test_non_string_names_are_stringified(self) -> None:
        assert assert_layout(42, "default") == "42"

    def test_custom_keywords(self) -> None:
        assert assert_layout("off", "default", keywords=("off",)) is None
        assert assert_layout("no", "default", keywords=("off",)) == "no"

import logging

from md_to_storage.info_string import (
    CodeBlockInfo,
    parse_info_string,
    parse_language,
    parse_theme,
    parse_title,
    split_except_on_quotes,
)


def test_language_collapse_and_title():
    info = parse_info_string('python collapse title="Hi"')
    assert info == CodeBlockInfo(language="python", collapse=True, theme="", title="Hi")


def test_collapse_only():
    info = parse_info_string("collapse")
    assert info.language == ""
    assert info.collapse is True


def test_empty_info_string():
    assert parse_info_string("") == CodeBlockInfo()


def test_language_is_empty_when_first_token_is_a_key():
    assert parse_language('title="A" python') == ""
    assert parse_language('theme="Eclipse"') == ""
    assert parse_language("  yaml  ") == "yaml"


def test_collapse_is_a_substring_match():
    assert parse_info_string("text nocollapse").collapse is True
    assert parse_info_string("text").collapse is False


def test_split_except_on_quotes_keeps_quoted_spaces():
    assert split_except_on_quotes('go title="My long title" collapse') == [
        "go",
        'title="My long title"',
        "collapse",
    ]


def test_title_value_is_trimmed():
    assert parse_title('js title="  padded  "') == "padded"


def test_theme_value():
    assert parse_theme('sql theme="Eclipse"') == "Eclipse"


def test_first_qualifying_token_wins():
    assert parse_title('sh title="first" title="second"') == "first"


def test_key_without_equals_is_ignored(caplog):
    logger = logging.getLogger("test.info_string")
    with caplog.at_level(logging.DEBUG, logger="test.info_string"):
        assert parse_title("sh titled", logger) == ""
        assert parse_theme('sh themes theme="Dark"', logger) == "Dark"
    assert "without a value" in caplog.text

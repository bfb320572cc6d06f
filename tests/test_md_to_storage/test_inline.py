from md_to_storage.inline import convert_heading_inline, convert_inline


def test_convert_inline_code_bold_italic():
    text = "Use `code` with **bold** and *italic*."
    assert convert_inline(text) == (
        "Use <code>code</code> with <strong>bold</strong> and <em>italic</em>."
    )


def test_convert_inline_bold_italic_combined():
    assert convert_inline("***both***") == "<strong><em>both</em></strong>"


def test_convert_inline_strikethrough():
    assert convert_inline("~~gone~~") == "<del>gone</del>"


def test_code_span_is_not_formatted_and_is_escaped():
    assert convert_inline("`**a** <b>`") == "<code>**a** &lt;b&gt;</code>"


def test_convert_inline_link():
    assert convert_inline("[Docs](https://example.com/a?b=1&c=2)") == (
        '<a href="https://example.com/a?b=1&amp;c=2">Docs</a>'
    )


def test_convert_inline_image():
    assert convert_inline("![Logo](https://example.com/logo.png)") == (
        '<ac:image ac:alt="Logo"><ri:url ri:value="https://example.com/logo.png" /></ac:image>'
    )


def test_convert_inline_br_tag():
    assert convert_inline("a<br>b") == "a<br />b"


def test_convert_heading_inline_strips_bold():
    assert convert_heading_inline("**Bold** `code`") == "Bold <code>code</code>"


def test_convert_inline_escapes_ampersand_and_less_than():
    assert convert_inline("Tom & Jerry say 1 < 2") == "Tom &amp; Jerry say 1 &lt; 2"


def test_convert_inline_keeps_existing_entities():
    assert convert_inline("&amp; &#169; &#x2014; &nbsp;") == "&amp; &#169; &#x2014; &nbsp;"


def test_convert_inline_keeps_raw_tags_around_escaped_text():
    assert convert_inline("<em>Q&A</em> <!-- note --> a<b") == (
        "<em>Q&amp;A</em> <!-- note --> a&lt;b"
    )


def test_convert_inline_link_text_is_escaped_once():
    assert convert_inline("[Q&A](https://example.com/?a=1&b=2)") == (
        '<a href="https://example.com/?a=1&amp;b=2">Q&amp;A</a>'
    )

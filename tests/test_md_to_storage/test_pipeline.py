from types import SimpleNamespace
import xml.etree.ElementTree as ET

import pytest

from md_to_storage import compile_markdown, prepare_document
from md_to_storage.exceptions import RemoteLookupError


class FakeApi:
    base_url = "https://wiki.example.com"

    def __init__(self, pages=None, fail=False):
        self.pages = pages or {}
        self.fail = fail

    def find_page(self, space, title, kind="page"):
        if self.fail:
            raise RuntimeError("boom")
        return self.pages.get((space, title))


def test_namespaced_tags_survive_compile():
    xhtml = compile_markdown("<ac:rich-text-body>content</ac:rich-text-body>\n")
    assert "<ac:rich-text-body>content</ac:rich-text-body>" in xhtml
    assert "COLON" not in xhtml


def test_namespaced_tags_inside_paragraph_survive_compile():
    xhtml = compile_markdown("Text with <ri:page> inline\n")
    assert xhtml == "<p>Text with <ri:page> inline</p>"


def test_compile_document():
    markdown = """## Install

Run the installer:

```sh collapse
./install.sh
```

- done
"""
    xhtml = compile_markdown(markdown)
    assert xhtml.startswith("<h2>Install</h2><p>Run the installer:</p>")
    assert '<ac:parameter ac:name="language">sh</ac:parameter>' in xhtml
    assert '<ac:parameter ac:name="collapse">true</ac:parameter>' in xhtml
    assert xhtml.endswith("<ul><li><p>done</p></li></ul>")


def test_prepare_document_drops_h1_and_resolves_links(tmp_path):
    (tmp_path / "other.md").write_text(
        "<!-- Space: S -->\n<!-- Title: Other -->\n\nbody\n", encoding="utf-8"
    )
    api = FakeApi(pages={("S", "Other"): SimpleNamespace(relative_link_path="/pages/7")})
    markdown = "# Title\nSee [other](other.md#part) and [missing](missing.md).\n"

    prepared = prepare_document(markdown, tmp_path, api=api, drop_h1=True)
    assert prepared == (
        "See [other](https://wiki.example.com/pages/7#part) and [missing](missing.md).\n"
    )


def test_prepare_document_without_api_leaves_links(tmp_path):
    markdown = "# Title\n[x](a.md)\n"
    assert prepare_document(markdown, tmp_path) == markdown


def test_prepare_document_lookup_failure_raises(tmp_path):
    (tmp_path / "a.md").write_text("<!-- Space: S -->\n<!-- Title: A -->\n", encoding="utf-8")
    with pytest.raises(RemoteLookupError):
        prepare_document("[a](a.md)", tmp_path, api=FakeApi(fail=True))


def test_compiled_text_is_well_formed_xml():
    markdown = """## Q&A

Tom & Jerry say 1 < 2 and 3 > 2.

- [R&D](https://example.com/?a=1&b=2)
- `x < y && y < z`

```
if (a < b && c) {}
```
"""
    xhtml = compile_markdown(markdown)
    assert "<p>Tom &amp; Jerry say 1 &lt; 2 and 3 > 2.</p>" in xhtml
    # storage format prefixes are not declared, so the check wraps them in a namespace
    wrapped = (
        '<root xmlns:ac="urn:ac" xmlns:ri="urn:ri">' + xhtml + "</root>"
    )
    ET.fromstring(wrapped)

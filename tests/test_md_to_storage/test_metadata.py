import logging

import pytest

from md_to_storage.exceptions import MetadataExtractionError
from md_to_storage.metadata import Meta, extract_meta


def test_extract_comment_headers():
    data = (
        b"<!-- Space: DOCS -->\n"
        b"<!-- Parent: Guides -->\n"
        b"<!-- Parent: Setup -->\n"
        b"<!-- Title: Getting started -->\n"
        b"<!-- Label: intro -->\n"
        b"\n"
        b"# Getting started\n"
    )
    meta, remainder = extract_meta(data)
    assert meta == Meta(
        space="DOCS",
        title="Getting started",
        parents=["Guides", "Setup"],
        labels=["intro"],
    )
    assert remainder == b"# Getting started\n"


def test_header_keys_are_case_insensitive():
    meta, _ = extract_meta(b"<!-- space: A -->\n<!-- TITLE: B -->\nbody\n")
    assert (meta.space, meta.title) == ("A", "B")


def test_no_headers_returns_none_and_original_data():
    data = b"# Plain document\n\ntext\n"
    assert extract_meta(data) == (None, data)


def test_unknown_header_is_logged_and_skipped(caplog):
    data = b"<!-- Space: A -->\n<!-- Colour: red -->\n<!-- Title: B -->\nbody\n"
    with caplog.at_level(logging.ERROR):
        meta, remainder = extract_meta(data)
    assert meta.title == "B"
    assert remainder == b"body\n"
    assert "Colour" in caplog.text


def test_headers_without_title_raise():
    with pytest.raises(MetadataExtractionError):
        extract_meta(b"<!-- Space: A -->\nbody\n")


def test_extract_yaml_frontmatter():
    data = (
        "---\n"
        "space: DOCS\n"
        "title: \"Überblick\"\n"
        "labels: [a, b]\n"
        "---\n"
        "\n"
        "Body\n"
    ).encode("utf-8")
    meta, remainder = extract_meta(data)
    assert meta.space == "DOCS"
    assert meta.title == "Überblick"
    assert meta.labels == ["a", "b"]
    assert remainder == b"Body\n"


def test_unrelated_frontmatter_is_not_metadata():
    data = b"---\nauthor: someone\n---\nBody\n"
    assert extract_meta(data) == (None, data)


def test_invalid_yaml_raises():
    with pytest.raises(MetadataExtractionError):
        extract_meta(b"---\ntitle: [oops\n---\n")


def test_non_utf8_raises():
    with pytest.raises(MetadataExtractionError):
        extract_meta(b"\xff\xfe<!-- Title: x -->")

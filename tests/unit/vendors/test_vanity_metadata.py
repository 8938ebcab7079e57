"""Tests for go-import metadata parsing and lookup."""
from __future__ import annotations

from typing import List
from urllib.error import URLError

import pytest

from repovendor.core.vendors import metadata
from repovendor.core.vendors.exceptions import MetadataError
from repovendor.core.vendors.metadata import (
    ImportedRepo,
    fetch_metadata_document,
    match_import,
    parse_imports,
    parse_metadata,
)

PAGE = """<!DOCTYPE html>
<html>
<head>
<meta http-equiv="Content-Type" content="text/html; charset=utf-8"/>
<meta name="go-import" content="example.org/pkg git https://code.example.org/pkg">
<meta name="go-import" content="example.org/pkg/sub hg https://hg.example.org/sub">
<meta name="go-import" content="broken entry">
<meta name="go-source" content="example.org/pkg _ https://code.example.org/pkg/tree">
</head>
<body>go get example.org/pkg</body>
</html>
"""


class TestParseImports:
    def test_collects_well_formed_entries(self) -> None:
        assert parse_imports(PAGE) == [
            ImportedRepo("example.org/pkg", "git", "https://code.example.org/pkg"),
            ImportedRepo("example.org/pkg/sub", "hg", "https://hg.example.org/sub"),
        ]

    def test_page_without_tags(self) -> None:
        assert parse_imports("<html><head></head></html>") == []


class TestMatchImport:
    def test_longest_prefix_wins(self) -> None:
        imports = parse_imports(PAGE)

        assert match_import("example.org/pkg/sub/deep", imports).vcs == "hg"
        assert match_import("example.org/pkg/other", imports).vcs == "git"
        assert match_import("example.org/pkg", imports).vcs == "git"

    def test_prefix_must_end_on_segment(self) -> None:
        imports = [ImportedRepo("example.org/pkg", "git", "https://x")]

        assert match_import("example.org/pkgextra", imports) is None


class TestParseMetadata:
    def test_fetches_https_first(self, monkeypatch) -> None:
        seen: List[str] = []

        def fake_fetch(url: str, timeout: float) -> str:
            seen.append(url)
            return PAGE

        monkeypatch.setattr(metadata, "_fetch", fake_fetch)

        found = parse_metadata("example.org/pkg/sub/x")

        assert found == ImportedRepo("example.org/pkg/sub", "hg", "https://hg.example.org/sub")
        assert seen == ["https://example.org/pkg/sub/x?go-get=1"]

    def test_falls_back_to_http(self, monkeypatch) -> None:
        seen: List[str] = []

        def fake_fetch(url: str, timeout: float) -> str:
            seen.append(url)
            if url.startswith("https://"):
                raise URLError("tls handshake failed")
            return PAGE

        monkeypatch.setattr(metadata, "_fetch", fake_fetch)

        assert parse_metadata("example.org/pkg").url == "https://code.example.org/pkg"
        assert seen == [
            "https://example.org/pkg?go-get=1",
            "http://example.org/pkg?go-get=1",
        ]

    def test_both_schemes_failing(self, monkeypatch) -> None:
        def fake_fetch(url: str, timeout: float) -> str:
            raise URLError("unreachable")

        monkeypatch.setattr(metadata, "_fetch", fake_fetch)

        with pytest.raises(MetadataError) as excinfo:
            fetch_metadata_document("example.org/pkg")

        assert excinfo.value.context["path"] == "example.org/pkg"

    def test_no_matching_tag(self, monkeypatch) -> None:
        monkeypatch.setattr(metadata, "_fetch", lambda url, timeout: PAGE)

        with pytest.raises(MetadataError):
            parse_metadata("other.org/pkg")

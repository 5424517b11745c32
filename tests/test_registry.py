"""Tests for the manifest format registry."""

from pathlib import Path

import pytest

from manifest_graph import SourceRegistry
from manifest_graph.platforms.document import DocumentSource
from manifest_graph.platforms.hls import HlsSource


class TestDetectFormat:
    """Test platform detection for manifest files."""

    def test_hls_signature(self, tmp_path: Path) -> None:
        """Test that #EXTM3U wins regardless of the suffix."""
        path = tmp_path / "playlist.txt"
        path.write_text("#EXTM3U\n#EXT-X-TARGETDURATION:4\n", encoding="utf-8")

        assert SourceRegistry.detect_format(path) == "hls"

    def test_hls_signature_after_bom(self, tmp_path: Path) -> None:
        """Test that a byte order mark does not hide the signature."""
        path = tmp_path / "playlist"
        path.write_text("\ufeff#EXTM3U\n", encoding="utf-8")

        assert SourceRegistry.detect_format(path) == "hls"

    def test_document_signature(self, tmp_path: Path) -> None:
        """Test that a JSON object is a pre-parsed document."""
        path = tmp_path / "main.mpd.out"
        path.write_text('  {"playlists": []}', encoding="utf-8")

        assert SourceRegistry.detect_format(path) == "document"

    def test_suffix_fallback(self, tmp_path: Path) -> None:
        """Test that the suffix decides when no signature matches."""
        hls = tmp_path / "empty.M3U8"
        hls.write_text("", encoding="utf-8")
        document = tmp_path / "empty.json"
        document.write_text("", encoding="utf-8")

        assert SourceRegistry.detect_format(hls) == "hls"
        assert SourceRegistry.detect_format(document) == "document"

    def test_unknown_format(self, tmp_path: Path) -> None:
        """Test that unrecognized files are rejected."""
        path = tmp_path / "notes.txt"
        path.write_text("hello", encoding="utf-8")

        with pytest.raises(ValueError, match="Cannot detect the format"):
            SourceRegistry.detect_format(path)

    def test_unreadable_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises ValueError."""
        with pytest.raises(ValueError, match="Failed to read manifest"):
            SourceRegistry.detect_format(tmp_path / "missing.m3u8")


class TestCreatePipeline:
    """Test pipeline creation by platform name."""

    def test_bundled_platforms_registered(self) -> None:
        """Test that discovery registers both bundled platforms."""
        SourceRegistry.discover_platforms()

        assert SourceRegistry.list_sources() == ["document", "hls"]

    def test_builds_platform_source(self, tmp_path: Path) -> None:
        """Test that the named platform's factory is used."""
        path = tmp_path / "main.m3u8"
        path.write_text("#EXTM3U\n", encoding="utf-8")

        hls = SourceRegistry.create_pipeline("hls", path=path)
        document = SourceRegistry.create_pipeline("document", data={"uri": "https://cdn.example.com/a.mpd"})

        assert isinstance(hls.source, HlsSource)
        assert isinstance(document.source, DocumentSource)

    def test_unknown_source_lists_available(self) -> None:
        """Test the error for unregistered platforms."""
        with pytest.raises(ValueError, match="Available sources: document, hls"):
            SourceRegistry.create_pipeline("smooth")

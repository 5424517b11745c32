"""Tests for the HLS platform."""

from pathlib import Path

import pytest

from manifest_graph import GraphOptions, SourceRegistry
from manifest_graph.core.events import ManifestEvent
from manifest_graph.platforms.hls import HlsSource, apply_tag_mappers, parse_manifest

MAIN_URI = "https://cdn.example.com/live/main.m3u8"

MAIN_MANIFEST = """#EXTM3U
#EXT-X-VERSION:6
#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="aud",NAME="English",LANGUAGE="en",DEFAULT=YES,AUTOSELECT=YES,URI="audio/en.m3u8"
#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="aud",NAME="Deutsch",LANGUAGE="de",DEFAULT=NO,AUTOSELECT=NO,URI="audio/de.m3u8"
#EXT-X-MEDIA:TYPE=SUBTITLES,GROUP-ID="subs",NAME="English",LANGUAGE="en",URI="subs/en.m3u8"
#EXT-X-STREAM-INF:BANDWIDTH=1280000,CODECS="avc1.64001f,mp4a.40.2",RESOLUTION=1280x720,AUDIO="aud",SUBTITLES="subs"
video/720.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=2560000,CODECS="avc1.640028,mp4a.40.2",RESOLUTION=1920x1080,AUDIO="aud",SUBTITLES="subs"
video/1080.m3u8
"""

MEDIA_MANIFEST = """#EXTM3U
#EXT-X-VERSION:3
#EXT-X-TARGETDURATION:6
#EXT-X-MEDIA-SEQUENCE:100
#EXTINF:6.0,
seg100.ts
#EXTINF:5.5,
seg101.ts
#EXT-X-ENDLIST
"""

NO_TARGET_MANIFEST = """#EXTM3U
#EXTINF:4.0,
seg0.ts
#EXTINF:7.5,
seg1.ts
"""

LL_MANIFEST = """#EXTM3U
#EXT-X-VERSION:9
#EXT-X-TARGETDURATION:4
#EXT-X-SERVER-CONTROL:CAN-BLOCK-RELOAD=YES,PART-HOLD-BACK=3.0
#EXT-X-PART-INF:PART-TARGET=1.0
#EXT-X-MEDIA-SEQUENCE:10
#EXTINF:4.0,
seg10.ts
#EXT-X-PART:DURATION=1.0,URI="seg11.0.ts",INDEPENDENT=YES
#EXT-X-PART:DURATION=1.0,URI="seg11.1.ts"
#EXTINF:4.0,
seg11.ts
#EXT-X-PART:DURATION=1.0,URI="seg12.0.ts"
#EXT-X-PRELOAD-HINT:TYPE=PART,URI="seg12.1.ts"
"""


@pytest.fixture
def main_file(tmp_path: Path) -> Path:
    """Main manifest written to a temporary file."""
    path = tmp_path / "main.m3u8"
    path.write_text(MAIN_MANIFEST, encoding="utf-8")
    return path


class TestParseManifest:
    """Test HLS parsing and the defaulting pass."""

    def test_main_manifest(self) -> None:
        """Test variants and renditions of a main manifest."""
        document = parse_manifest(MAIN_MANIFEST)

        assert document.is_main()
        assert len(document.playlists) == 2

        first = document.playlists.at(0)
        assert first.uri == "video/720.m3u8"
        assert first.attributes["BANDWIDTH"] == 1280000
        assert first.attributes["AUDIO"] == "aud"
        assert first.attributes["CODECS"] == "avc1.64001f,mp4a.40.2"

        assert set(document.media_groups) == {"AUDIO", "VIDEO", "CLOSED-CAPTIONS", "SUBTITLES"}
        english = document.media_groups["AUDIO"]["aud"]["English"]
        assert english.uri == "audio/en.m3u8"
        assert english.language == "en"
        assert english.default is True
        assert english.autoselect is True
        assert document.media_groups["AUDIO"]["aud"]["Deutsch"].default is False
        assert document.media_groups["SUBTITLES"]["subs"]["English"].uri == "subs/en.m3u8"

    def test_main_manifest_gets_default_target_duration(self) -> None:
        """Test that a main manifest without segments defaults to 10."""
        warnings: list[ManifestEvent] = []

        document = parse_manifest(MAIN_MANIFEST, onwarn=warnings.append)

        assert document.target_duration == 10
        assert any("targetDuration" in w.message for w in warnings)

    def test_media_manifest(self) -> None:
        """Test segments of a media manifest."""
        warnings: list[ManifestEvent] = []

        document = parse_manifest(MEDIA_MANIFEST, onwarn=warnings.append)

        assert not document.is_main()
        assert document.target_duration == 6
        assert document.media_sequence == 100
        assert document.end_list is True
        assert [s.uri for s in document.segments] == ["seg100.ts", "seg101.ts"]
        assert [s.duration for s in document.segments] == [6.0, 5.5]
        assert warnings == []

    def test_missing_target_duration(self) -> None:
        """Test target duration backfill from segment durations."""
        warnings: list[ManifestEvent] = []

        document = parse_manifest(NO_TARGET_MANIFEST, onwarn=warnings.append)

        assert document.target_duration == 7.5
        assert [w.message for w in warnings] == ["manifest has no targetDuration defaulting to 7.5"]

    def test_low_latency_manifest(self) -> None:
        """Test that LL-HLS fields are kept by default."""
        document = parse_manifest(LL_MANIFEST)

        assert document.part_target_duration == 1.0
        assert document.part_inf == {"partTarget": 1.0}
        assert document.server_control["canBlockReload"] is True
        assert [s.uri for s in document.segments] == ["seg10.ts", "seg11.ts"]
        assert [p.uri for p in document.segments[1].parts] == ["seg11.0.ts", "seg11.1.ts"]
        assert document.segments[1].parts[0].independent is True
        assert document.preload_segment is not None
        assert document.preload_segment.preload_hints[0]["uri"] == "seg12.1.ts"

    def test_low_latency_disabled(self) -> None:
        """Test that every LL-HLS field is removed when disabled."""
        infos: list[ManifestEvent] = []

        document = parse_manifest(LL_MANIFEST, llhls=False, oninfo=infos.append)

        assert document.part_target_duration is None
        assert document.part_inf is None
        assert document.server_control is None
        assert document.preload_segment is None
        assert all(segment.parts is None for segment in document.segments)
        assert any("removed low-latency fields" in event.message for event in infos)

        output = document.to_dict()
        assert "serverControl" not in output
        assert "partInf" not in output
        assert "preloadSegment" not in output

    def test_unsupported_tags_reported(self) -> None:
        """Test that unknown tags produce info events but do not fail parsing."""
        infos: list[ManifestEvent] = []
        text = MEDIA_MANIFEST.replace("#EXT-X-ENDLIST", "#EXT-X-VENDOR-MARKER:ID=7\n#EXT-X-ENDLIST")

        document = parse_manifest(text, oninfo=infos.append)

        assert "Skipping unsupported tag: #EXT-X-VENDOR-MARKER" in [event.message for event in infos]
        assert len(document.segments) == 2

    def test_custom_tags_parser(self) -> None:
        """Test that custom tag parsers see manifest lines."""
        seen = []

        def parser(line, lineno, data, state):
            if line.startswith("#EXT-X-VENDOR-MARKER"):
                seen.append(line)

        text = MEDIA_MANIFEST.replace("#EXT-X-ENDLIST", "#EXT-X-VENDOR-MARKER:ID=7\n#EXT-X-ENDLIST")
        parse_manifest(text, custom_tags_parser=parser)

        assert seen == ["#EXT-X-VENDOR-MARKER:ID=7"]


class TestTagMappers:
    """Test line rewriting before parsing."""

    def test_mapped_line_follows_original(self) -> None:
        """Test that a changed line is inserted after the original."""
        text = "#EXTM3U\n#EXT-X-FOO:1\nseg.ts"

        result = apply_tag_mappers(text, [lambda line: line.replace("FOO", "BAR")])

        assert result.splitlines() == ["#EXTM3U", "#EXT-X-FOO:1", "#EXT-X-BAR:1", "seg.ts"]

    def test_no_mappers_returns_text(self) -> None:
        """Test that text passes through without mappers."""
        assert apply_tag_mappers(MEDIA_MANIFEST, []) == MEDIA_MANIFEST

    def test_mapper_feeds_parser(self) -> None:
        """Test that a mapper can supply a missing tag."""

        def add_target(line: str) -> str:
            if line == "#EXT-X-VERSION:3":
                return "#EXT-X-TARGETDURATION:9"
            return line

        text = MEDIA_MANIFEST.replace("#EXT-X-TARGETDURATION:6\n", "")

        document = parse_manifest(text, tag_mappers=[add_target])

        assert document.target_duration == 9


class TestHlsSource:
    """Test the HLS source adapter."""

    def test_requires_text_or_path(self) -> None:
        """Test that a source needs something to read."""
        with pytest.raises(ValueError, match="required"):
            HlsSource()

    def test_rejects_missing_path(self, tmp_path: Path) -> None:
        """Test that a missing file is rejected."""
        with pytest.raises(ValueError, match="does not exist"):
            HlsSource(path=tmp_path / "missing.m3u8")

    def test_rejects_directory(self, tmp_path: Path) -> None:
        """Test that a directory is rejected."""
        with pytest.raises(ValueError, match="not a file"):
            HlsSource(path=tmp_path)

    def test_text_requires_uri(self) -> None:
        """Test that manifest text needs a URI."""
        with pytest.raises(ValueError, match="URI is required"):
            HlsSource(text=MEDIA_MANIFEST)

    def test_uri_defaults_to_file_uri(self, main_file: Path) -> None:
        """Test the default URI of a file source."""
        source = HlsSource(path=main_file)

        manifests = source.list_manifests()
        assert len(manifests) == 1
        assert manifests[0].uri == main_file.resolve().as_uri()
        assert manifests[0].title == "main.m3u8"

    def test_get_manifest(self, main_file: Path) -> None:
        """Test lookup by URI."""
        source = HlsSource(path=main_file, uri=MAIN_URI)

        assert source.get_manifest(MAIN_URI).uri == MAIN_URI
        with pytest.raises(KeyError):
            source.get_manifest("https://cdn.example.com/other.m3u8")

    def test_manifest_data(self, main_file: Path) -> None:
        """Test that manifest data carries text, document and metadata."""
        source = HlsSource(path=main_file, uri=MAIN_URI)
        manifest = source.list_manifests()[0]

        data = source.get_manifest_data(manifest, GraphOptions())

        assert data.text == MAIN_MANIFEST
        assert data.metadata == {"format": "hls", "is_main": True}
        assert len(data.document.playlists) == 2


class TestHlsPipeline:
    """Test end-to-end normalization through the registry."""

    def test_registered(self) -> None:
        """Test that the platform registers itself."""
        assert "hls" in SourceRegistry.list_sources()

    def test_unknown_source(self) -> None:
        """Test the error for unregistered sources."""
        with pytest.raises(ValueError, match="Unknown source: 'rtmp'"):
            SourceRegistry.create_pipeline("rtmp")

    def test_main_manifest_graph(self, main_file: Path) -> None:
        """Test that a main manifest becomes a resolved graph."""
        pipeline = SourceRegistry.create_pipeline("hls", path=main_file, uri=MAIN_URI)

        document = next(pipeline.generate_documents())

        assert document.uri == MAIN_URI
        assert document.playlists.at(1).resolved_uri == "https://cdn.example.com/live/video/1080.m3u8"
        assert document.playlists.by_id("1-video/1080.m3u8") is document.playlists.at(1)

        english = document.media_groups["AUDIO"]["aud"]["English"]
        assert english.resolved_uri == "https://cdn.example.com/live/audio/en.m3u8"
        nested = english.playlists[0]
        assert nested.id == "0-placeholder-locator-AUDIO-aud-English"
        assert document.playlists.by_uri("audio/en.m3u8") is nested

        subtitles = document.media_groups["SUBTITLES"]["subs"]["English"].playlists[0]
        assert subtitles.resolved_uri == "https://cdn.example.com/live/subs/en.m3u8"

    def test_media_manifest_is_wrapped(self) -> None:
        """Test that a media manifest becomes a single-playlist main document."""
        uri = "https://cdn.example.com/vod/index.m3u8"
        pipeline = SourceRegistry.create_pipeline(
            "hls",
            text=MEDIA_MANIFEST,
            uri=uri,
            options=GraphOptions(context_uri="https://player.example.com/watch"),
        )

        document = next(pipeline.generate_documents())

        assert document.uri == "https://player.example.com/watch"
        assert len(document.playlists) == 1
        playlist = document.playlists.at(0)
        assert document.playlists.by_id(f"0-{uri}") is playlist
        assert document.playlists.by_uri(uri) is playlist
        assert playlist.resolved_uri == uri
        assert len(playlist.segments) == 2
        assert document.media_groups == {"AUDIO": {}, "VIDEO": {}, "CLOSED-CAPTIONS": {}, "SUBTITLES": {}}

    def test_missing_bandwidth_warnings(self) -> None:
        """Test that variants without BANDWIDTH are warned about and kept."""
        text = "#EXTM3U\n#EXT-X-STREAM-INF:CODECS=\"avc1.64001f\"\nlow.m3u8\n#EXT-X-STREAM-INF:CODECS=\"avc1.640028\"\nhigh.m3u8\n"
        warnings: list[ManifestEvent] = []
        pipeline = SourceRegistry.create_pipeline("hls", text=text, uri=MAIN_URI)
        pipeline.onwarn = warnings.append

        document = next(pipeline.generate_documents())

        bandwidth_warnings = [w for w in warnings if "Missing BANDWIDTH" in w.message]
        assert len(bandwidth_warnings) == 2
        assert [p.id for p in document.playlists] == ["0-low.m3u8", "1-high.m3u8"]

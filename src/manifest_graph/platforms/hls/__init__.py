"""HLS platform for the pipeline.

This platform parses HLS manifests (main and media playlists) with the
m3u8 grammar parser.
"""

from pathlib import Path

from .parser import apply_tag_mappers, document_from_m3u8, parse_manifest
from .source import HlsManifest, HlsSource

# Auto-register with the registry
from ...registry import SourceRegistry


def _create_hls_source(path: Path | None = None, **kwargs) -> HlsSource:
    """Factory function for creating HLS sources.

    Args:
        path: Manifest file to read
        **kwargs: text, uri, custom_tags_parser, tag_mappers

    Returns:
        HlsSource instance
    """
    return HlsSource(path=path, **kwargs)


# Auto-register at module import
SourceRegistry.register_factory(
    'hls',
    _create_hls_source,
    suffixes=('.m3u8', '.m3u'),
    signature='#EXTM3U',
)

__all__ = [
    "HlsManifest",
    "HlsSource",
    "apply_tag_mappers",
    "document_from_m3u8",
    "parse_manifest",
]

"""Manifest Graph.

This package normalizes parsed adaptive-streaming manifests (HLS, and
pre-parsed documents such as DASH) into a fully resolved playlist graph:
stable playlist ids, resolved URIs, placeholder URIs for renditions without
one, and backfilled duration fields.
"""

# Core library interface
from .config import GraphOptions
from .pipeline import ManifestPipeline
from .registry import SourceRegistry
from .sources.base import ManifestData, Source, SourceManifest

# Normalization passes
from .transformers import normalize_document, resolve_graph, wrap_as_main

# Core utilities
from .core import (
    ManifestDocument,
    ManifestEvent,
    MediaPlaylist,
    PartialSegment,
    PlaylistTable,
    RenditionDescriptor,
    Segment,
    default_group_id,
    for_each_media_group,
    make_playlist_id,
    validate_graph,
    validate_graph_with_error_details,
)

# CLI interface
from .cli import main, normalize_manifest

__version__ = "0.1.0"

# Auto-discover and register all platforms
SourceRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "GraphOptions",
    "ManifestPipeline",
    "SourceRegistry",
    "Source",
    "SourceManifest",
    "ManifestData",
    # Normalization passes
    "normalize_document",
    "resolve_graph",
    "wrap_as_main",
    "for_each_media_group",
    "make_playlist_id",
    "default_group_id",
    # Data model
    "ManifestDocument",
    "ManifestEvent",
    "MediaPlaylist",
    "PartialSegment",
    "PlaylistTable",
    "RenditionDescriptor",
    "Segment",
    # Validation
    "validate_graph",
    "validate_graph_with_error_details",
    # CLI
    "main",
    "normalize_manifest",
]

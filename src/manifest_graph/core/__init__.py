"""Core data model and helpers for manifest normalization.

This package contains the document types, playlist identity assignment,
media-group traversal and schema validation used by every platform.
"""

from .events import EventSink, ManifestEvent, emit
from .identity import make_playlist_id, placeholder_uri, setup_all_playlists, setup_playlist
from .media_groups import default_group_id, for_each_media_group
from .playlist import is_audio_only, last_parts, resolve_uri
from .types import (
    ManifestDocument,
    MediaPlaylist,
    PartialSegment,
    PlaylistTable,
    RenditionDescriptor,
    Segment,
)
from .validator import validate_graph, validate_graph_with_error_details

__all__ = [
    "EventSink",
    "ManifestDocument",
    "ManifestEvent",
    "MediaPlaylist",
    "PartialSegment",
    "PlaylistTable",
    "RenditionDescriptor",
    "Segment",
    "default_group_id",
    "emit",
    "for_each_media_group",
    "is_audio_only",
    "last_parts",
    "make_playlist_id",
    "placeholder_uri",
    "resolve_uri",
    "setup_all_playlists",
    "setup_playlist",
    "validate_graph",
    "validate_graph_with_error_details",
]
